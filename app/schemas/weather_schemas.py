# app/schemas/weather_schemas.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.errors import WeatherErrorKind

Number = Union[int, float]


# -------- 查询：城市名 或 经纬度，二选一 --------

class LocationQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: Optional[str] = None
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lon: Optional[float] = Field(default=None, ge=-180, le=180)

    @model_validator(mode="after")
    def _exactly_one_form(self) -> "LocationQuery":
        has_city = self.city is not None
        has_coords = self.lat is not None or self.lon is not None
        if has_city and has_coords:
            raise ValueError("either city or lat/lon, not both")
        if has_coords and (self.lat is None or self.lon is None):
            raise ValueError("lat and lon must be given together")
        if not has_city and not has_coords:
            raise ValueError("city or lat/lon is required")
        if has_city and not self.city.strip():
            raise ValueError("city must not be blank")
        return self

    @classmethod
    def for_city(cls, city: str) -> "LocationQuery":
        return cls(city=city.strip())

    @classmethod
    def for_coordinates(cls, lat: float, lon: float) -> "LocationQuery":
        return cls(lat=lat, lon=lon)

    @property
    def is_coordinates(self) -> bool:
        return self.lat is not None

    def to_params(self) -> Dict[str, Union[str, float]]:
        """provider 的查询参数（不含 appid）。"""
        if self.is_coordinates:
            return {"lat": self.lat, "lon": self.lon}
        return {"q": self.city}

    def describe(self) -> str:
        if self.is_coordinates:
            return f"lat={self.lat},lon={self.lon}"
        return f"city={self.city}"


# -------- OpenWeatherMap 原始结构（只声明用到的字段） --------

class OpenWeatherMain(BaseModel):
    temp: float
    temp_min: float
    temp_max: float
    feels_like: float
    humidity: Number
    pressure: Number


class OpenWeatherCondition(BaseModel):
    id: Optional[int] = None
    main: str
    description: str
    icon: str


class OpenWeatherSys(BaseModel):
    country: Optional[str] = None


class OpenWeatherWind(BaseModel):
    speed: Optional[Number] = None


class OpenWeatherPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    main: Optional[OpenWeatherMain] = None
    weather: Optional[List[OpenWeatherCondition]] = None
    name: str = ""
    sys: OpenWeatherSys = Field(default_factory=OpenWeatherSys)
    wind: OpenWeatherWind = Field(default_factory=OpenWeatherWind)
    dt: Optional[int] = None

    @property
    def is_complete(self) -> bool:
        # main 和 weather[0] 缺一不可
        return self.main is not None and bool(self.weather)


class WeatherReading(BaseModel):
    """一次成功请求解析出的读数。温度为 provider 单位（开尔文）。"""

    model_config = ConfigDict(frozen=True)

    city: str
    countryCode: Optional[str] = None
    temperature: float
    tempMin: float
    tempMax: float
    feelsLike: float
    humidity: Number
    pressure: Number
    windSpeed: Optional[Number] = None
    conditionId: Optional[int] = None
    condition: str
    description: str
    icon: str
    observedAt: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: OpenWeatherPayload) -> "WeatherReading":
        if not payload.is_complete:
            raise ValueError("payload is missing main or weather[0]")
        main = payload.main
        weather0 = payload.weather[0]
        return cls(
            city=payload.name,
            countryCode=payload.sys.country,
            temperature=main.temp,
            tempMin=main.temp_min,
            tempMax=main.temp_max,
            feelsLike=main.feels_like,
            humidity=main.humidity,
            pressure=main.pressure,
            windSpeed=payload.wind.speed,
            conditionId=weather0.id,
            condition=weather0.main,
            description=weather0.description,
            icon=weather0.icon,
            observedAt=payload.dt,
        )


@dataclass(frozen=True)
class FetchResult:
    reading: Optional[WeatherReading] = None
    error: Optional[WeatherErrorKind] = None

    def __post_init__(self) -> None:
        if (self.reading is None) == (self.error is None):
            raise ValueError("FetchResult needs exactly one of reading / error")

    @classmethod
    def success(cls, reading: WeatherReading) -> "FetchResult":
        return cls(reading=reading)

    @classmethod
    def failure(cls, error: WeatherErrorKind) -> "FetchResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.reading is not None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None


# -------- 视图状态 --------

@dataclass(frozen=True)
class IdleState:
    name: str = "idle"


@dataclass(frozen=True)
class LoadingState:
    name: str = "loading"


@dataclass(frozen=True)
class LoadedState:
    reading: WeatherReading
    name: str = "loaded"


@dataclass(frozen=True)
class ErrorState:
    message: Optional[str] = None
    kind: Optional[WeatherErrorKind] = None
    name: str = "error"


ViewState = Union[IdleState, LoadingState, LoadedState, ErrorState]


def state_from_result(result: FetchResult) -> ViewState:
    if result.ok:
        return LoadedState(reading=result.reading)
    return ErrorState(message=result.message, kind=result.error)


# -------- 对外响应 --------

class WeatherViewResponse(BaseModel):
    success: bool
    message: str
    state: str
    errorKind: Optional[WeatherErrorKind] = None
    slots: Dict[str, str]
    data: Optional[WeatherReading] = None
    timestamp: datetime
