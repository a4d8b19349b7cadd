"""
Presenter：ViewState -> 展示槽位（纯函数）

同一个状态渲染两次，结果完全相同；写入具体展示介质交给 SlotWriter。
"""
from __future__ import annotations

import html
from enum import Enum
from typing import Dict, Optional, Union

from app.core.errors import GENERIC_ERROR_MESSAGE
from app.schemas.weather_schemas import (
    ErrorState,
    IdleState,
    LoadedState,
    LoadingState,
    ViewState,
    WeatherReading,
)
from app.utils.formatting import country_name, format_observation_time, kelvin_to_celsius
from app.views.adapters import SlotWriter


class Slot(str, Enum):
    CITY = "city"
    DATE = "date"
    CONDITION = "condition"
    ICON = "icon"
    TEMPERATURE = "temperature"
    MIN_TEMPERATURE = "min_temperature"
    MAX_TEMPERATURE = "max_temperature"
    FEELS_LIKE = "feels_like"
    HUMIDITY = "humidity"
    WIND = "wind"
    PRESSURE = "pressure"


# 内容是 HTML 片段的槽位，其余都是纯文本
MARKUP_SLOTS = frozenset({Slot.ICON.value})

DEGREE_CELSIUS = "°C"
PLACEHOLDER_TEMPERATURE = f"--{DEGREE_CELSIUS}"
SPINNER_ICON = '<i class="fa-solid fa-spinner fa-spin"></i>'
WARNING_ICON = '<i class="fa-solid fa-exclamation-triangle"></i>'

Slots = Dict[str, str]


def _number(value: Union[int, float]) -> str:
    # 65.0 -> "65"，3.05 -> "3.05"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _temperature(kelvin: float) -> str:
    return f"{kelvin_to_celsius(kelvin)}{DEGREE_CELSIUS}"


class WeatherPresenter:
    def __init__(
        self,
        locale: str = "en_US",
        timezone: str = "UTC",
        icon_base_url: str = "https://openweathermap.org/img/wn",
    ) -> None:
        self.locale = locale
        self.timezone = timezone
        self.icon_base_url = icon_base_url.rstrip("/")

    def icon_url(self, icon: str) -> str:
        return f"{self.icon_base_url}/{icon}@2x.png"

    def render(self, state: ViewState) -> Slots:
        if isinstance(state, LoadingState):
            return self._loading()
        if isinstance(state, ErrorState):
            return self._error(state.message)
        if isinstance(state, LoadedState):
            return self._loaded(state.reading)
        if isinstance(state, IdleState):
            return {}
        raise TypeError(f"unknown view state: {state!r}")

    def apply(self, state: ViewState, writer: SlotWriter) -> Slots:
        slots = self.render(state)
        for name, value in slots.items():
            writer.write(name, value)
        return slots

    @staticmethod
    def _loading() -> Slots:
        return {
            Slot.CITY.value: "Loading...",
            Slot.DATE.value: "",
            Slot.CONDITION.value: "Fetching data",
            Slot.ICON.value: SPINNER_ICON,
            Slot.TEMPERATURE.value: PLACEHOLDER_TEMPERATURE,
        }

    @staticmethod
    def _error(message: Optional[str]) -> Slots:
        return {
            Slot.CITY.value: "Error!",
            Slot.DATE.value: "",
            Slot.CONDITION.value: message or GENERIC_ERROR_MESSAGE,
            Slot.ICON.value: WARNING_ICON,
            Slot.TEMPERATURE.value: PLACEHOLDER_TEMPERATURE,
            Slot.MIN_TEMPERATURE.value: PLACEHOLDER_TEMPERATURE,
            Slot.MAX_TEMPERATURE.value: PLACEHOLDER_TEMPERATURE,
            Slot.FEELS_LIKE.value: PLACEHOLDER_TEMPERATURE,
            Slot.HUMIDITY.value: "--%",
            Slot.WIND.value: "-- m/s",
            Slot.PRESSURE.value: "-- hPa",
        }

    def _loaded(self, reading: WeatherReading) -> Slots:
        city = reading.city
        if reading.countryCode:
            city = f"{city}, {country_name(reading.countryCode, self.locale)}"

        date = ""
        if reading.observedAt is not None:
            date = format_observation_time(reading.observedAt, self.locale, self.timezone)

        icon = '<img src="{src}" alt="{alt}">'.format(
            src=html.escape(self.icon_url(reading.icon), quote=True),
            alt=html.escape(reading.description, quote=True),
        )

        wind = "--" if reading.windSpeed is None else _number(reading.windSpeed)

        return {
            Slot.CITY.value: city,
            Slot.DATE.value: date,
            Slot.CONDITION.value: reading.condition,
            Slot.ICON.value: icon,
            Slot.TEMPERATURE.value: _temperature(reading.temperature),
            Slot.MIN_TEMPERATURE.value: _temperature(reading.tempMin),
            Slot.MAX_TEMPERATURE.value: _temperature(reading.tempMax),
            Slot.FEELS_LIKE.value: _temperature(reading.feelsLike),
            Slot.HUMIDITY.value: f"{_number(reading.humidity)}%",
            Slot.WIND.value: f"{wind} m/s",
            Slot.PRESSURE.value: f"{_number(reading.pressure)} hPa",
        }
