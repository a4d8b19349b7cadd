"""定位能力（geolocation capability）

浏览器里是 navigator.geolocation；服务端拿不到设备定位，只能由调用方上报坐标，
所以这里只定义一个接口 + 两种实现：
- ReportedGeolocation：调用方（浏览器页面 / 脚本参数）给出的坐标
- 不可用时直接传 None，由 LocationResolver 回退到默认城市
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from app.core.errors import GeolocationError


@dataclass(frozen=True)
class PositionOptions:
    timeout: float = 5.0
    enable_high_accuracy: bool = True
    maximum_age: float = 0.0


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


class GeolocationProvider(Protocol):
    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        """返回当前位置；拒绝 / 不可用时抛 GeolocationError。"""
        ...


class ReportedGeolocation:
    def __init__(self, latitude: Optional[float], longitude: Optional[float]) -> None:
        self.latitude = latitude
        self.longitude = longitude

    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        if self.latitude is None or self.longitude is None:
            raise GeolocationError("position unavailable")
        return Coordinates(latitude=self.latitude, longitude=self.longitude)


class DeniedGeolocation:
    """用户拒绝授权时的行为（也用于测试）。"""

    async def get_current_position(self, options: PositionOptions) -> Coordinates:
        raise GeolocationError("permission denied")
