from __future__ import annotations

import asyncio
import logging
from typing import Callable, Optional

from app.clients.geolocation import GeolocationProvider, PositionOptions
from app.core.errors import GeolocationError
from app.schemas.weather_schemas import LocationQuery

logger = logging.getLogger(__name__)


class LocationResolver:
    """
    把“定位能力”变成一个 LocationQuery：

    - 有定位能力：先进入 Loading，再限时请求当前位置；成功 -> 经纬度查询
    - 拒绝 / 不可用 / 超时：静默回退到默认城市（不是错误状态）
    - 没有定位能力：直接回退到默认城市
    """

    def __init__(
        self,
        default_city: str = "Kathmandu",
        options: Optional[PositionOptions] = None,
    ) -> None:
        self.default_city = default_city
        self.options = options or PositionOptions()

    def fallback(self) -> LocationQuery:
        return LocationQuery.for_city(self.default_city)

    async def resolve(
        self,
        geolocation: Optional[GeolocationProvider],
        on_loading: Optional[Callable[[], None]] = None,
    ) -> LocationQuery:
        if geolocation is None:
            logger.info("geolocation unavailable, using default city %s", self.default_city)
            return self.fallback()

        if on_loading is not None:
            on_loading()

        try:
            coords = await asyncio.wait_for(
                geolocation.get_current_position(self.options),
                timeout=self.options.timeout,
            )
        except asyncio.TimeoutError:
            logger.info("geolocation timed out after %ss, using default city", self.options.timeout)
            return self.fallback()
        except GeolocationError as e:
            logger.info("geolocation failed (%s), using default city", e)
            return self.fallback()

        return LocationQuery.for_coordinates(coords.latitude, coords.longitude)
