# app/services/weather_service.py
from __future__ import annotations

import logging

import httpx

from app.clients.weather_clients import OpenWeatherClient
from app.core.errors import WeatherErrorKind, classify_status
from app.schemas.weather_schemas import (
    FetchResult,
    LocationQuery,
    OpenWeatherPayload,
    WeatherReading,
)

logger = logging.getLogger(__name__)


def _parse_reading(resp: httpx.Response) -> WeatherReading:
    # 非 JSON / 结构不对 / 缺 main 或 weather[0] 都会抛 ValueError（pydantic 的 ValidationError 也是）
    payload = OpenWeatherPayload.model_validate(resp.json())
    return WeatherReading.from_payload(payload)


class WeatherService:
    """
    一次查询 = 一次 GET，失败按 WeatherErrorKind 分类后作为返回值，不重试、不抛出。
    """

    def __init__(self, openweather_client: OpenWeatherClient) -> None:
        self.openweather_client = openweather_client

    async def fetch(self, query: LocationQuery) -> FetchResult:
        try:
            resp = await self.openweather_client.get_current_weather(query)
        except httpx.DecodingError as e:
            # 响应体解码失败（比如 gzip 损坏）：连接是通的，数据不可用。DecodingError 也是 RequestError，要放在前面
            logger.warning("OpenWeatherMap body could not be decoded (%s): %s", query.describe(), e)
            return FetchResult.failure(WeatherErrorKind.INVALID_DATA)
        except httpx.RequestError as e:
            logger.warning("OpenWeatherMap request failed (%s): %s", query.describe(), e)
            return FetchResult.failure(WeatherErrorKind.NETWORK_ERROR)

        kind = classify_status(resp.status_code)
        if kind is not None:
            logger.warning(
                "OpenWeatherMap returned %s for %s -> %s",
                resp.status_code,
                query.describe(),
                kind.value,
            )
            return FetchResult.failure(kind)

        try:
            reading = _parse_reading(resp)
        except ValueError as e:
            logger.warning("OpenWeatherMap payload rejected (%s): %s", query.describe(), e)
            return FetchResult.failure(WeatherErrorKind.INVALID_DATA)

        return FetchResult.success(reading)
