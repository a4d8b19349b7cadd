# app/clients/weather_clients.py
from __future__ import annotations

import logging

import httpx

from app.schemas.weather_schemas import LocationQuery

logger = logging.getLogger(__name__)

CURRENT_WEATHER_PATH = "/data/2.5/weather"


class OpenWeatherClient:
    """
    OpenWeatherMap “当前天气”接口的 HTTP 访问层

    - api_key 由调用方显式传入，这里不读环境变量。
    - 只负责发请求，不解释状态码；传输层异常（httpx.TransportError）原样抛出，由上层分类。
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: str = "https://api.openweathermap.org",
    ) -> None:
        if not api_key:
            raise ValueError("OpenWeatherMap API key is required")
        self.http_client = http_client
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}{CURRENT_WEATHER_PATH}"

    def build_params(self, query: LocationQuery) -> dict:
        # 参数顺序与 provider 文档一致：q / lat,lon 在前，appid 最后
        params = dict(query.to_params())
        params["appid"] = self.api_key
        return params

    async def get_current_weather(self, query: LocationQuery) -> httpx.Response:
        logger.debug("GET %s (%s)", self.endpoint, query.describe())
        return await self.http_client.get(self.endpoint, params=self.build_params(query))
