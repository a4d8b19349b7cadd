# app/tests/conftest.py
from __future__ import annotations

import copy
import json

import httpx
import pytest
import pytest_asyncio
from asgi_lifespan import LifespanManager

from app.clients.weather_clients import OpenWeatherClient
from app.core.config import Settings
from app.main import create_app
from app.services.weather_service import WeatherService

API_KEY = "test-key"

SAMPLE_PAYLOAD = {
    "coord": {"lon": 85.3167, "lat": 27.7167},
    "weather": [{"id": 802, "main": "Clouds", "description": "scattered clouds", "icon": "03d"}],
    "main": {
        "temp": 300.15,
        "feels_like": 301.2,
        "temp_min": 298.7,
        "temp_max": 302.04,
        "pressure": 1012,
        "humidity": 65,
    },
    "visibility": 10000,
    "wind": {"speed": 3.6, "deg": 240},
    "clouds": {"all": 40},
    "dt": 1700000000,
    "sys": {"country": "NP", "sunrise": 1699922000, "sunset": 1699961000},
    "timezone": 20700,
    "name": "Kathmandu",
    "cod": 200,
}


def make_payload(**overrides) -> dict:
    """SAMPLE_PAYLOAD 的深拷贝；值为 None 的键会被删掉（用来模拟缺字段）。"""
    payload = copy.deepcopy(SAMPLE_PAYLOAD)
    for key, value in overrides.items():
        if value is None:
            payload.pop(key, None)
        else:
            payload[key] = value
    return payload


class FakeOpenWeather:
    """
    假的 OpenWeatherMap：
    - 记录收到的每个请求
    - 默认返回 200 + SAMPLE_PAYLOAD（name 跟随 q 参数）
    - 可以指定 status / body / 抛出的传输层异常
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.body: object = None
        self.error: Exception | None = None

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.body is not None:
            body = self.body
        elif self.status_code == 200:
            body = make_payload(name=request.url.params.get("q") or SAMPLE_PAYLOAD["name"])
        else:
            body = {"cod": str(self.status_code), "message": "error"}
        if isinstance(body, (dict, list)):
            return httpx.Response(self.status_code, content=json.dumps(body).encode(),
                                  headers={"content-type": "application/json"})
        return httpx.Response(self.status_code, text=str(body))

    @property
    def urls(self) -> list[str]:
        return [str(r.url) for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)


@pytest.fixture
def provider() -> FakeOpenWeather:
    return FakeOpenWeather()


@pytest.fixture
def settings() -> Settings:
    return Settings(OPENWEATHER_API_KEY=API_KEY, _env_file=None)


@pytest_asyncio.fixture
async def weather_service(provider):
    async with httpx.AsyncClient(transport=provider.transport()) as http_client:
        yield WeatherService(OpenWeatherClient(http_client, api_key=API_KEY))


@pytest_asyncio.fixture
async def client(provider, settings):
    """
    提供一个可用于 async 测试的 HTTP 客户端：
    - 触发 FastAPI lifespan（startup/shutdown）
    - 出站请求全部走 FakeOpenWeather
    """
    app = create_app(settings=settings, transport=provider.transport())
    async with LifespanManager(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(
            transport=transport,
            base_url="http://test",
        ) as ac:
            yield ac
