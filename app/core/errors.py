from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class WeatherErrorKind(str, Enum):
    """一次天气请求的失败分类（不会重试）。"""

    CITY_NOT_FOUND = "city_not_found"
    INVALID_API_KEY = "invalid_api_key"
    HTTP_ERROR = "http_error"
    INVALID_DATA = "invalid_data"
    NETWORK_ERROR = "network_error"

    @property
    def message(self) -> str:
        return ERROR_MESSAGES[self]


ERROR_MESSAGES = {
    WeatherErrorKind.CITY_NOT_FOUND: "City not found. Please try again.",
    WeatherErrorKind.INVALID_API_KEY: "API key invalid.",
    WeatherErrorKind.HTTP_ERROR: "Failed to fetch weather data.",
    WeatherErrorKind.INVALID_DATA: "Invalid data received.",
    WeatherErrorKind.NETWORK_ERROR: "Network error. Check your connection.",
}

# 错误状态没有消息时的兜底文案
GENERIC_ERROR_MESSAGE = "Unable to fetch weather data"


def classify_status(status_code: int) -> WeatherErrorKind | None:
    if 200 <= status_code < 300:
        return None
    if status_code == 404:
        return WeatherErrorKind.CITY_NOT_FOUND
    if status_code == 401:
        return WeatherErrorKind.INVALID_API_KEY
    return WeatherErrorKind.HTTP_ERROR


class GeolocationError(RuntimeError):
    """定位被拒绝 / 不可用。调用方应回退到默认城市，而不是进入错误状态。"""


def _now():
    return datetime.now(timezone.utc).isoformat()


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "message": exc.detail,
            "path": str(request.url.path),
            "requestId": getattr(request.state, "request_id", None),
            "timestamp": _now(),
        },
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "Invalid request parameters",
            "errors": jsonable_encoder(exc.errors()),
            "path": str(request.url.path),
            "requestId": getattr(request.state, "request_id", None),
            "timestamp": _now(),
        },
    )
