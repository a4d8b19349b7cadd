# app/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.health import router as health_router
from app.api.weather import router as weather_router
from app.core.config import Settings, get_settings
from app.core.errors import http_exception_handler, validation_exception_handler
from app.middlewares.logging import LoggingMiddleware
from app.middlewares.request_id import request_id_middleware


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    settings / transport 仅用于测试注入；默认从环境变量读取配置，走真实网络。
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # 应用启动：配置只在这里读取一次，然后显式传给各个组件
        app.state.settings = settings or get_settings()
        client_kwargs = {"timeout": app.state.settings.http_timeout_seconds}
        if transport is not None:
            client_kwargs["transport"] = transport
        http_client = httpx.AsyncClient(**client_kwargs)
        app.state.http_client = http_client
        yield
        # 应用关闭：释放 http client
        await http_client.aclose()

    app = FastAPI(
        title="Weather View",
        lifespan=lifespan,
    )

    # middleware
    app.middleware("http")(request_id_middleware)
    app.add_middleware(LoggingMiddleware)

    # exception handlers
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # routers
    app.include_router(weather_router)
    app.include_router(health_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "message": "FastAPI is running!"}

    return app


app = create_app()
