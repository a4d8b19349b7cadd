# app/api/weather.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from app.clients.geolocation import GeolocationProvider, PositionOptions, ReportedGeolocation
from app.clients.weather_clients import OpenWeatherClient
from app.core.config import Settings
from app.schemas.weather_schemas import LoadedState, LocationQuery, WeatherViewResponse
from app.services.location_service import LocationResolver
from app.services.weather_service import WeatherService
from app.views.adapters import SlotBoard
from app.views.page import render_page
from app.views.presenter import WeatherPresenter
from app.views.weather_view import SearchInput, WeatherView

router = APIRouter(tags=["weather"])


def get_weather_view(request: Request) -> WeatherView:
    # 每个请求一块新的“页面”，共享 lifespan 里的 http client
    settings: Settings = request.app.state.settings
    client = OpenWeatherClient(
        request.app.state.http_client,
        api_key=settings.openweather_api_key,
        base_url=settings.openweather_base_url,
    )
    return WeatherView(
        service=WeatherService(openweather_client=client),
        presenter=WeatherPresenter(
            locale=settings.display_locale,
            timezone=settings.display_timezone,
            icon_base_url=settings.openweather_icon_base_url,
        ),
        writer=SlotBoard(),
        resolver=LocationResolver(
            default_city=settings.default_city,
            options=PositionOptions(
                timeout=settings.geolocation_timeout_seconds,
                enable_high_accuracy=settings.geolocation_high_accuracy,
                maximum_age=settings.geolocation_maximum_age_seconds,
            ),
        ),
        discard_stale_responses=settings.discard_stale_responses,
    )


def _reported_geolocation(
    lat: Optional[float], lon: Optional[float]
) -> Optional[GeolocationProvider]:
    # 浏览器没上报任何坐标 = 没有定位能力
    if lat is None and lon is None:
        return None
    return ReportedGeolocation(lat, lon)


def _to_response(view: WeatherView) -> WeatherViewResponse:
    state = view.state
    result = view.last_result
    loaded = isinstance(state, LoadedState)
    return WeatherViewResponse(
        success=loaded,
        message="ok" if loaded else (result.message if result else "no data"),
        state=state.name,
        errorKind=None if result is None else result.error,
        slots=view.writer.snapshot(),
        data=state.reading if loaded else None,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/", response_class=HTMLResponse)
async def weather_page(
    q: Optional[str] = Query(None, description="搜索框提交的城市名"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    view: WeatherView = Depends(get_weather_view),
) -> HTMLResponse:
    search = SearchInput(value=q or "")
    # 空白输入：搜索不触发请求、输入框保留原文；服务端没有旧页面可保留，所以照常走页面就绪流程
    if q is None or not await view.submit_search(search):
        await view.page_ready(_reported_geolocation(lat, lon))
    return HTMLResponse(render_page(view.writer.snapshot(), search_value=search.value))


@router.get("/api/weather", response_model=WeatherViewResponse)
async def get_weather(
    city: Optional[str] = Query(None, description="城市名，例如 Kathmandu"),
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    view: WeatherView = Depends(get_weather_view),
) -> WeatherViewResponse:
    try:
        query = LocationQuery(city=city.strip() if city is not None else None, lat=lat, lon=lon)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors()[0]["msg"])
    await view.load(query)
    return _to_response(view)


@router.get("/api/weather/view", response_model=WeatherViewResponse)
async def get_weather_for_page(
    lat: Optional[float] = Query(None, ge=-90, le=90),
    lon: Optional[float] = Query(None, ge=-180, le=180),
    view: WeatherView = Depends(get_weather_view),
) -> WeatherViewResponse:
    await view.page_ready(_reported_geolocation(lat, lon))
    return _to_response(view)
