from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from app.clients.geolocation import GeolocationProvider
from app.schemas.weather_schemas import (
    FetchResult,
    IdleState,
    LoadingState,
    LocationQuery,
    ViewState,
    state_from_result,
)
from app.services.location_service import LocationResolver
from app.services.weather_service import WeatherService
from app.views.adapters import SlotWriter
from app.views.presenter import WeatherPresenter

logger = logging.getLogger(__name__)

ENTER_KEY = "Enter"


@dataclass
class SearchInput:
    value: str = ""


class WeatherView:
    """
    页面控制器：页面就绪 -> 定位 -> 请求 -> 渲染；搜索框回车 -> 按城市名请求。

    并发：每次请求拿一个递增的 generation。
    - discard_stale_responses=False（默认）：谁最后返回谁覆盖页面
    - discard_stale_responses=True：较早发起的请求晚到时直接丢弃
    """

    def __init__(
        self,
        service: WeatherService,
        presenter: WeatherPresenter,
        writer: SlotWriter,
        resolver: Optional[LocationResolver] = None,
        discard_stale_responses: bool = False,
    ) -> None:
        self.service = service
        self.presenter = presenter
        self.writer = writer
        self.resolver = resolver or LocationResolver()
        self.discard_stale_responses = discard_stale_responses

        self.state: ViewState = IdleState()
        self.last_result: Optional[FetchResult] = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def show(self, state: ViewState) -> None:
        self.state = state
        self.presenter.apply(state, self.writer)

    async def page_ready(self, geolocation: Optional[GeolocationProvider]) -> ViewState:
        query = await self.resolver.resolve(
            geolocation,
            on_loading=lambda: self.show(LoadingState()),
        )
        return await self.load(query)

    async def load(self, query: LocationQuery) -> ViewState:
        self._generation += 1
        generation = self._generation
        self.show(LoadingState())

        result = await self.service.fetch(query)

        if self.discard_stale_responses and generation != self._generation:
            logger.info(
                "dropping stale response for %s (generation %s, latest %s)",
                query.describe(),
                generation,
                self._generation,
            )
            return self.state

        self.last_result = result
        self.show(state_from_result(result))
        return self.state

    async def submit_search(self, search_input: SearchInput) -> bool:
        city = search_input.value.strip()
        if not city:
            return False
        search_input.value = ""
        await self.load(LocationQuery.for_city(city))
        return True

    async def handle_key(self, key: str, search_input: SearchInput) -> bool:
        if key != ENTER_KEY:
            return False
        return await self.submit_search(search_input)
