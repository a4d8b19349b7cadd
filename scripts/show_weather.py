# scripts/show_weather.py
from __future__ import annotations

import argparse
import asyncio
import os
import sys
from pathlib import Path


def _ensure_env_or_exit(required_keys: list[str]) -> None:
    missing = [k for k in required_keys if not os.getenv(k)]
    if missing:
        print("[ERROR] Missing required environment variables:")
        for k in missing:
            print(f"  - {k}")
        print("\nFix options:")
        print("  1) Create/Update .env at repo root with these keys")
        print("  2) Export them in your shell environment\n")
        print("Example .env:")
        print("  OPENWEATHER_API_KEY=xxxxx\n")
        sys.exit(1)


async def main() -> None:
    # --- resolve paths ---
    script_path = Path(__file__).resolve()
    repo_root = script_path.parents[1]  # scripts/.. = repo root

    # ensure "import app.*" works
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    parser = argparse.ArgumentParser(description="Print the current weather slots for a city or a position")
    parser.add_argument("--city", type=str, default=None, help="City name (skips location resolution)")
    parser.add_argument("--lat", type=float, default=None, help="Latitude reported as the current position")
    parser.add_argument("--lon", type=float, default=None, help="Longitude reported as the current position")
    args = parser.parse_args()

    # --- imports after sys.path ready ---
    import httpx  # noqa: E402

    from app.clients.geolocation import PositionOptions, ReportedGeolocation  # noqa: E402
    from app.clients.weather_clients import OpenWeatherClient  # noqa: E402
    from app.core.config import get_settings  # noqa: E402
    from app.services.location_service import LocationResolver  # noqa: E402
    from app.services.weather_service import WeatherService  # noqa: E402
    from app.views.adapters import SlotBoard  # noqa: E402
    from app.views.presenter import Slot, WeatherPresenter  # noqa: E402
    from app.views.weather_view import SearchInput, WeatherView  # noqa: E402

    # pydantic-settings 也会读 .env，这里只在两边都没有时提前退出
    if not (repo_root / ".env").exists():
        _ensure_env_or_exit(["OPENWEATHER_API_KEY"])
    settings = get_settings()

    board = SlotBoard()
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http_client:
        view = WeatherView(
            service=WeatherService(
                OpenWeatherClient(
                    http_client,
                    api_key=settings.openweather_api_key,
                    base_url=settings.openweather_base_url,
                )
            ),
            presenter=WeatherPresenter(
                locale=settings.display_locale,
                timezone=settings.display_timezone,
                icon_base_url=settings.openweather_icon_base_url,
            ),
            writer=board,
            resolver=LocationResolver(
                default_city=settings.default_city,
                options=PositionOptions(
                    timeout=settings.geolocation_timeout_seconds,
                    enable_high_accuracy=settings.geolocation_high_accuracy,
                    maximum_age=settings.geolocation_maximum_age_seconds,
                ),
            ),
        )

        if args.city is not None:
            if not await view.submit_search(SearchInput(args.city)):
                print("[ERROR] --city must not be blank")
                sys.exit(2)
        elif args.lat is None and args.lon is None:
            await view.page_ready(None)
        else:
            await view.page_ready(ReportedGeolocation(args.lat, args.lon))

    for slot in Slot:
        if slot is Slot.ICON:
            continue
        print(f"{slot.value:>16}: {board.get(slot.value)}")

    if view.state.name == "error":
        sys.exit(1)


if __name__ == "__main__":
    asyncio.run(main())
