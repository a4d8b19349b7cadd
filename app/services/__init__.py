# app/services/__init__.py
"""服务层模块"""

from .location_service import LocationResolver
from .weather_service import WeatherService

__all__ = ["WeatherService", "LocationResolver"]
