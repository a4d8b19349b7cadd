from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # 当前环境：dev / test / prod
    env: str = Field("dev", alias="ENV")

    # OpenWeatherMap（API key 必须提供）
    openweather_api_key: str = Field(..., alias="OPENWEATHER_API_KEY")
    openweather_base_url: str = Field(
        "https://api.openweathermap.org",
        alias="OPENWEATHER_BASE_URL",
    )
    openweather_icon_base_url: str = Field(
        "https://openweathermap.org/img/wn",
        alias="OPENWEATHER_ICON_BASE_URL",
    )

    # 出站请求超时（秒）
    http_timeout_seconds: float = Field(5.0, alias="HTTP_TIMEOUT_SECONDS")

    # ==== 定位 ====
    # 定位失败 / 不可用时的默认城市
    default_city: str = Field("Kathmandu", alias="DEFAULT_CITY")
    geolocation_timeout_seconds: float = Field(
        5.0, alias="GEOLOCATION_TIMEOUT_SECONDS"
    )
    geolocation_high_accuracy: bool = Field(True, alias="GEOLOCATION_HIGH_ACCURACY")
    # 0 = 不接受缓存的位置
    geolocation_maximum_age_seconds: float = Field(
        0.0, alias="GEOLOCATION_MAXIMUM_AGE_SECONDS"
    )

    # ==== 展示 ====
    display_locale: str = Field("en_US", alias="DISPLAY_LOCALE")
    display_timezone: str = Field("UTC", alias="DISPLAY_TIMEZONE")

    # 并发请求：True 时丢弃过期（较早发起）的响应；默认保持“最后到达者胜出”
    discard_stale_responses: bool = Field(False, alias="DISCARD_STALE_RESPONSES")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
