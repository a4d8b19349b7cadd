"""
展示用的格式化函数

- 开尔文 -> 摄氏度（四舍五入到整数）
- 国家代码 -> 地区名（CLDR，locale 相关）
- Unix 时间戳 -> 长格式日期时间
"""
from __future__ import annotations

import math
from datetime import datetime, timezone
from functools import lru_cache

from babel import Locale
from babel.dates import format_datetime, get_timezone

KELVIN_OFFSET = 273.15

# 星期, 月份全称 日, 年 at 时:分 AM/PM
LONG_DATETIME_PATTERN = "EEEE, MMMM d, y 'at' h:mm a"


def kelvin_to_celsius(kelvin: float) -> int:
    # 与浏览器 Math.round 一致：.5 向上取整
    return math.floor(kelvin - KELVIN_OFFSET + 0.5)


@lru_cache(maxsize=16)
def _locale(name: str) -> Locale:
    return Locale.parse(name)


def country_name(country_code: str, locale: str = "en_US") -> str:
    """未知代码原样返回。"""
    if not country_code:
        return ""
    return _locale(locale).territories.get(country_code.upper(), country_code)


def format_observation_time(dt: int, locale: str = "en_US", tz: str = "UTC") -> str:
    moment = datetime.fromtimestamp(dt, tz=timezone.utc)
    return format_datetime(
        moment,
        LONG_DATETIME_PATTERN,
        tzinfo=get_timezone(tz),
        locale=_locale(locale),
    )
