"""服务端渲染的天气页面。布局只保留最少的结构，样式不在这里处理。"""
from __future__ import annotations

import html
from typing import Dict

from app.views.presenter import MARKUP_SLOTS, Slot

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Weather</title>
</head>
<body>
<form method="get" action="/">
<input id="search-box" name="q" type="search" placeholder="Search city" value="{search_value}" autocomplete="off">
</form>
<section class="current">
<h1 class="current-city">{city}</h1>
<p class="current-date">{date}</p>
<p class="current-weather">{condition}</p>
<div class="weather-icon">{icon}</div>
<p class="current-tempreture">{temperature}</p>
<p><span>Min. </span><span class="min-temp">{min_temperature}</span></p>
<p><span>Max. </span><span class="max-temp">{max_temperature}</span></p>
</section>
<section class="details">
<p>Real feel <span class="real-feal-temp">{feels_like}</span></p>
<p>Humidity <span class="humidity-percentage">{humidity}</span></p>
<p>Wind <span class="wind-speed">{wind}</span></p>
<p>Pressure <span class="current-pressure">{pressure}</span></p>
</section>
</body>
</html>
"""


def render_page(slots: Dict[str, str], search_value: str = "") -> str:
    values = {}
    for slot in Slot:
        raw = slots.get(slot.value, "")
        # 文本槽位转义；图标槽位本身就是 presenter 生成的 HTML
        values[slot.value] = raw if slot.value in MARKUP_SLOTS else html.escape(raw)
    return PAGE_TEMPLATE.format(search_value=html.escape(search_value, quote=True), **values)
