import httpx
import pytest


@pytest.mark.asyncio
async def test_weather_by_city_ok(client, provider):
    r = await client.get("/api/weather", params={"city": "Kathmandu"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["state"] == "loaded"
    assert body["errorKind"] is None
    assert body["slots"]["city"] == "Kathmandu, Nepal"
    assert body["slots"]["temperature"] == "27°C"
    assert body["data"]["countryCode"] == "NP"
    assert provider.urls == [
        "https://api.openweathermap.org/data/2.5/weather?q=Kathmandu&appid=test-key"
    ]


@pytest.mark.asyncio
async def test_weather_by_coordinates(client, provider):
    r = await client.get("/api/weather", params={"lat": 27.7, "lon": 85.3})

    assert r.status_code == 200
    assert r.json()["success"] is True
    assert provider.urls == [
        "https://api.openweathermap.org/data/2.5/weather?lat=27.7&lon=85.3&appid=test-key"
    ]


@pytest.mark.asyncio
async def test_weather_undecodable_body_is_error_state(client, provider):
    provider.error = httpx.DecodingError("corrupt gzip body")

    r = await client.get("/api/weather", params={"city": "Kathmandu"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is False
    assert body["state"] == "error"
    assert body["errorKind"] == "invalid_data"
    assert body["slots"]["condition"] == "Invalid data received."


@pytest.mark.asyncio
async def test_weather_error_is_a_normal_response(client, provider):
    provider.status_code = 404

    r = await client.get("/api/weather", params={"city": "Atlantis"})

    assert r.status_code == 200
    body = r.json()
    assert body["success"] is False
    assert body["state"] == "error"
    assert body["errorKind"] == "city_not_found"
    assert body["message"] == "City not found. Please try again."
    assert body["slots"]["city"] == "Error!"
    assert body["data"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [
        {},
        {"city": "Paris", "lat": 1, "lon": 2},
        {"lat": 1},
        {"city": "   "},
        {"lat": 91, "lon": 0},
    ],
)
async def test_weather_rejects_bad_location(client, provider, params):
    r = await client.get("/api/weather", params=params)

    assert r.status_code == 422
    assert r.json()["success"] is False
    assert provider.requests == []


@pytest.mark.asyncio
async def test_page_ready_view_uses_reported_position(client, provider):
    r = await client.get("/api/weather/view", params={"lat": 27.7, "lon": 85.3})

    assert r.status_code == 200
    assert r.json()["state"] == "loaded"
    assert provider.requests[0].url.params["lat"] == "27.7"


@pytest.mark.asyncio
async def test_page_ready_view_without_position_uses_default_city(client, provider):
    r = await client.get("/api/weather/view")

    assert r.status_code == 200
    assert [req.url.params.get("q") for req in provider.requests] == ["Kathmandu"]


@pytest.mark.asyncio
async def test_html_page_search_clears_input(client, provider):
    r = await client.get("/", params={"q": "Paris"})

    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    assert 'value=""' in r.text
    assert '<h1 class="current-city">Paris, Nepal</h1>' in r.text
    assert '<img src="https://openweathermap.org/img/wn/03d@2x.png" alt="scattered clouds">' in r.text
    assert [req.url.params.get("q") for req in provider.requests] == ["Paris"]


@pytest.mark.asyncio
async def test_html_page_blank_search_keeps_input(client, provider):
    r = await client.get("/", params={"q": "   ", "lat": 27.7, "lon": 85.3})

    assert r.status_code == 200
    assert 'value="   "' in r.text
    # 搜索本身不请求；页面照常按上报的坐标加载
    assert [req.url.params.get("q") for req in provider.requests] == [None]
    assert provider.requests[0].url.params["lat"] == "27.7"
    assert '<h1 class="current-city">Kathmandu, Nepal</h1>' in r.text


@pytest.mark.asyncio
async def test_html_page_blank_search_without_position_uses_default_city(client, provider):
    r = await client.get("/", params={"q": ""})

    assert r.status_code == 200
    assert [req.url.params.get("q") for req in provider.requests] == ["Kathmandu"]
    assert "Kathmandu, Nepal" in r.text


@pytest.mark.asyncio
async def test_html_page_ready_falls_back_to_default_city(client, provider):
    r = await client.get("/")

    assert r.status_code == 200
    assert "Kathmandu, Nepal" in r.text
    assert [req.url.params.get("q") for req in provider.requests] == ["Kathmandu"]


@pytest.mark.asyncio
async def test_html_page_network_error(client, provider):
    provider.error = httpx.ConnectError("offline")

    r = await client.get("/")

    assert r.status_code == 200
    assert '<h1 class="current-city">Error!</h1>' in r.text
    assert "Network error. Check your connection." in r.text


@pytest.mark.asyncio
async def test_request_id_header_is_echoed(client):
    r = await client.get("/api/health/liveness", headers={"X-Request-ID": "abc123"})

    assert r.headers["X-Request-ID"] == "abc123"
