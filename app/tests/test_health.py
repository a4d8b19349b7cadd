import pytest

from app.middlewares.logging import mask_query
from app.middlewares.request_id import resolve_request_id


@pytest.mark.asyncio
async def test_liveness(client):
    r = await client.get("/api/health/liveness")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_root_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_bad_request_id_is_replaced(client):
    r = await client.get("/health", headers={"X-Request-ID": "has spaces and <tags>"})
    rid = r.headers["X-Request-ID"]
    assert rid != "has spaces and <tags>"
    assert len(rid) == 32


def test_resolve_request_id():
    assert resolve_request_id("abc-123") == "abc-123"
    assert resolve_request_id(None) != resolve_request_id(None)


def test_access_log_masks_api_key():
    assert mask_query("q=Paris&appid=secret") == {"q": "Paris", "appid": "***"}
