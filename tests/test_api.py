import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from scantoreturn.api.app import app
from scantoreturn.api.state import AppState, get_state
from scantoreturn.config import TAG_CACHE_KEY
from scantoreturn.core.assist import TextAssist
from scantoreturn.core.settings_store import EndpointSettings

from conftest import ENDPOINT, FakeService, json_reply, make_gateway, refuse


@pytest.fixture
def build_client(cache, tmp_path):
    def build(handler=None, endpoint="", **gateway_kwargs):
        settings = EndpointSettings(tmp_path / "settings.json", default=ENDPOINT)
        settings.set_endpoint(endpoint)
        state = AppState(
            cache=cache,
            settings=settings,
            gateway=make_gateway(handler or FakeService(), **gateway_kwargs),
            assist=TextAssist(api_key=""),
            local_read_latency=0,
            local_write_latency=0,
            redirect_delay=0,
        )
        app.dependency_overrides[get_state] = lambda: state
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


def test_scan_without_tag_is_landing(build_client):
    res = build_client().get("/api/scan/")
    assert res.status_code == 200
    assert res.json() == {"view": "landing", "tag": None}


def test_scan_seeded_sample_is_found_with_contact_link(build_client):
    body = build_client().get("/api/scan/", params={"tag": "ID_0001"}).json()
    assert body["view"] == "found"
    assert body["tag"]["item_name"] == "Vintage Leather Wallet"
    assert body["contact_link"].startswith("https://wa.me/15551234567?text=")


def test_scan_unknown_tag_is_activating(build_client):
    body = build_client().get("/api/scan/", params={"tag": "ID_0099"}).json()
    assert body["view"] == "activating"
    assert body["tag"]["status"] == "new"


def test_scan_timeout_is_error_with_landing_recovery(build_client):
    async def hang(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json={"status": "new"})

    res = build_client(hang, endpoint=ENDPOINT, lookup_timeout=0.05).get("/api/scan/", params={"tag": "ID_0001"})
    assert res.status_code == 504
    assert res.json()["view"] == "error"
    assert res.json()["recovery"] == "landing"


def test_activate_then_get_tag(build_client):
    client = build_client()
    res = client.post("/api/tags/ID_0099/activate", json={"item_name": "Keys", "owner_contact": "+1 555 000 1111"})
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert res.json()["view"] == "success"

    tag = client.get("/api/tags/ID_0099").json()
    assert tag["status"] == "found"
    assert tag["contact_uri"] == "https://wa.me/15550001111"


def test_activate_validation_error_is_400(build_client):
    res = build_client().post("/api/tags/ID_0099/activate", json={"item_name": "Keys", "owner_contact": "n/a"})
    assert res.status_code == 400
    assert res.json()["detail"]["field"] == "owner_contact"


def test_activate_remote_failure_is_502(build_client, cache):
    res = build_client(refuse, endpoint=ENDPOINT).post(
        "/api/tags/ID_0099/activate", json={"item_name": "Keys", "owner_contact": "15550001111"}
    )
    assert res.status_code == 502
    assert cache.get("ID_0099").status.value == "new"


def test_get_tag_degrades_when_remote_unreachable(build_client):
    tag = build_client(refuse, endpoint=ENDPOINT).get("/api/tags/ID_0001").json()
    assert tag["item_name"] == "Vintage Leather Wallet"


def test_get_tag_uses_remote_when_reachable(build_client):
    handler = json_reply({"status": "found", "item": "Remote Bag", "phone": "15559990000"})
    tag = build_client(handler, endpoint=ENDPOINT).get("/api/tags/ID_0300").json()
    assert tag["item_name"] == "Remote Bag"


def test_contact_link_route(build_client):
    client = build_client()
    res = client.get("/api/tags/ID_0001/contact-link", params={"message": "Found it"})
    assert res.json()["contact_link"] == "https://wa.me/15551234567?text=Found%20it"
    assert client.get("/api/tags/ID_0002/contact-link").status_code == 404


def test_list_tags_with_stats(build_client):
    body = build_client().get("/api/tags/").json()
    assert body["mode"] == "local"
    assert body["stats"] == {"total": 10, "active": 1, "new": 9}
    assert len(body["tags"]) == 10


def test_batch_urls(build_client):
    res = build_client().get("/api/tags/batch", params={"start": 1, "count": 2, "base_url": "https://t.example/"})
    assert res.json() == [
        {"tag_id": "ID_0001", "url": "https://t.example/?tag=ID_0001"},
        {"tag_id": "ID_0002", "url": "https://t.example/?tag=ID_0002"},
    ]
    assert build_client().get("/api/tags/batch", params={"count": 0}).status_code == 400


def test_endpoint_settings_routes(build_client):
    client = build_client()
    assert client.get("/api/settings/endpoint").json() == {"endpoint": "", "mode": "local"}

    res = client.put("/api/settings/endpoint", json={"endpoint": "https://other.example/exec"})
    assert res.json() == {"endpoint": "https://other.example/exec", "mode": "remote"}

    assert client.put("/api/settings/endpoint", json={"endpoint": "nope"}).status_code == 400
    assert client.delete("/api/settings/endpoint").json() == {"endpoint": ENDPOINT, "mode": "remote"}


def test_assist_routes_fall_back(build_client):
    client = build_client()
    res = client.post("/api/assist/found-message", json={"item_name": "Keys"})
    assert res.json() == {"message": "Hi, I found your Keys. How can I return it?", "assisted": False}
    assert client.post("/api/assist/item-names", json={"category": "keys"}).json() == {"suggestions": []}


def test_batch_rejects_backend_base_url(build_client):
    res = build_client().get(
        "/api/tags/batch", params={"count": 2, "base_url": "https://script.google.com/macros/s/abc/exec"}
    )
    assert res.status_code == 400


def test_get_tag_with_numeric_stored_contact(build_client, cache):
    entry = {"status": "found", "item_name": "Keys", "owner_contact": 15550001111}
    cache.path.write_text(json.dumps({TAG_CACHE_KEY: {"ID_0008": entry}}))
    res = build_client().get("/api/tags/ID_0008")
    assert res.status_code == 200
    assert res.json()["contact_uri"] == "https://wa.me/15550001111"


def test_found_message_route_falls_back_on_unexpected_reply(build_client):
    client = build_client()
    assist = TextAssist(
        api_key="test-key",
        client=httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[1, 2]))),
    )
    state = app.dependency_overrides[get_state]()
    state.assist = assist
    res = client.post("/api/assist/found-message", json={"item_name": "Keys"})
    assert res.status_code == 200
    assert res.json()["message"] == "Hi, I found your Keys. How can I return it?"
