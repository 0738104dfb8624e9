import inspect

import pytest
from fastapi.routing import APIRoute
from fastapi.testclient import TestClient

from trophyhunter.api import deps
from trophyhunter.core.storage.memory import MemoryStorageProvider
from trophyhunter.main import app

client = TestClient(app)


@pytest.fixture(autouse=True)
def fresh_state():
    deps.reset(MemoryStorageProvider())
    client.post("/v1/achievements/demo")
    yield
    deps.reset()


def test_health():
    assert client.get("/healthz").json() == {"status": "ok", "environment": "test"}
    assert client.get("/v1/healthz").json() == {"storage": "memory", "fetch": "stub"}


def test_list_with_filters_uses_storage_names():
    res = client.get("/v1/achievements", params={"game": "Portal 2", "search": "heart", "status": "incomplete"})
    assert res.status_code == 200
    body = res.json()
    assert [a["name"] for a in body] == ["Heartbreaker"]
    assert body[0]["globalPercentage"] == 12.5


def test_invalid_status_filter():
    assert client.get("/v1/achievements", params={"status": "bogus"}).status_code == 422


def test_toggle_and_unknown_id():
    res = client.post("/v1/achievements/1/toggle")
    assert res.status_code == 200
    assert res.json()["achieved"] is True

    res = client.post("/v1/achievements/nope/toggle")
    assert res.status_code == 400
    assert res.json()["detail"]["error"] == "ValidationError"


def test_games_selection_and_delete():
    res = client.put("/v1/games/selected", json={"game": "Portal 2"})
    assert res.status_code == 200
    assert res.json()["current_game"] == "Portal 2"
    assert len(client.get("/v1/achievements").json()) == 5

    res = client.delete("/v1/games/Portal 2")
    assert res.json() == {"game": "Portal 2", "deleted": 5}
    games = client.get("/v1/games").json()
    assert games["current_game"] == "all"
    assert games["total"] == 15


def test_add_game():
    res = client.post("/v1/games", json={"app_id": "4000", "game_name": "Garry's Mod"})
    assert res.status_code == 201
    assert [a["id"] for a in res.json()][:2] == ["4000_0", "4000_1"]

    res = client.post("/v1/games", json={"app_id": "abc", "game_name": "X"})
    assert res.status_code == 400
    assert res.json()["detail"]["message"] == "App ID must be a number"


def test_text_sync_merge():
    res = client.post("/v1/sync", json={"text": "Lambda Locator\n5 / 20"})
    assert res.status_code == 200
    assert res.json()["progress_updated"] == 1


def test_overwrite_sync_needs_confirmation():
    client.put("/v1/games/selected", json={"game": "Portal 2"})
    res = client.post("/v1/sync", json={"text": "Still Alive Unlocked Mar 1, 2021", "overwrite": True})
    assert res.status_code == 202
    token = res.json()["token"]

    # до подтверждения ничего не сброшено
    assert len(client.get("/v1/achievements", params={"status": "completed"}).json()) == 2

    res = client.post(f"/v1/confirmations/{token}")
    assert res.status_code == 200
    assert res.json()["message"] == "Fresh sync complete for Portal 2!"
    completed = client.get("/v1/achievements", params={"status": "completed"}).json()
    assert [a["name"] for a in completed] == ["Still Alive"]

    assert client.post(f"/v1/confirmations/{token}").status_code == 400


def test_export_import_cycle():
    code = client.get("/v1/data/export").json()["code"]
    assert code.startswith("STH1:")
    client.delete("/v1/achievements")
    assert client.get("/v1/achievements").json() == []

    res = client.post("/v1/data/import", json={"code": code})
    assert res.status_code == 202
    res = client.post(f"/v1/confirmations/{res.json()['token']}")
    assert res.json()["total"] == 20


def test_import_rejects_bad_code():
    res = client.post("/v1/data/import", json={"code": "STH1:@@"})
    assert res.status_code == 400
    assert res.json()["detail"]["error"] == "CorruptDataError"


def test_report_is_plain_text():
    res = client.get("/v1/achievements/report")
    assert res.status_code == 200
    assert res.headers["content-type"].startswith("text/plain")
    assert "Portal 2" in res.text


def test_preferences_and_guides():
    res = client.put("/v1/preferences", json={"ai_provider": "perplexity", "guide_language": "German"})
    assert res.json() == {"ai_provider": "perplexity", "guide_language": "German"}

    guide = client.get("/v1/guides/1").json()
    assert guide["provider"] == "perplexity"
    assert "German" in guide["prompt"]

    assert client.get("/v1/guides").status_code == 400
    assert client.put("/v1/preferences", json={"ai_provider": "bard", "guide_language": "x"}).status_code == 400


def test_delete_game_with_slash_in_name():
    client.post("/v1/sync", json={"text": '[{"id": "s1", "name": "Thunderstruck", "game": "AC/DC Live"}]'})
    res = client.delete("/v1/games/AC/DC Live")
    assert res.status_code == 200
    assert res.json() == {"game": "AC/DC Live", "deleted": 1}


def test_health_reports_broken_fetch_provider(monkeypatch):
    from trophyhunter.api.v1 import health

    def broken():
        raise ValueError("Unknown fetch provider: steamweb")

    monkeypatch.setattr(health, "get_achievement_fetcher", broken)
    res = client.get("/v1/healthz")
    assert res.status_code == 500
    assert res.json()["detail"] == "fetch error"


def _calls(dependant):
    for dep in dependant.dependencies:
        yield dep.call
        yield from _calls(dep)


def test_routes_and_dependencies_run_on_event_loop():
    for route in app.routes:
        if isinstance(route, APIRoute) and route.path.startswith("/v1"):
            assert inspect.iscoroutinefunction(route.endpoint), route.path
            for call in _calls(route.dependant):
                assert inspect.iscoroutinefunction(call), (route.path, call.__name__)


@pytest.mark.asyncio
async def test_state_is_loaded_once():
    deps.reset(MemoryStorageProvider())
    store = await deps.get_store()
    first = await deps.get_app_state(store)
    assert await deps.get_app_state(await deps.get_store()) is first
