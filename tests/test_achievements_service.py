from typing import List

import pytest

from trophyhunter.core.achievements.schemas import Achievement
from trophyhunter.core.achievements.service import AchievementsService
from trophyhunter.core.achievements.store import find_by_id
from trophyhunter.core.errors import ExternalFetchError, ValidationError
from trophyhunter.core.fetch import BaseAchievementFetcher
from trophyhunter.core.fetch.stub import StubAchievementFetcher


class EmptyFetcher(BaseAchievementFetcher):
    name = "empty"

    async def fetch_achievements(self, app_id: str, game_name: str) -> List[Achievement]:
        return []


@pytest.fixture
def svc(state, store):
    return AchievementsService(state, store, StubAchievementFetcher())


def test_toggle_flips_and_persists(svc, store):
    ach = svc.toggle("1")
    assert ach.achieved is True and ach.progress == 100
    assert find_by_id(store.load(), "1").achieved is True

    svc.toggle("1")
    assert find_by_id(store.load(), "1").progress == 0


def test_toggle_unknown_id(svc):
    with pytest.raises(ValidationError):
        svc.toggle("nope")


def test_list_defaults_to_selected_game(svc):
    svc.select_game("Undertale")
    assert [a.id for a in svc.list_achievements()] == ["8", "10", "11"]
    assert len(svc.list_achievements(game="all")) == 20


def test_select_unknown_game(svc):
    with pytest.raises(ValidationError):
        svc.select_game("Doom")


def test_delete_game_resets_scope(svc, store):
    svc.select_game("Portal 2")
    assert svc.delete_game("Portal 2") == 5
    assert svc.state.current_game == "all"
    assert all(a.game != "Portal 2" for a in store.load())


def test_delete_requires_specific_game(svc):
    with pytest.raises(ValidationError):
        svc.delete_game("all")
    with pytest.raises(ValidationError):
        svc.delete_game("Doom")


def test_clear_and_seed_demo(svc, store):
    svc.clear()
    assert store.load() == []
    assert len(svc.seed_demo()) == 20
    assert len(store.load()) == 20


@pytest.mark.asyncio
async def test_add_game_with_stub_fetcher(svc, store):
    added = await svc.add_game(" 12345 ", "Test Game")
    assert [a.id for a in added] == [f"12345_{i}" for i in range(5)]
    assert added[0].description == "Start playing Test Game"
    assert len(store.load()) == 25


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("app_id", "game_name", "message"),
    [
        ("", "X", "Please enter a Steam App ID"),
        ("12a", "X", "App ID must be a number"),
        ("1", " ", "Please enter the game name"),
        ("1", "Portal 2", 'Game "Portal 2" is already added!'),
    ],
)
async def test_add_game_validation(svc, app_id, game_name, message):
    with pytest.raises(ValidationError) as exc:
        await svc.add_game(app_id, game_name)
    assert exc.value.message == message


@pytest.mark.asyncio
async def test_add_game_rejects_tracked_app_id(svc):
    await svc.add_game("12345", "Test Game")
    with pytest.raises(ValidationError, match="already tracked"):
        await svc.add_game("12345", "Renamed")


@pytest.mark.asyncio
async def test_add_game_with_empty_source(state, store):
    svc = AchievementsService(state, store, EmptyFetcher())
    with pytest.raises(ExternalFetchError, match="No achievements found"):
        await svc.add_game("1", "Nothing")
    assert len(store.load()) == 20
