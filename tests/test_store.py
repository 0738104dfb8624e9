import json

import pytest

from trophyhunter.core.achievements.schemas import Achievement
from trophyhunter.core.achievements.state import AppState
from trophyhunter.core.achievements.store import AchievementStore, deduplicate
from trophyhunter.core.storage import ACHIEVEMENTS_KEY, CURRENT_GAME_KEY, get_storage_provider
from trophyhunter.core.storage.memory import MemoryStorageProvider
from trophyhunter.db.base import drop_db_and_tables


def test_deduplicate_keeps_first_and_drops_empty_ids():
    items = [Achievement(id="a", name="1"), Achievement(id="", name="x"), Achievement(id="a", name="2")]
    assert [a.name for a in deduplicate(items)] == ["1"]


def test_save_returns_what_was_written(store, demo):
    saved = store.save([*demo, demo[0].model_copy()])
    assert len(saved) == 20
    assert len(json.loads(store.storage.get(ACHIEVEMENTS_KEY))) == 20


@pytest.mark.parametrize("raw", ["not json", '{"a": 1}', "[1, 2, 3]"])
def test_load_fails_soft(raw):
    store = AchievementStore(MemoryStorageProvider({ACHIEVEMENTS_KEY: raw}))
    assert store.load() == []


def test_selected_game_falls_back_when_missing(store, demo):
    store.save(demo)
    store.save_selected_game("Deleted Game")
    assert store.load_selected_game(demo) == "all"
    store.save_selected_game("Portal 2")
    assert store.load_selected_game(demo) == "Portal 2"


def test_clear_removes_list_and_selection(store, demo):
    store.save(demo)
    store.save_selected_game("Portal 2")
    store.clear()
    assert store.load() == []
    assert store.storage.get(CURRENT_GAME_KEY) is None


def test_state_restores_preferences(store, demo):
    store.save(demo)
    store.save_preferences("claude", "English")
    state = AppState.load(store)
    assert len(state.achievements) == 20
    assert (state.ai_provider, state.guide_language) == ("claude", "English")


def test_unknown_provider_rejected():
    with pytest.raises(ValueError):
        get_storage_provider("redis")


@pytest.fixture
def sql_storage():
    storage = get_storage_provider("sql")
    yield storage
    drop_db_and_tables()


def test_sql_provider_round_trip(sql_storage, demo):
    store = AchievementStore(sql_storage)
    store.save(demo)
    store.save_selected_game("Undertale")

    reloaded = AppState.load(AchievementStore(sql_storage))
    assert [a.id for a in reloaded.achievements] == [a.id for a in demo]
    assert reloaded.current_game == "Undertale"

    sql_storage.delete(CURRENT_GAME_KEY)
    sql_storage.delete(CURRENT_GAME_KEY)
    assert sql_storage.get(CURRENT_GAME_KEY) is None
