import pytest

from trophyhunter.core.achievements.state import AppState
from trophyhunter.core.achievements.store import find_by_id
from trophyhunter.core.errors import (
    ConfirmationError,
    CorruptDataError,
    MalformedInputError,
    ValidationError,
)
from trophyhunter.core.sync import SyncService
from trophyhunter.core.sync.confirmations import ConfirmationRegistry


@pytest.fixture
def svc(state, store):
    return SyncService(state, store)


def test_text_sync_persists_changes(svc, store):
    outcome = svc.sync("Lambda Locator\n5 / 20")
    assert outcome.kind == "text"
    assert outcome.progress_updated == 1
    assert find_by_id(store.load(), "4").progress == 25


def test_text_sync_without_updates_is_not_an_error(svc):
    outcome = svc.sync("no achievement names here")
    assert outcome.changed is False
    assert outcome.message.startswith("No updates detected")


def test_blank_text_rejected(svc):
    with pytest.raises(ValidationError):
        svc.sync("   ")


def test_empty_scope_rejected(store):
    svc = SyncService(AppState(), store)
    with pytest.raises(ValidationError, match="No achievements found."):
        svc.sync("Still Alive Unlocked Mar 1")


def test_json_sync_merges_records(svc, store):
    outcome = svc.sync('[{"id": "2", "name": "Still Alive", "progress": 50}]')
    assert outcome.kind == "json"
    assert outcome.message == "Progress updated from JSON!"
    assert find_by_id(store.load(), "2").progress == 50


def test_json_sync_with_bad_shape_rejected(svc, store):
    before = store.load()
    with pytest.raises(MalformedInputError):
        svc.sync('[{"description": "x"}]')
    assert [a.to_record() for a in store.load()] == [a.to_record() for a in before]


def test_overwrite_goes_through_confirmation(svc, store):
    svc.state.current_game = "Portal 2"
    pending = svc.propose_sync("Still Alive\nUnlocked Mar 1, 2021")
    assert "OVERWRITE" in pending.message
    # ничего ещё не сброшено
    assert find_by_id(store.load(), "7").achieved is True

    outcome = svc.confirm(pending.token)
    assert outcome.changed
    saved = store.load()
    assert find_by_id(saved, "7").achieved is False
    assert find_by_id(saved, "2").achieved is True
    assert find_by_id(saved, "9").achieved is True


def test_import_round_trip(svc, store):
    code = svc.export_code()
    svc.state.achievements = []
    outcome = svc.import_code(code)
    assert outcome.total == 20
    assert len(store.load()) == 20


def test_malformed_import_leaves_store_unchanged(svc, store):
    with pytest.raises(MalformedInputError):
        svc.propose_import('[{"description": "x"}]')
    assert len(store.load()) == 20


def test_corrupt_import_rejected(svc):
    with pytest.raises(CorruptDataError):
        svc.propose_import("STH1:%%%")


def test_import_resets_vanished_game_selection(svc, store):
    svc.state.current_game = "Portal 2"
    svc.import_code('[{"id": "a", "name": "A", "game": "Other"}]')
    assert svc.state.current_game == "all"


def test_confirmation_rejected_after_scope_change(svc):
    pending = svc.propose_import(svc.export_code())
    svc.state.current_game = "Portal 2"
    with pytest.raises(ConfirmationError):
        svc.confirm(pending.token)


def test_confirmation_is_single_use(svc):
    pending = svc.propose_import(svc.export_code())
    svc.confirm(pending.token)
    with pytest.raises(ConfirmationError):
        svc.confirm(pending.token)


def test_expired_confirmation_rejected(state, store):
    svc = SyncService(state, store, ConfirmationRegistry(ttl_seconds=0))
    pending = svc.propose_import(svc.export_code())
    with pytest.raises(ConfirmationError):
        svc.confirm(pending.token)
