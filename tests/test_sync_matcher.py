from trophyhunter.core.achievements.store import find_by_id
from trophyhunter.core.sync.matcher import (
    apply_text_sync,
    counter_progress,
    find_excerpt,
    match_achievement,
)


def test_unlocked_marker_completes_achievement(demo):
    still_alive = find_by_id(demo, "2")
    still_alive.achieved, still_alive.progress = False, 0

    summary = apply_text_sync(demo, "Still Alive\nComplete the game\nUnlocked Mar 1, 2021 @ 9:14pm")

    assert still_alive.achieved is True
    assert still_alive.progress == 100
    assert summary.synced == 1
    assert summary.changed
    assert summary.message == "Synced 1 new achievements!"


def test_counter_raises_progress_once(demo):
    lambda_locator = find_by_id(demo, "4")
    text = "Lambda Locator\nFind all lambda caches\n5 / 20"

    first = apply_text_sync(demo, text)
    assert lambda_locator.progress == 25
    assert lambda_locator.achieved is False
    assert first.progress_updated == 1

    second = apply_text_sync(demo, text)
    assert lambda_locator.progress == 25
    assert second.progress_updated == 0
    assert not second.changed


def test_counter_never_lowers_progress(demo):
    heartbreaker = find_by_id(demo, "1")
    apply_text_sync(demo, "Heartbreaker 1 / 10")
    assert heartbreaker.progress == 60


def test_conditional_hint_does_not_complete(demo):
    heartbreaker = find_by_id(demo, "1")
    summary = apply_text_sync(demo, "Heartbreaker - once unlocked 3 mar 2020 you get a hat")
    assert heartbreaker.achieved is False
    assert summary.synced == 0


def test_overwrite_without_matches_resets_scope(demo):
    portal = [a for a in demo if a.game == "Portal 2"]
    summary = apply_text_sync(portal, "nothing useful here", overwrite=True, scope="Portal 2")

    assert all(not a.achieved and a.progress == 0 for a in portal)
    assert summary.changed
    assert summary.synced == 0
    assert summary.message == "Fresh sync complete for Portal 2!"
    # записи вне области не тронуты
    assert find_by_id(demo, "9").achieved is True


def test_counter_is_capped_below_completion():
    assert counter_progress("20 / 20") == 99
    assert counter_progress("1 / 0") is None
    assert counter_progress("1 / 8") == 13


def test_excerpt_window_limits_search():
    text = "Still Alive" + " " * 400 + "Unlocked Mar 1"
    assert not match_achievement(text, "Still Alive").completed
    assert match_achievement(text, "Still Alive", window=500).completed


def test_empty_name_is_never_found():
    assert find_excerpt("anything", "") is None
