from trophyhunter.core.achievements.schemas import (
    TROPHY_ICON,
    Achievement,
    Priority,
    Rarity,
    rarity_for_percentage,
)


def test_defaults_fill_missing_fields():
    ach = Achievement.model_validate({"id": "x", "name": "N"})
    assert ach.icon == TROPHY_ICON
    assert ach.game_icon == TROPHY_ICON
    assert ach.priority is Priority.MEDIUM
    assert ach.rarity is Rarity.COMMON
    assert ach.progress == 0
    assert ach.achieved is False


def test_coercion_of_loose_values():
    ach = Achievement.model_validate({
        "id": 42,
        "name": None,
        "achieved": "yes",
        "favorite": 0,
        "progress": "150",
        "priority": "urgent",
        "rarity": "legendary",
        "globalPercentage": "n/a",
    })
    assert ach.id == "42"
    assert ach.name == ""
    assert ach.achieved is True
    assert ach.favorite is False
    assert ach.progress == 100
    assert ach.priority is Priority.MEDIUM
    assert ach.rarity is Rarity.COMMON
    assert ach.global_percentage == 0.0


def test_progress_rounds_half_up():
    assert Achievement(progress=12.5).progress == 13
    assert Achievement(progress=-3).progress == 0


def test_record_uses_storage_names():
    record = Achievement(id="1", global_percentage=12.5, priority=Priority.HIGH).to_record()
    assert record["globalPercentage"] == 12.5
    assert record["priority"] == "high"
    assert "gameIcon" in record


def test_rarity_thresholds():
    assert rarity_for_percentage(3.2) is Rarity.EPIC
    assert rarity_for_percentage(5) is Rarity.RARE
    assert rarity_for_percentage(23.1) is Rarity.UNCOMMON
    assert rarity_for_percentage(78.3) is Rarity.COMMON
