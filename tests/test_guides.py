from urllib.parse import unquote

import pytest

from trophyhunter.core.errors import ValidationError
from trophyhunter.core.guides import GuidesService
from trophyhunter.core.guides.prompts import launch_url


@pytest.fixture
def svc(state, store):
    return GuidesService(state, store)


def test_single_prompt_for_achievement(svc):
    guide = svc.for_achievement("1")
    assert 'ACHIEVEMENT: "Heartbreaker"' in guide.prompt
    assert "in Chinese" in guide.prompt
    assert guide.url.startswith("https://gemini.google.com/app?q=")
    assert unquote(guide.url.split("q=", 1)[1]) == guide.prompt


def test_bulk_prompt_lists_only_incomplete(svc):
    svc.state.current_game = "Portal 2"
    guide = svc.for_current_game()
    assert "Heartbreaker: Complete the game in co-op mode" in guide.prompt
    assert "Still Alive" not in guide.prompt


def test_bulk_prompt_requires_game(svc):
    with pytest.raises(ValidationError):
        svc.for_current_game()


def test_preferences_are_persisted(svc, store):
    svc.update_preferences("Claude", "English")
    assert store.load_preferences("gemini", "Chinese") == ("claude", "English")
    assert svc.for_achievement("2").url.startswith("https://claude.ai/new?q=")


def test_unknown_provider_rejected(svc):
    with pytest.raises(ValidationError):
        svc.update_preferences("bard", "English")


def test_unknown_provider_falls_back_to_chatgpt():
    assert launch_url("bard", "hi").startswith("https://chatgpt.com/?q=hi")
