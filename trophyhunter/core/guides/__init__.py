# trophyhunter/core/guides/__init__.py
"""AI strategy-guide prompts for achievements."""

from .service import GuidePrompt, GuidesService  # noqa: F401

__all__: list[str] = ["GuidePrompt", "GuidesService"]
