# trophyhunter/core/guides/prompts.py

from __future__ import annotations

from typing import Dict, Sequence
from urllib.parse import quote

from trophyhunter.core.achievements.schemas import Achievement

# --- Куда отправлять промпт ---
PROVIDER_URLS: Dict[str, str] = {
    "claude": "https://claude.ai/new?q={prompt}",
    "gemini": "https://gemini.google.com/app?q={prompt}",
    "perplexity": "https://www.perplexity.ai/search?q={prompt}",
    "chatgpt": "https://chatgpt.com/?q={prompt}",
}
FALLBACK_PROVIDER = "chatgpt"

SINGLE_PROMPT_TEMPLATE = """INSTRUCTION: SINGLE ACHIEVEMENT DATA SHEET
GAME: "{game}"
ACHIEVEMENT: "{name}"
DESCRIPTION: "{description}"

STRICT OUTPUT RULES:
1. FORMAT: A single Markdown Table.
2. COLUMNS: | Step | Technical Task | Location/Prerequisite | Optimization Notes |
3. EXHAUSTIVE FACTORIZATION: Deconstruct the solution into its full technical roadmap.
4. TONE: Command-line style. No intro/outro text.
5. NO LISTS: Use only the table format for the guide content.
6. LANGUAGE: Generate the entire response in {language}.

EXAMPLE (IN {language}):
| Step | Technical Task | Location/Prerequisite | Optimization Notes |
| :--- | :--- | :--- | :--- |
| 1 | Unlock [Skill] | Skill Tree | Required for Step 2 |
| 2 | Execute [Action] | [Specific Location] | Must be done during Night |"""

BULK_PROMPT_TEMPLATE = """INSTRUCTION: COMPREHENSIVE ACHIEVEMENT MASTER STRATEGY SHEET
GAME: "{game}"
DATASET:
{dataset}

STRICT OUTPUT RULES:
1. FORMAT: A SINGLE unified Markdown Table for all data.
2. COLUMNS: | Achievement | Step | Technical Task | Location/Prerequisite | Optimization Notes |
3. EXHAUSTIVE FACTORIZATION: You MUST deconstruct every achievement into its FULL technical roadmap.
4. NO SUMMARIES: If an achievement needs 5 actions to solve, it MUST occupy 5 separate rows. Do not collapse details into "Step 1".
5. SORTING: All rows MUST be grouped by Achievement Name. All steps for a single achievement must appear consecutively from Step 1 to Final Step.
6. NO LISTS: Use only table rows. No checkboxes, no bullets.
7. MISSABLES: Put "!!MISSABLE!!" in the Notes column for critical steps.
8. LANGUAGE: Generate the entire response, including headers and descriptions, in {language}.

EXAMPLE MASTER SHEET (IN {language}):
| Achievement | Step | Technical Task | Location/Prerequisite | Optimization Notes |
| :--- | :--- | :--- | :--- | :--- |
| Treasure Hunter | 1 | Unlock [Skill: Sight] | Skill Menu | Required to see hidden chests |
| Treasure Hunter | 2 | Secure [Chest A] | [Area 1] | !!MISSABLE!! Before boss fight |
| Combat Master | 1 | Kill 10 [Enemy X] | [Area 1] | Use [Weapon A] |
| Treasure Hunter | 3 | Secure [Chest B] | [Area 2] | Use Key from Area 1 |"""


def single_prompt(achievement: Achievement, language: str) -> str:
    return SINGLE_PROMPT_TEMPLATE.format(
        game=achievement.game,
        name=achievement.name,
        description=achievement.description,
        language=language,
    )


def bulk_prompt(game: str, incomplete: Sequence[Achievement], language: str) -> str:
    dataset = "\n".join(f"{a.name}: {a.description}" for a in incomplete)
    return BULK_PROMPT_TEMPLATE.format(game=game, dataset=dataset, language=language)


def launch_url(provider: str, prompt: str) -> str:
    """URL чата с промптом в query-string; неизвестный провайдер → chatgpt."""
    template = PROVIDER_URLS.get(provider.lower(), PROVIDER_URLS[FALLBACK_PROVIDER])
    return template.format(prompt=quote(prompt, safe=""))
