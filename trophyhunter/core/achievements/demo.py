# trophyhunter/core/achievements/demo.py
"""Sample dataset loaded by the 'demo' action and used throughout the tests."""

from __future__ import annotations

from typing import List

from .schemas import Achievement

# id, game, name, description, achieved, progress, priority, favorite, globalPercentage, rarity
_DEMO_ROWS = [
    ("1", "Portal 2", "Heartbreaker", "Complete the game in co-op mode", False, 60, "high", True, 12.5, "rare"),
    ("2", "Portal 2", "Still Alive", "Complete the game", True, 100, "medium", False, 78.3, "common"),
    ("3", "Portal 2", "Professor Portal", "Complete all test chambers", False, 75, "medium", True, 45.2, "uncommon"),
    ("6", "Portal 2", "Speed Runner", "Complete the game in under 2 hours", False, 0, "high", True, 3.2, "epic"),
    ("7", "Portal 2", "Friendly Fire", "Complete co-op without killing your partner", True, 100, "low", False, 56.8, "common"),
    ("4", "Half-Life 2", "Lambda Locator", "Find all lambda caches", False, 18, "low", False, 23.1, "uncommon"),
    ("5", "Half-Life 2", "Zombie Chopper", "Kill 1000 zombies with the gravity gun", False, 45, "high", False, 8.7, "rare"),
    ("9", "Half-Life 2", "Gravity Master", "Kill 50 enemies with physics objects", True, 100, "medium", False, 42.3, "common"),
    ("8", "Undertale", "Pacifist", "Complete the game without killing anyone", False, 30, "medium", True, 15.4, "rare"),
    ("10", "Undertale", "True Hero", "Get the true pacifist ending", False, 10, "high", True, 8.9, "rare"),
    ("11", "Undertale", "Determined", "Die 100 times", True, 100, "low", False, 67.2, "common"),
    ("12", "Terraria", "Eye on You", "Defeat the Eye of Cthulhu", True, 100, "medium", False, 82.5, "common"),
    ("13", "Terraria", "Slayer of Worlds", "Defeat every boss", False, 35, "high", True, 5.2, "epic"),
    ("14", "Terraria", "Home Sweet Home", "Build a house for every NPC", False, 60, "medium", False, 28.7, "uncommon"),
    ("15", "Elden Ring", "Elden Lord", 'Achieve the "Elden Lord" ending', False, 0, "high", True, 28.4, "uncommon"),
    ("16", "Elden Ring", "Shardbearer Godrick", "Defeated Shardbearer Godrick", True, 100, "medium", False, 67.8, "common"),
    ("17", "Elden Ring", "Shardbearer Malenia", "Defeated Shardbearer Malenia", False, 15, "high", True, 34.2, "uncommon"),
    ("18", "Elden Ring", "Legendary Armaments", "Acquired all legendary armaments", False, 40, "medium", False, 8.9, "rare"),
    ("19", "Elden Ring", "Legendary Ashen Remains", "Acquired all legendary ashen remains", False, 25, "low", False, 6.7, "rare"),
    ("20", "Elden Ring", "Age of the Stars", 'Achieved the "Age of the Stars" ending', False, 0, "high", True, 19.3, "uncommon"),
]


def demo_achievements() -> List[Achievement]:
    """Fresh copies every call, callers mutate them."""
    return [
        Achievement(
            id=row[0],
            game=row[1],
            name=row[2],
            description=row[3],
            achieved=row[4],
            progress=row[5],
            priority=row[6],
            favorite=row[7],
            global_percentage=row[8],
            rarity=row[9],
        )
        for row in _DEMO_ROWS
    ]
