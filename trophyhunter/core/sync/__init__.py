# trophyhunter/core/sync/__init__.py

"""
Sync package: эвристический матчинг текста, слияние JSON, импорт/экспорт.

`from trophyhunter.core.sync import SyncService`
"""

from .service import SyncOutcome, SyncService  # noqa: F401

__all__: list[str] = ["SyncService", "SyncOutcome"]
