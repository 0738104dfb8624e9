import os
import sys

# Добавляем корень репозитория в PYTHONPATH, чтобы 'import trophyhunter...' работал без установки
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Тестовое окружение: in-memory хранилище и in-memory SQLite
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("STORAGE_PROVIDER", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest

from trophyhunter.core.achievements.demo import demo_achievements
from trophyhunter.core.achievements.state import AppState
from trophyhunter.core.achievements.store import AchievementStore
from trophyhunter.core.storage.memory import MemoryStorageProvider


@pytest.fixture
def storage():
    return MemoryStorageProvider()


@pytest.fixture
def store(storage):
    return AchievementStore(storage)


@pytest.fixture
def demo():
    return demo_achievements()


@pytest.fixture
def state(store, demo):
    """Состояние с демо-данными, уже сохранёнными в store."""
    return AppState(achievements=store.save(demo))
