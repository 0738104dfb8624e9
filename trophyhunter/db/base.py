# trophyhunter/db/base.py

from __future__ import annotations

import contextlib
import logging
from typing import Callable, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from trophyhunter.config import settings

log = logging.getLogger(__name__)


# --- Declarative Base ---
class Base(DeclarativeBase):
    pass


# --- Engine & Session factory ---
if settings.ENVIRONMENT == "test" or settings.DATABASE_URL.endswith(":memory:"):
    log.info("Using in-memory SQLite database for tests.")
    # StaticPool: одно соединение, иначе каждая сессия видит пустую БД
    engine = create_engine(
        "sqlite:///:memory:", connect_args={"check_same_thread": False}, poolclass=StaticPool, echo=False
    )
else:
    log.info("Using database: %s", settings.DATABASE_URL)
    connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}
    engine = create_engine(
        settings.DATABASE_URL, echo=bool(settings.SQL_ECHO), pool_pre_ping=True, connect_args=connect_args
    )

session_factory = sessionmaker(bind=engine, class_=Session, expire_on_commit=False)


def create_db_and_tables() -> None:
    """Создать таблицы по метаданным моделей (тесты и первый запуск без Alembic)."""
    import trophyhunter.core.storage.models  # noqa: F401 (регистрирует модели в Base)
    Base.metadata.create_all(bind=engine)
    log.debug("Tables created: %s", ", ".join(Base.metadata.tables))


def drop_db_and_tables() -> None:
    Base.metadata.drop_all(bind=engine)
    log.debug("Tables dropped")


# --- Контекстный менеджер с commit/rollback ---
@contextlib.contextmanager
def session_context(factory: Optional[Callable[[], Session]] = None) -> Iterator[Session]:
    session: Session = (factory or session_factory)()
    log.debug("Entering session context %s", id(session))
    try:
        yield session
        log.debug("Committing session %s from context", id(session))
        session.commit()
    except SQLAlchemyError:
        log.exception("Rolling back session %s from context due to DB error", id(session))
        session.rollback()
        raise
    except Exception:
        log.exception("Rolling back session %s from context due to exception", id(session))
        session.rollback()
        raise
    finally:
        log.debug("Closing session %s from context", id(session))
        session.close()


# --- Экспорты ---
__all__ = [
    "Base", "engine", "session_factory", "Session",
    "session_context", "create_db_and_tables", "drop_db_and_tables",
]
