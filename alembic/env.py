# /alembic/env.py

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

# --- Конфигурация ---
# Это объект конфигурации Alembic, читает alembic.ini
config = context.config

# Интерпретируем файл конфигурации для стандартного логирования Python.
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# --- Метаданные Моделей ---
from trophyhunter.config import settings
from trophyhunter.db.base import Base

import trophyhunter.core.storage.models # noqa (KeyValueEntry)

target_metadata = Base.metadata

# URL из alembic.ini имеет приоритет, иначе берём DATABASE_URL из настроек
if not config.get_main_option("sqlalchemy.url"):
    config.set_main_option("sqlalchemy.url", settings.DATABASE_URL)


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode.
    Генерирует SQL скрипты без подключения к БД.
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode.
    Подключается к БД и применяет миграции.
    """
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            render_as_batch=connection.dialect.name == "sqlite",
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
