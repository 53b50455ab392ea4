"""
Alembic migration environment for the AniPlayer catalog.
"""

from __future__ import annotations

import os
from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool

from aniplayer.infrastructure.database.connection import _resolve_runtime_database_config
from aniplayer.infrastructure.database.models import Base


config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def _get_sqlalchemy_url() -> str:
    x_url = context.get_x_argument(as_dictionary=True).get("db_url", "").strip()
    if x_url.startswith("sqlite://"):
        return x_url
    if x_url:
        print("[WARN] Ignore non-sqlite --x db_url")

    configured_url = (config.get_main_option("sqlalchemy.url") or "").strip()
    if configured_url:
        return configured_url

    env_url = (os.environ.get("ANIPLAYER_DATABASE_URL") or "").strip()
    if env_url.startswith("sqlite://"):
        return env_url
    if env_url:
        print("[WARN] Ignore non-sqlite ANIPLAYER_DATABASE_URL")

    resolved_url, resolved_path = _resolve_runtime_database_config()
    if resolved_url:
        return resolved_url
    return f"sqlite:///{resolved_path}"


def run_migrations_offline() -> None:
    url = _get_sqlalchemy_url()
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
        compare_server_default=True,
        render_as_batch=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = create_engine(_get_sqlalchemy_url(), poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            compare_server_default=True,
            render_as_batch=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
