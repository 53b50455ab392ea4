"""
Schema Migration Helpers

Builds an Alembic configuration for the packaged migration scripts, so the
schema can be upgraded or stamped without an alembic.ini on disk.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def get_alembic_config(db_url: Optional[str] = None) -> Config:
    """
    Create an Alembic Config pointing at the bundled migrations.

    Args:
        db_url: SQLite URL to migrate; when omitted the environment script
            resolves the runtime database.
    """
    cfg = Config()
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    if db_url:
        if not db_url.startswith("sqlite://"):
            raise ValueError(f"Only sqlite:// URLs are supported, got: {db_url}")
        cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def upgrade(db_url: Optional[str] = None, revision: str = "head") -> None:
    """Upgrade the schema to *revision*."""
    command.upgrade(get_alembic_config(db_url), revision)
    logger.info(f"Database upgraded to {revision}")


def stamp(db_url: Optional[str] = None, revision: str = "head") -> None:
    """Record *revision* as current without running any SQL."""
    command.stamp(get_alembic_config(db_url), revision)
    logger.info(f"Database stamped at {revision}")


def current(db_url: Optional[str] = None, verbose: bool = False) -> None:
    """Print the current revision."""
    command.current(get_alembic_config(db_url), verbose=verbose)
