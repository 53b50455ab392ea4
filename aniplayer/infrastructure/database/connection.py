"""
Database Connection Manager

Provides database connection management with transaction support.
"""

from __future__ import annotations

import logging
import os
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.engine.url import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .models import Base

logger = logging.getLogger(__name__)

MEMORY_URL = "sqlite:///:memory:"


class DatabaseManager:
    """
    Manages database connections and sessions.

    Features:
    - SQLite backend
    - Session management with transaction support
    - Automatic table creation
    - Connection pooling and health checks
    """

    def __init__(
        self,
        db_path: str | Path | None = None,
        *,
        db_url: str | None = None,
    ):
        """
        Initialize the database manager.

        Args:
            db_path: Path to SQLite database file, or ":memory:"
            db_url: Explicit SQLite SQLAlchemy URL
        """
        self.db_url, self.db_path = self._resolve_connection_target(db_path, db_url)

        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._initialized = False

    @staticmethod
    def _resolve_connection_target(
        db_path: str | Path | None,
        db_url: str | None,
    ) -> tuple[str, Optional[Path]]:
        normalized_url = (db_url or "").strip()

        if normalized_url:
            if normalized_url.startswith("sqlite://"):
                try:
                    parsed = make_url(normalized_url)
                    sqlite_db = parsed.database
                    sqlite_path = Path(sqlite_db) if sqlite_db and sqlite_db != ":memory:" else None
                except Exception:
                    sqlite_path = None
                return normalized_url, sqlite_path
            logger.warning("Only sqlite:// URL is supported, ignore db_url=%s", normalized_url)

        if db_path is None:
            raise ValueError("SQLite backend requires db_path when db_url is not set")

        if str(db_path).strip() == ":memory:":
            return MEMORY_URL, None

        sqlite_path = Path(db_path)
        return f"sqlite:///{sqlite_path}", sqlite_path

    @property
    def is_memory(self) -> bool:
        return self.db_path is None and ":memory:" in self.db_url

    @property
    def engine(self) -> Engine:
        """Get the database engine, creating it if necessary."""
        if self._engine is None:
            self._create_engine()
        return self._engine

    def _create_engine(self) -> None:
        """Create the SQLAlchemy engine."""
        if self.db_path is not None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)

        engine_kwargs = {
            "echo": False,
            "pool_pre_ping": True,
            "connect_args": {
                "check_same_thread": False,
                "timeout": 30,
            },
        }
        # One shared connection, otherwise every session sees its own empty database
        if self.is_memory:
            engine_kwargs["poolclass"] = StaticPool

        self._engine = create_engine(self.db_url, **engine_kwargs)

        @event.listens_for(self._engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA temp_store=MEMORY")
            cursor.close()

        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

        target = str(self.db_path) if self.db_path else self.db_url
        logger.info("Database engine created: %s", target)

    def init_db(self) -> None:
        """Initialize the database, creating all tables."""
        if self._initialized:
            return

        self._health_check_or_raise()
        Base.metadata.create_all(self.engine)
        self._initialized = True
        logger.info("Database tables initialized")

    def _health_check_or_raise(self) -> None:
        """Check connection availability before full initialization."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.error("Database health check failed: %s", e)
            raise

    def get_session(self) -> Session:
        """
        Get a new database session.

        Returns:
            Session: A new SQLAlchemy session
        """
        if self._session_factory is None:
            self._create_engine()
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.

        Usage:
            with db_manager.session_scope() as session:
                session.add(obj)
                # Automatically commits on success, rolls back on exception

        Yields:
            Session: Database session
        """
        session = self.get_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            try:
                session.close()
            except Exception as e:
                logger.error("Failed to close session: %s", e)

    def close(self) -> None:
        """Close the database connection."""
        if self._engine:
            self._engine.dispose()
            self._engine = None
            self._session_factory = None
            self._initialized = False
            logger.info("Database connection closed")


def _resolve_runtime_database_config() -> tuple[str, Optional[Path]]:
    from aniplayer.core.config import AppConfig
    from aniplayer.runtime.runtime_config import get_runtime_config

    configured_url = str(AppConfig.get("database.url", "") or "").strip()
    sqlite_filename = str(AppConfig.get("database.sqlite_filename", "aniplayer.db") or "aniplayer.db").strip()
    env_url = (os.environ.get("ANIPLAYER_DATABASE_URL") or "").strip()

    if configured_url:
        if configured_url.startswith("sqlite://"):
            return configured_url, None
        logger.warning("Ignore non-sqlite database.url, fallback to local sqlite file")

    if env_url:
        if env_url.startswith("sqlite://"):
            return env_url, None
        logger.warning("Ignore non-sqlite ANIPLAYER_DATABASE_URL, fallback to local sqlite file")

    return "", get_runtime_config().paths.database_dir / sqlite_filename


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None
_db_init_lock = threading.Lock()


def get_db_manager() -> DatabaseManager:
    """
    Get the global database manager.
    Thread-safe initialization with lock to prevent race conditions.

    Returns:
        DatabaseManager: The database manager instance
    """
    global _db_manager

    if _db_manager is None:
        with _db_init_lock:
            if _db_manager is None:
                db_url, db_path = _resolve_runtime_database_config()
                if db_url:
                    manager = DatabaseManager(db_url=db_url)
                else:
                    manager = DatabaseManager(db_path=db_path)
                manager.init_db()
                _db_manager = manager
                logger.info("Database manager initialized: %s", manager.db_url)

    return _db_manager
