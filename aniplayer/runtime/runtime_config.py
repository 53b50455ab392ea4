"""
Runtime Configuration Module

Resolves the application data directories (config, logs, database) for
either a source checkout or a user installation.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

HOME_ENV_VAR = "ANIPLAYER_HOME"


@dataclass
class RuntimePaths:
    """Container for all runtime-related paths."""

    data_dir: Path
    config_dir: Path
    logs_dir: Path
    database_dir: Path


@dataclass
class RuntimeConfig:
    """Configuration for the current runtime environment."""

    is_frozen: bool = False
    min_python_version: tuple[int, int] = (3, 10)
    paths: Optional[RuntimePaths] = None

    @classmethod
    def detect(cls) -> RuntimeConfig:
        """
        Detect the current runtime configuration.

        ``ANIPLAYER_HOME`` overrides the data directory; otherwise the
        platform's per-user application data folder is used.
        """
        config = cls()
        config.is_frozen = getattr(sys, 'frozen', False)
        config.paths = cls._build_paths(cls._resolve_data_dir())
        return config

    @staticmethod
    def _resolve_data_dir() -> Path:
        override = (os.environ.get(HOME_ENV_VAR) or "").strip()
        if override:
            return Path(override).expanduser()

        if sys.platform == "win32":
            appdata = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
            return appdata / "AniPlayer"
        if sys.platform == "darwin":
            return Path.home() / "Library" / "Application Support" / "AniPlayer"

        xdg = os.environ.get("XDG_DATA_HOME")
        base = Path(xdg) if xdg else Path.home() / ".local" / "share"
        return base / "aniplayer"

    @staticmethod
    def _build_paths(data_dir: Path) -> RuntimePaths:
        return RuntimePaths(
            data_dir=data_dir,
            config_dir=data_dir / "config",
            logs_dir=data_dir / "logs",
            database_dir=data_dir / "database",
        )

    def validate_python_version(self) -> tuple[bool, str]:
        """Check the running interpreter against the minimum version."""
        current = sys.version_info[:2]
        if current < self.min_python_version:
            required = ".".join(str(v) for v in self.min_python_version)
            return False, f"Python {required}+ required, running {current[0]}.{current[1]}"
        return True, f"Python {current[0]}.{current[1]}"


# Global runtime configuration instance
_runtime_config: Optional[RuntimeConfig] = None


def get_runtime_config() -> RuntimeConfig:
    """
    Get the global runtime configuration, detecting it if necessary.

    Returns:
        RuntimeConfig: The current runtime configuration.
    """
    global _runtime_config
    if _runtime_config is None:
        _runtime_config = RuntimeConfig.detect()
    return _runtime_config


def get_data_dir() -> Path:
    """Get the data directory."""
    return get_runtime_config().paths.data_dir


def get_config_dir() -> Path:
    """Get the configuration directory."""
    return get_runtime_config().paths.config_dir
