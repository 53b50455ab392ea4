"""
Bootstrap Module

Prepares the process before the catalog services start: checks the
interpreter, creates the data directories and sets up logging.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Configure basic logging before anything else
logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
logger = logging.getLogger(__name__)


class BootstrapError(Exception):
    """Exception raised during bootstrap process."""
    pass


class RuntimeBootstrap:
    """
    Handles the bootstrap process.

    This class is responsible for:
    - Python version validation
    - Data directory creation
    - Log file and level configuration
    """

    def __init__(self):
        self._initialized = False
        self._errors: list[str] = []
        self._warnings: list[str] = []

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    @property
    def errors(self) -> list[str]:
        return self._errors.copy()

    @property
    def warnings(self) -> list[str]:
        return self._warnings.copy()

    def bootstrap(self, log_to_file: bool = True) -> bool:
        """
        Perform the bootstrap process.

        Args:
            log_to_file: If False, only console logging is configured.

        Returns:
            bool: True if bootstrap was successful.

        Raises:
            BootstrapError: If a critical error occurs during bootstrap.
        """
        if self._initialized:
            logger.debug("Bootstrap already completed")
            return True

        logger.debug("Starting runtime bootstrap...")

        try:
            self._configure_runtime()
            self._initialize_logging(log_to_file)

            self._initialized = True
            logger.debug("Runtime bootstrap completed successfully")

            for warning in self._warnings:
                logger.warning(warning)

            return True

        except BootstrapError:
            raise
        except Exception as e:
            error_msg = f"Bootstrap failed: {e}"
            self._errors.append(error_msg)
            logger.error(error_msg)
            raise BootstrapError(error_msg) from e

    def _configure_runtime(self) -> None:
        """Validate the interpreter and create the data directories."""
        from .runtime_config import get_runtime_config

        config = get_runtime_config()

        version_ok, version_msg = config.validate_python_version()
        if not version_ok:
            raise BootstrapError(version_msg)

        for directory in (config.paths.config_dir, config.paths.logs_dir, config.paths.database_dir):
            directory.mkdir(parents=True, exist_ok=True)

        logger.debug(f"Data dir: {config.paths.data_dir}")

    def _initialize_logging(self, log_to_file: bool) -> None:
        """Apply the configured log level and attach the rotating log file."""
        from ..core.config import get_config
        from .runtime_config import get_runtime_config

        level_name = str(get_config("logging.level", "INFO")).upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            self._warnings.append(f"Unknown log level '{level_name}', using INFO")
            level = logging.INFO
        logging.getLogger().setLevel(level)

        if not log_to_file:
            return

        log_file = get_runtime_config().paths.logs_dir / "aniplayer.log"

        try:
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=int(get_config("logging.max_bytes", 10 * 1024 * 1024)),
                backupCount=int(get_config("logging.backup_count", 5)),
                encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

            # Add to root logger
            logging.getLogger().addHandler(file_handler)

            logger.debug(f"Log file: {log_file}")

        except OSError as e:
            self._warnings.append(f"Could not set up file logging: {e}")


# Global bootstrap instance
_bootstrap: Optional[RuntimeBootstrap] = None


def get_bootstrap() -> RuntimeBootstrap:
    """Get the global bootstrap instance."""
    global _bootstrap
    if _bootstrap is None:
        _bootstrap = RuntimeBootstrap()
    return _bootstrap


def bootstrap(log_to_file: bool = True) -> bool:
    """
    Perform the runtime bootstrap.

    Call this once at the start of the process, before any service is built.

    Raises:
        BootstrapError: If bootstrap fails.
    """
    return get_bootstrap().bootstrap(log_to_file=log_to_file)


def is_bootstrapped() -> bool:
    return get_bootstrap().is_initialized
