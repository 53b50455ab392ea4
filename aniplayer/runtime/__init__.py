"""
Runtime Module

Handles process start-up:
- Data directory resolution (``ANIPLAYER_HOME`` override)
- Python version check
- Logging initialization

Usage:
    from aniplayer.runtime import bootstrap
    bootstrap()
"""

from .runtime_config import (
    RuntimeConfig,
    RuntimePaths,
    get_runtime_config,
    get_data_dir,
    get_config_dir,
)

from .bootstrap import (
    BootstrapError,
    RuntimeBootstrap,
    get_bootstrap,
    bootstrap,
    is_bootstrapped,
)


__all__ = [
    # Runtime configuration
    "RuntimeConfig",
    "RuntimePaths",
    "get_runtime_config",
    "get_data_dir",
    "get_config_dir",

    # Bootstrap
    "BootstrapError",
    "RuntimeBootstrap",
    "get_bootstrap",
    "bootstrap",
    "is_bootstrapped",
]
