"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging (Loguru)
- CLI console output (Rich)
- Shared state containers

Clean architecture principle: The core layer has no dependencies on
the domain layer.
"""

from .config import (
    Config,
    DndConfig,
    LoggingConfig,
    create_default_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    load_config,
    save_default_config,
)
from .console import echo, get_console
from .output import get_log_file_path, log, setup_loguru
from .store import Store

__all__ = [
    "Config",
    "DndConfig",
    "LoggingConfig",
    "Store",
    "create_default_config",
    "echo",
    "get_config_dir",
    "get_config_path",
    "get_console",
    "get_data_dir",
    "get_log_file_path",
    "load_config",
    "log",
    "save_default_config",
    "setup_loguru",
]
