"""
Unified output system using Loguru.
File logging for diagnostics plus rich console echo for user-facing CLI messages.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from .config import get_data_dir
from .console import echo


def get_log_file_path() -> Path:
    """Get the path to the default log file."""
    return get_data_dir() / "tracksplice.log"


def setup_loguru(
    log_file: Optional[Path] = None,
    level: str = "INFO",
    console_output: bool = False,
) -> Path:
    """
    Configure loguru sinks.

    Args:
        log_file: Path to log file (default: ~/.local/share/tracksplice/tracksplice.log)
        level: Minimum level for logging (DEBUG, INFO, WARNING, ERROR)
        console_output: Also log to stderr

    Returns:
        Path of the log file in use
    """
    path = log_file or get_log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    # Remove default handler
    logger.remove()

    logger.add(
        path,
        rotation="10 MB",
        retention=5,  # Keep 5 backup files
        level=level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}",
        enqueue=False,
    )

    if console_output:
        logger.add(sys.stderr, level=level, format="{level}: {message}")

    logger.info(f"Loguru initialized: {path} (level={level})")
    return path


def log(message: str, level: str = "info") -> None:
    """
    Unified logging: writes to the log file AND prints for the user.

    Args:
        message: User-facing message
        level: Log level (debug, info, warning, error)
    """
    log_func = getattr(logger, level)
    log_func(message)
    echo(message, level)
