"""
Configuration management for tracksplice
"""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from loguru import logger

VALID_DND_MODES = {"copy", "move"}


@dataclass
class DndConfig:
    """Configuration for drag-and-drop behaviour."""

    default_mode: str = "copy"  # Mode for cross-list drops: 'copy' or 'move'
    row_height: int = 56  # Height of a rendered track row in pixels
    header_offset: int = 0  # Fixed header content above the virtualized list
    allow_mode_inversion: bool = True  # Ctrl/Cmd flips copy <-> move

    def validate(self) -> None:
        """Validate drag-and-drop configuration values.

        Raises:
            ValueError: If configuration values are invalid
        """
        if self.default_mode not in VALID_DND_MODES:
            raise ValueError(
                f"Invalid dnd mode: {self.default_mode!r}. "
                f"Valid modes are: {sorted(VALID_DND_MODES)}"
            )
        if self.row_height <= 0:
            raise ValueError(f"row_height must be positive, got {self.row_height}")
        if self.header_offset < 0:
            raise ValueError(
                f"header_offset must not be negative, got {self.header_offset}"
            )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_file: Optional[str] = (
        None  # Custom log file path (default: ~/.local/share/tracksplice/tracksplice.log)
    )
    console_output: bool = False  # Also output to stderr (for debugging)


@dataclass
class Config:
    """Main configuration object."""

    dnd: DndConfig = field(default_factory=DndConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_dir() -> Path:
    """Get the configuration directory path."""
    config_home = os.environ.get("XDG_CONFIG_HOME")
    if config_home:
        return Path(config_home) / "tracksplice"
    return Path.home() / ".config" / "tracksplice"


def get_data_dir() -> Path:
    """Get the data directory path."""
    data_home = os.environ.get("XDG_DATA_HOME")
    if data_home:
        return Path(data_home) / "tracksplice"
    return Path.home() / ".local" / "share" / "tracksplice"


def _find_project_config() -> Optional[Path]:
    """Find config.toml in the project root by looking for pyproject.toml.

    Returns:
        Path to config.toml in project root, or None if not found
    """
    current = Path(__file__).resolve().parent
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            config_path = parent / "config.toml"
            return config_path if config_path.exists() else None
    return None


def get_config_path() -> Path:
    """Get the main configuration file path.

    Checks for config.toml in the following order:
    1. Project root (detected via pyproject.toml) - for development
    2. Current working directory
    3. XDG_CONFIG_HOME/tracksplice (or ~/.config/tracksplice)
    """
    project_config = _find_project_config()
    if project_config:
        return project_config

    local_config = Path.cwd() / "config.toml"
    if local_config.exists():
        return local_config

    return get_config_dir() / "config.toml"


def create_default_config() -> str:
    """Create a default configuration TOML content."""
    return """
# tracksplice configuration

[dnd]
# Mode used when dragging between different playlists ("copy" or "move")
default_mode = "copy"

# Height of a single track row in pixels
row_height = 56

# Height of fixed header content above the track list
header_offset = 0

# Holding Ctrl/Cmd inverts copy <-> move on editable sources
allow_mode_inversion = true

[logging]
# Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
level = "INFO"

# Custom log file path (default: ~/.local/share/tracksplice/tracksplice.log)
# log_file = "/path/to/tracksplice.log"

# Also output logs to stderr
console_output = false
""".strip()


def _parse_dnd(dnd_data: dict, defaults: DndConfig) -> DndConfig:
    dnd = DndConfig(
        default_mode=dnd_data.get("default_mode", defaults.default_mode),
        row_height=dnd_data.get("row_height", defaults.row_height),
        header_offset=dnd_data.get("header_offset", defaults.header_offset),
        allow_mode_inversion=dnd_data.get(
            "allow_mode_inversion", defaults.allow_mode_inversion
        ),
    )
    try:
        dnd.validate()
    except ValueError as e:
        logger.warning(f"Invalid [dnd] configuration: {e}. Using defaults.")
        return DndConfig()
    return dnd


def _apply_env_overrides(config: Config) -> Config:
    """Environment variables override TOML values."""
    level = os.environ.get("TRACKSPLICE_LOG_LEVEL")
    if level:
        config.logging.level = level.upper()

    mode = os.environ.get("TRACKSPLICE_DND_MODE")
    if mode:
        if mode in VALID_DND_MODES:
            config.dnd.default_mode = mode
        else:
            logger.warning(f"Ignoring TRACKSPLICE_DND_MODE={mode!r}")
    return config


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from file, falling back to defaults.

    Environment variables override TOML values:
    - TRACKSPLICE_LOG_LEVEL
    - TRACKSPLICE_DND_MODE
    """
    from dotenv import load_dotenv

    env_path = get_config_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)

    path = config_path or get_config_path()
    if not path.exists():
        return _apply_env_overrides(Config())

    try:
        with open(path, "rb") as f:
            toml_data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Error loading configuration from {path}: {e}")
        return _apply_env_overrides(Config())

    config = Config()

    if "dnd" in toml_data:
        config.dnd = _parse_dnd(toml_data["dnd"], config.dnd)

    if "logging" in toml_data:
        logging_data = toml_data["logging"]
        log_file = logging_data.get("log_file")
        if log_file:
            log_file = str(Path(log_file).expanduser())
        config.logging = LoggingConfig(
            level=logging_data.get("level", config.logging.level).upper(),
            log_file=log_file,
            console_output=logging_data.get(
                "console_output", config.logging.console_output
            ),
        )

    return _apply_env_overrides(config)


def save_default_config(path: Optional[Path] = None) -> Path:
    """Write the default configuration file if none exists yet."""
    config_path = path or get_config_dir() / "config.toml"
    if not config_path.exists():
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(create_default_config() + "\n", encoding="utf-8")
    return config_path
