"""
Tests for configuration loading, validation and environment overrides.
"""

import os

import pytest

from tracksplice.core.config import (
    Config,
    DndConfig,
    create_default_config,
    get_config_dir,
    get_data_dir,
    load_config,
    save_default_config,
)


class TestDndConfigValidate:
    """Test drag-and-drop configuration validation."""

    def test_defaults_are_valid(self) -> None:
        """Default values pass validation."""
        DndConfig().validate()

    def test_rejects_unknown_mode(self) -> None:
        """Modes other than copy/move are rejected."""
        with pytest.raises(ValueError, match="Invalid dnd mode"):
            DndConfig(default_mode="link").validate()

    def test_rejects_non_positive_row_height(self) -> None:
        """A zero row height is rejected."""
        with pytest.raises(ValueError, match="row_height"):
            DndConfig(row_height=0).validate()

    def test_rejects_negative_header_offset(self) -> None:
        """A negative header offset is rejected."""
        with pytest.raises(ValueError, match="header_offset"):
            DndConfig(header_offset=-1).validate()


class TestDirectories:
    """Test XDG directory resolution."""

    def test_config_dir_uses_xdg(self, isolated_dirs) -> None:
        """XDG_CONFIG_HOME is honoured."""
        assert get_config_dir() == isolated_dirs / "config" / "tracksplice"

    def test_data_dir_uses_xdg(self, isolated_dirs) -> None:
        """XDG_DATA_HOME is honoured."""
        assert get_data_dir() == isolated_dirs / "data" / "tracksplice"


class TestLoadConfig:
    """Test loading configuration from TOML."""

    def test_missing_file_gives_defaults(self, tmp_path) -> None:
        """A missing file yields the default configuration."""
        config = load_config(tmp_path / "nope.toml")
        assert config == Config()

    def test_reads_dnd_and_logging_sections(self, tmp_path) -> None:
        """Values from both sections are applied."""
        path = tmp_path / "config.toml"
        path.write_text(
            '[dnd]\ndefault_mode = "move"\nrow_height = 40\n\n'
            '[logging]\nlevel = "debug"\nconsole_output = true\n'
        )

        config = load_config(path)

        assert config.dnd.default_mode == "move"
        assert config.dnd.row_height == 40
        assert config.dnd.header_offset == 0
        assert config.logging.level == "DEBUG"
        assert config.logging.console_output is True

    def test_invalid_dnd_section_falls_back_to_defaults(self, tmp_path) -> None:
        """An invalid [dnd] section is replaced by defaults, not raised."""
        path = tmp_path / "config.toml"
        path.write_text('[dnd]\ndefault_mode = "teleport"\nrow_height = 40\n')

        config = load_config(path)

        assert config.dnd == DndConfig()

    def test_malformed_toml_gives_defaults(self, tmp_path) -> None:
        """Unparseable TOML yields defaults."""
        path = tmp_path / "config.toml"
        path.write_text("[dnd\nrow_height = ")

        assert load_config(path) == Config()

    def test_log_file_is_expanded(self, tmp_path) -> None:
        """A ~ in log_file is expanded."""
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlog_file = "~/splice.log"\n')

        config = load_config(path)

        assert not config.logging.log_file.startswith("~")
        assert config.logging.log_file.endswith("splice.log")


class TestEnvironmentOverrides:
    """Test TRACKSPLICE_* environment variables."""

    def test_log_level_override(self, tmp_path, monkeypatch) -> None:
        """TRACKSPLICE_LOG_LEVEL beats the file value."""
        path = tmp_path / "config.toml"
        path.write_text('[logging]\nlevel = "INFO"\n')
        monkeypatch.setenv("TRACKSPLICE_LOG_LEVEL", "warning")

        assert load_config(path).logging.level == "WARNING"

    def test_dnd_mode_override(self, tmp_path, monkeypatch) -> None:
        """TRACKSPLICE_DND_MODE sets the default mode."""
        monkeypatch.setenv("TRACKSPLICE_DND_MODE", "move")

        assert load_config(tmp_path / "missing.toml").dnd.default_mode == "move"

    def test_invalid_dnd_mode_override_is_ignored(self, tmp_path, monkeypatch) -> None:
        """An unknown mode in the environment is ignored."""
        monkeypatch.setenv("TRACKSPLICE_DND_MODE", "teleport")

        assert load_config(tmp_path / "missing.toml").dnd.default_mode == "copy"

    def test_dotenv_in_config_dir_is_loaded(self, tmp_path) -> None:
        """A .env file in the config directory feeds the overrides."""
        env_dir = get_config_dir()
        env_dir.mkdir(parents=True)
        (env_dir / ".env").write_text("TRACKSPLICE_DND_MODE=move\n")

        try:
            config = load_config(tmp_path / "missing.toml")
        finally:
            os.environ.pop("TRACKSPLICE_DND_MODE", None)

        assert config.dnd.default_mode == "move"


class TestDefaultConfigFile:
    """Test writing the default configuration."""

    def test_default_config_round_trips(self, tmp_path) -> None:
        """The generated default file loads back as the defaults."""
        path = save_default_config(tmp_path / "config.toml")

        assert path.read_text().strip() == create_default_config()
        assert load_config(path) == Config()

    def test_existing_file_is_not_overwritten(self, tmp_path) -> None:
        """An existing config file is left alone."""
        path = tmp_path / "config.toml"
        path.write_text("# mine\n")

        save_default_config(path)

        assert path.read_text() == "# mine\n"
