"""
Tests for loguru setup and the unified log() helper.
"""

from loguru import logger

from tracksplice.core.output import get_log_file_path, log, setup_loguru


class TestSetupLoguru:
    """Test loguru sink configuration."""

    def test_default_log_file_in_data_dir(self, isolated_dirs) -> None:
        """Logs go to the XDG data directory by default."""
        path = setup_loguru()

        assert path == get_log_file_path()
        assert path.parent == isolated_dirs / "data" / "tracksplice"
        assert path.exists()

    def test_messages_reach_log_file(self, tmp_path) -> None:
        """Messages at or above the level are written."""
        path = setup_loguru(tmp_path / "logs" / "splice.log", level="DEBUG")

        logger.debug("reorder planned")
        logger.complete()

        assert "reorder planned" in path.read_text()

    def test_level_filters_messages(self, tmp_path) -> None:
        """Messages below the level are dropped."""
        path = setup_loguru(tmp_path / "splice.log", level="WARNING")

        logger.info("quiet")
        logger.warning("loud")

        content = path.read_text()
        assert "quiet" not in content
        assert "loud" in content


class TestLog:
    """Test the unified log() helper."""

    def test_info_goes_to_stdout(self, tmp_path, capsys) -> None:
        """Info messages are printed to stdout."""
        setup_loguru(tmp_path / "splice.log")

        log("Moved 2 tracks")

        captured = capsys.readouterr()
        assert "Moved 2 tracks" in captured.out
        assert captured.err == ""

    def test_error_goes_to_stderr(self, tmp_path, capsys) -> None:
        """Warnings and errors are printed to stderr."""
        setup_loguru(tmp_path / "splice.log")

        log("Drop blocked", level="error")

        captured = capsys.readouterr()
        assert "Drop blocked" in captured.err

    def test_message_also_logged(self, tmp_path, capsys) -> None:
        """The echoed message is written to the log file as well."""
        path = setup_loguru(tmp_path / "splice.log")

        log("Wrote 4 tracks to out.json")

        assert "Wrote 4 tracks to out.json" in path.read_text()
        assert "Wrote 4 tracks" in capsys.readouterr().out
