"""Tests for the command line shell."""

import logging

import pytest
from typer.testing import CliRunner

from globe_cli import __version__
from globe_cli.cli.app import create_app
from globe_cli.cli.core.terminal import TerminalError
from globe_cli.cli.studio import viewer
from globe_cli.config import GlyphPacking

runner = CliRunner()


@pytest.fixture
def launched(monkeypatch) -> list[dict]:
    """Capture run_viewer calls instead of taking over the terminal."""
    calls: list[dict] = []
    monkeypatch.setattr(viewer, "run_viewer", lambda **kwargs: calls.append(kwargs))
    return calls


class TestModes:
    """Mode selection."""

    def test_no_flags_shows_help(self, launched) -> None:
        result = runner.invoke(create_app(), [])
        assert result.exit_code == 0
        assert "Usage" in result.output
        assert launched == []

    def test_version(self, launched) -> None:
        result = runner.invoke(create_app(), ["--version"])
        assert result.exit_code == 0
        assert f"globe-cli {__version__}" in result.output
        assert launched == []

    def test_interactive(self, launched) -> None:
        result = runner.invoke(create_app(), ["-i"])
        assert result.exit_code == 0
        assert launched[0]["interactive"] is True

    def test_screensaver(self, launched) -> None:
        result = runner.invoke(create_app(), ["-s"])
        assert result.exit_code == 0
        assert launched[0]["interactive"] is False

    def test_interactive_wins(self, launched) -> None:
        result = runner.invoke(create_app(), ["-s", "-i"])
        assert result.exit_code == 0
        assert launched[0]["interactive"] is True

    def test_cell_packing(self, launched) -> None:
        result = runner.invoke(create_app(), ["-s", "--cell-width", "2", "--cell-height", "4"])
        assert result.exit_code == 0
        assert launched[0]["config"].packing == GlyphPacking(cols=2, rows=4)

    def test_rejects_zero_packing(self, launched) -> None:
        result = runner.invoke(create_app(), ["-s", "--cell-width", "0"])
        assert result.exit_code != 0
        assert launched == []


class TestFailures:
    """Terminal failures end the process with an error."""

    def test_terminal_error(self, monkeypatch) -> None:
        def refuse(**kwargs) -> None:
            raise TerminalError("Cannot enable raw mode: not a tty")

        monkeypatch.setattr(viewer, "run_viewer", refuse)
        result = runner.invoke(create_app(), ["-i"])
        assert result.exit_code == 1
        assert "Cannot enable raw mode" in result.output


class TestLogging:
    """Debug logging goes to the requested file only."""

    @pytest.fixture(autouse=True)
    def package_logger(self, monkeypatch):
        """Log a line per run and put the package logger back afterwards."""
        def run(**kwargs) -> None:
            logging.getLogger("globe_cli.cli.studio.viewer").debug("frame drawn")

        monkeypatch.setattr(viewer, "run_viewer", run)
        logger = logging.getLogger("globe_cli")
        handlers = list(logger.handlers)
        level = logger.level
        yield logger
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.handlers = handlers
        logger.setLevel(level)

    def test_log_file(self, tmp_path) -> None:
        log_file = tmp_path / "globe.log"
        result = runner.invoke(create_app(), ["-s", "--log-file", str(log_file)])
        assert result.exit_code == 0
        assert "frame drawn" in log_file.read_text()

    def test_repeated_runs_log_each_record_once(self, package_logger, tmp_path) -> None:
        log_file = tmp_path / "globe.log"
        for _ in range(2):
            result = runner.invoke(create_app(), ["-s", "--log-file", str(log_file)])
            assert result.exit_code == 0

        assert log_file.read_text().count("frame drawn") == 2
        assert len(package_logger.handlers) == 1
