"""CLI tests using typer's CliRunner."""

from unittest.mock import patch

from typer.testing import CliRunner

from cmdpal import __version__
from cmdpal.main import app
from cmdpal.services.kv_store import JsonFileStore
from cmdpal.ui.command_palette.palette_recent import RecencyLedger

runner = CliRunner()


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_cli_help(self):
        """Test help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "Usage:" in result.stdout

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout

    def test_invalid_command(self):
        result = runner.invoke(app, ["nonexistent-command"])
        assert result.exit_code != 0


class TestRecentCommand:
    """Test `cmdpal recent`."""

    def test_empty(self):
        result = runner.invoke(app, ["recent"])
        assert result.exit_code == 0
        assert "No recent commands" in result.stdout

    def test_lists_most_recent_first(self):
        ledger = RecencyLedger(JsonFileStore())
        ledger.record_activation("profile")
        ledger.record_activation("settings")

        result = runner.invoke(app, ["recent"])

        assert result.exit_code == 0
        assert result.stdout.index("settings") < result.stdout.index("profile")

    def test_clear(self):
        RecencyLedger(JsonFileStore()).record_activation("home")

        result = runner.invoke(app, ["recent", "--clear"])

        assert result.exit_code == 0
        assert RecencyLedger(JsonFileStore()).list() == ()


class TestRankCommand:
    """Test `cmdpal rank`."""

    def test_default_ranking(self):
        result = runner.invoke(app, ["rank"])
        assert result.exit_code == 0
        assert "home" in result.stdout
        assert "navigation" in result.stdout

    def test_query(self):
        result = runner.invoke(app, ["rank", "prm"])
        assert result.exit_code == 0
        assert "premium" in result.stdout

    def test_no_match(self):
        result = runner.invoke(app, ["rank", "qqqqqq"])
        assert result.exit_code == 1
        assert "No commands match" in result.stdout


class TestDemoCommand:
    """Test `cmdpal demo` without starting the TUI."""

    @patch("cmdpal.ui.demo_app.PaletteDemoApp.run")
    def test_demo_runs_app(self, mock_run):
        result = runner.invoke(app, ["demo"])
        assert result.exit_code == 0
        mock_run.assert_called_once()
