"""Unit tests for the Finder restart."""

from unittest.mock import MagicMock

from droponoff.errors import ExternalCommandError
from droponoff.models.launchctl import CommandResult
from droponoff.process_manager.finder import restart_finder


class TestRestartFinder:
    def test_kills_finder(self):
        runner = MagicMock()
        runner.run.return_value = CommandResult(success=True, message="")

        result = restart_finder(runner)

        assert result.success is True
        runner.run.assert_called_once_with("killall", "Finder")

    def test_not_running_is_not_raised(self):
        runner = MagicMock()
        runner.run.return_value = CommandResult(
            success=False, message="No matching processes", exit_code=1
        )

        assert restart_finder(runner).success is False

    def test_missing_killall_is_not_raised(self):
        runner = MagicMock()
        runner.run.side_effect = ExternalCommandError("killall command not found")

        result = restart_finder(runner)

        assert result.success is False
        assert "killall" in result.message
