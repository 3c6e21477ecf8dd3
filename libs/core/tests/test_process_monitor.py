"""Unit tests for the process monitor."""

import signal
from unittest.mock import MagicMock, patch

import pytest

from droponoff.errors import DiscoveryError, ExternalCommandError, WaitTimeoutError
from droponoff.models.launchctl import CommandResult
from droponoff.models.process import ProcessRecord, ProcessSelector
from droponoff.process_manager.process_monitor import ProcessMonitor

PGREP_OUTPUT = (
    "501 /Applications/Dropbox.app/Contents/MacOS/Dropbox\n"
    "502 /Applications/Dropbox.app/Contents/PlugIns/DropboxFileProvider.appex/DropboxFileProvider\n"
    "503 /Applications/Dropbox.app/Contents/MacOS/Dropbox Web Helper\n"
)


class FakeClock:
    """Monotonic clock that advances by the amount slept."""

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def runner():
    return MagicMock()


@pytest.fixture
def monitor(paths, runner, monkeypatch):
    monkeypatch.setenv("USER", "tester")
    clock = FakeClock()
    return ProcessMonitor(paths, runner, poll_interval=0.1, sleep=clock.sleep, clock=clock)


def pgrep_result(output: str) -> CommandResult:
    if not output:
        return CommandResult(success=False, message="", exit_code=1)
    return CommandResult(success=True, message=output.strip())


class TestListProcesses:
    """Tests for process enumeration."""

    def test_parses_pgrep_output(self, monitor, runner):
        """Test each pgrep line becomes a ProcessRecord."""
        runner.run.return_value = pgrep_result(PGREP_OUTPUT)

        processes = monitor.list_processes()

        assert [p.pid for p in processes] == [501, 502, 503]
        assert processes[2].name == "/Applications/Dropbox.app/Contents/MacOS/Dropbox Web Helper"
        runner.run.assert_called_once_with("pgrep", "-l", "-u", "tester", "-f", "Dropbox")

    def test_no_match_is_empty(self, monitor, runner):
        """Test pgrep's exit status 1 means no processes, not an error."""
        runner.run.return_value = CommandResult(success=False, message="", exit_code=1)

        assert monitor.list_processes() == []

    def test_pgrep_error_raises(self, monitor, runner):
        """Test pgrep usage errors are surfaced."""
        runner.run.return_value = CommandResult(
            success=False, message="pgrep: illegal option", exit_code=2
        )

        with pytest.raises(ExternalCommandError):
            monitor.list_processes()

    def test_skips_unparseable_lines(self, monitor, runner):
        """Test lines without a numeric pid are ignored."""
        runner.run.return_value = CommandResult(success=True, message="garbage\n42 Dropbox")

        assert monitor.list_processes() == [ProcessRecord(42, "Dropbox")]

    def test_missing_user(self, monitor, monkeypatch):
        """Test a missing USER variable is a discovery error."""
        monkeypatch.delenv("USER")

        with pytest.raises(DiscoveryError):
            monitor.list_processes()

    def test_partition(self, monitor, runner):
        """Test file-provider processes are split from the rest."""
        runner.run.return_value = pgrep_result(PGREP_OUTPUT)

        file_provider, others = monitor.partition(monitor.list_processes())

        assert [p.pid for p in file_provider] == [502]
        assert [p.pid for p in others] == [501, 503]


class TestLifecycle:
    """Tests for quit, terminate and launch."""

    def test_graceful_quit_sends_applescript(self, monitor, runner):
        """Test the quit request goes through osascript."""
        runner.run.return_value = CommandResult(success=True, message="")

        assert monitor.request_graceful_quit() is True
        runner.run.assert_called_once_with(
            "osascript", "-e", 'tell application "Dropbox" to quit'
        )

    def test_graceful_quit_failure_is_not_fatal(self, monitor, runner):
        """Test a failed quit request returns False instead of raising."""
        runner.run.return_value = CommandResult(
            success=False, message="Application isn't running", exit_code=1
        )

        assert monitor.request_graceful_quit() is False

    def test_graceful_quit_missing_osascript(self, monitor, runner):
        """Test an unrunnable osascript is still only a warning."""
        runner.run.side_effect = ExternalCommandError("osascript command not found")

        assert monitor.request_graceful_quit() is False

    def test_terminate_sends_sigterm(self, monitor):
        """Test every process gets SIGTERM."""
        processes = [ProcessRecord(11, "a"), ProcessRecord(12, "b")]

        with patch("os.kill") as mock_kill:
            monitor.terminate(processes)

        assert mock_kill.call_count == 2
        mock_kill.assert_any_call(11, signal.SIGTERM)
        mock_kill.assert_any_call(12, signal.SIGTERM)

    def test_terminate_swallows_failures(self, monitor):
        """Test vanished or protected processes do not stop the loop."""
        processes = [ProcessRecord(11, "a"), ProcessRecord(12, "b"), ProcessRecord(13, "c")]

        with patch(
            "os.kill",
            side_effect=[ProcessLookupError, PermissionError, None],
        ) as mock_kill:
            monitor.terminate(processes)

        assert mock_kill.call_count == 3

    def test_launch_by_name(self, monitor, runner):
        """Test launching asks open for the app by name."""
        monitor.launch()

        runner.run.assert_called_once_with("open", "-a", "Dropbox", check=True)

    def test_launch_failure_raises(self, monitor, runner):
        """Test a failed open propagates."""
        runner.run.side_effect = ExternalCommandError("open exited with 1")

        with pytest.raises(ExternalCommandError):
            monitor.launch()


class TestWaits:
    """Tests for the polling waits."""

    def test_wait_until_empty_polls_until_gone(self, monitor, runner):
        """Test the wait returns once a later poll is empty."""
        runner.run.side_effect = [
            pgrep_result(PGREP_OUTPUT),
            pgrep_result(PGREP_OUTPUT),
            pgrep_result(""),
        ]

        monitor.wait_until_empty(ProcessSelector.ALL, timeout=10)

        assert runner.run.call_count == 3

    def test_wait_non_file_provider_ignores_file_provider(self, monitor, runner):
        """Test the non-file-provider wait finishes while the provider runs."""
        runner.run.return_value = pgrep_result(
            "502 /Applications/Dropbox.app/Contents/PlugIns/DropboxFileProvider.appex/DropboxFileProvider"
        )

        monitor.wait_until_empty(ProcessSelector.NON_FILE_PROVIDER, timeout=10)

        assert runner.run.call_count == 1

    def test_wait_until_empty_times_out_naming_processes(self, monitor, runner):
        """Test a process that never exits ends in a timeout naming it."""
        runner.run.return_value = pgrep_result("501 Dropbox")

        with pytest.raises(WaitTimeoutError) as exc_info:
            monitor.wait_until_empty(ProcessSelector.NON_FILE_PROVIDER, timeout=10)

        assert exc_info.value.remaining == ["Dropbox"]
        assert "Dropbox" in str(exc_info.value)
        # 10s at 100ms per poll, plus the first check
        assert 100 <= runner.run.call_count <= 102

    def test_wait_until_non_empty(self, monitor, runner):
        """Test the start wait returns on the first non-empty poll."""
        runner.run.side_effect = [pgrep_result(""), pgrep_result("501 Dropbox")]

        monitor.wait_until_non_empty(timeout=10)

        assert runner.run.call_count == 2

    def test_wait_until_non_empty_times_out(self, monitor, runner):
        """Test the start wait gives up at the deadline."""
        runner.run.return_value = pgrep_result("")

        with pytest.raises(WaitTimeoutError):
            monitor.wait_until_non_empty(timeout=1)
