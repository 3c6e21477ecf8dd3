"""Enumeration and lifecycle control of the Dropbox processes."""

import os
import re
import signal
import time
from typing import Callable

from droponoff.discovery import PathResolver
from droponoff.errors import DroponoffError, ExternalCommandError, WaitTimeoutError
from droponoff.models.process import ProcessRecord, ProcessSelector
from droponoff.process_manager.command_runner import CommandRunner
from droponoff_logging import get_logger

logger = get_logger("processes")


class ProcessMonitor:
    """Finds, stops, starts and waits on the app's processes.

    There is no event source for third-party process lifecycle, so every
    wait is a poll over ``pgrep``. The poll interval only trades latency
    against overhead; a wait ends when the condition is observed or the
    timeout passes.
    """

    def __init__(
        self,
        paths: PathResolver | None = None,
        runner: CommandRunner | None = None,
        poll_interval: float = 0.1,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the process monitor.

        Args:
            paths: Resolver supplying the app identity and current user
            runner: Command runner used for pgrep, osascript and open
            poll_interval: Seconds between polls while waiting
            sleep: Sleep function used between polls
            clock: Monotonic clock used for wait deadlines
        """
        self.paths = paths or PathResolver()
        self.runner = runner or CommandRunner()
        self.poll_interval = poll_interval
        self._sleep = sleep
        self._clock = clock
        self._file_provider_re = re.compile(self.paths.app.file_provider_pattern)

    @property
    def app_name(self) -> str:
        return self.paths.app.name

    def list_processes(self) -> list[ProcessRecord]:
        """List the current user's processes matching the app pattern.

        Returns:
            Matching processes; empty when nothing matches

        Raises:
            DiscoveryError: If the current user cannot be determined
            ExternalCommandError: If pgrep cannot run or reports an error
        """
        user = self.paths.current_user()
        result = self.runner.run(
            "pgrep", "-l", "-u", user, "-f", self.paths.app.process_pattern
        )

        if not result.success:
            # pgrep exits 1 when nothing matched
            if result.exit_code == 1:
                return []
            raise ExternalCommandError(
                f"pgrep exited with {result.exit_code}: {result.message}",
                command=result.command,
                exit_code=result.exit_code,
                stderr=result.stderr,
            )

        processes = []
        for line in result.message.splitlines():
            parts = line.strip().split(" ", 1)
            if len(parts) < 2 or not parts[0].isdigit():
                continue
            processes.append(ProcessRecord(pid=int(parts[0]), name=parts[1]))
        return processes

    def is_file_provider(self, process: ProcessRecord) -> bool:
        return self._file_provider_re.search(process.name) is not None

    def partition(
        self, processes: list[ProcessRecord]
    ) -> tuple[list[ProcessRecord], list[ProcessRecord]]:
        """Split processes into (file provider, everything else)."""
        file_provider = [p for p in processes if self.is_file_provider(p)]
        others = [p for p in processes if not self.is_file_provider(p)]
        return file_provider, others

    def file_provider_processes(self) -> list[ProcessRecord]:
        return self.partition(self.list_processes())[0]

    def select(self, selector: ProcessSelector) -> list[ProcessRecord]:
        processes = self.list_processes()
        if selector is ProcessSelector.NON_FILE_PROVIDER:
            return self.partition(processes)[1]
        return processes

    def request_graceful_quit(self) -> bool:
        """Ask the app to quit through AppleScript.

        The app may already be gone, so any failure is only a warning.

        Returns:
            True if the request was delivered
        """
        script = f'tell application "{self.app_name}" to quit'
        try:
            result = self.runner.run("osascript", "-e", script)
        except DroponoffError as e:
            logger.warning(f"  Note: failed to send quit request to {self.app_name}: {e}")
            return False

        if not result.success:
            logger.warning(
                f"  Note: quit request to {self.app_name} failed: {result.message}"
            )
            return False
        return True

    def terminate(self, processes: list[ProcessRecord]) -> None:
        """Send SIGTERM to each process.

        A process may exit between enumeration and the signal, so
        per-process failures are logged and skipped.

        Args:
            processes: Processes to terminate
        """
        for process in processes:
            try:
                os.kill(process.pid, signal.SIGTERM)
                logger.info(f"  Sent SIGTERM to PID {process.pid}: {process.name}")
            except ProcessLookupError:
                logger.debug("  Process already exited", pid=process.pid)
            except PermissionError:
                logger.warning(f"  Permission denied to terminate PID {process.pid}")
            except OSError as e:
                logger.warning(f"  Failed to terminate PID {process.pid}: {e}")

    def launch(self) -> None:
        """Ask LaunchServices to start the app by name.

        Raises:
            ExternalCommandError: If ``open`` fails
        """
        self.runner.run("open", "-a", self.app_name, check=True)

    def wait_until_empty(
        self,
        selector: ProcessSelector = ProcessSelector.ALL,
        timeout: float = 10.0,
    ) -> None:
        """Poll until no selected process is left.

        Args:
            selector: Which processes must be gone
            timeout: Seconds before giving up

        Raises:
            WaitTimeoutError: If processes remain at the deadline
        """
        deadline = self._clock() + timeout
        while True:
            remaining = self.select(selector)
            if not remaining:
                return

            if self._clock() >= deadline:
                names = [p.name for p in remaining]
                raise WaitTimeoutError(
                    f"Timeout waiting for {self.app_name} processes to stop. "
                    f"{len(names)} still running: {', '.join(names)}",
                    remaining=names,
                )

            self._sleep(self.poll_interval)

    def wait_until_non_empty(self, timeout: float = 10.0) -> None:
        """Poll until at least one process of the app is running.

        Args:
            timeout: Seconds before giving up

        Raises:
            WaitTimeoutError: If nothing started before the deadline
        """
        deadline = self._clock() + timeout
        while True:
            if self.list_processes():
                return

            if self._clock() >= deadline:
                raise WaitTimeoutError(f"Timeout waiting for {self.app_name} to start")

            self._sleep(self.poll_interval)
