"""Shared fixtures: a simulated macOS that answers droponoff's commands."""

import sys
from pathlib import Path

import pytest

from droponoff.actions.controllers import Controllers
from droponoff.actions.status_actions import StatusActions
from droponoff.discovery import PathResolver
from droponoff.errors import ExternalCommandError
from droponoff.models.config import AppConfig, DroponoffConfig, TimingConfig
from droponoff.models.extension import ExtensionRecord
from droponoff.models.launchctl import CommandResult, ServiceState
from droponoff.models.process import ProcessRecord
from droponoff.models.status import SystemSnapshot
from droponoff.process_manager import ExtensionController, LaunchctlManager, ProcessMonitor

FILEPROVIDER = "com.getdropbox.dropbox.fileprovider"
TRANSFER = "com.getdropbox.dropbox.TransferExtension"
GARCON = "com.getdropbox.dropbox.garcon"


class FakeMac:
    """In-memory stand-in for the commands droponoff shells out to.

    Implements just enough of pgrep, osascript, open, launchctl,
    pluginkit and killall for the controllers to run unmodified.
    """

    def __init__(self, extensions: dict[str, bool] | None = None):
        self.processes: dict[int, str] = {}
        self.extensions = dict(
            extensions
            if extensions is not None
            else {FILEPROVIDER: True, TRANSFER: True, GARCON: True}
        )
        self.loaded = True
        self.next_pid = 100
        self.calls: list[list[str]] = []

    def start_app(self):
        for name in ("/Applications/Dropbox.app/Contents/MacOS/Dropbox",
                     "/Applications/Dropbox.app/Contents/PlugIns/DropboxFileProvider.appex"):
            self.processes[self.next_pid] = name
            self.next_pid += 1

    def kill(self, pid, sig):
        if pid not in self.processes:
            raise ProcessLookupError(pid)
        del self.processes[pid]

    def run(self, *args: str, check: bool = False) -> CommandResult:
        command = list(args)
        self.calls.append(command)
        result = self._dispatch(command)
        result.command = command
        if check and not result.success:
            raise ExternalCommandError(
                result.message, command=command, exit_code=result.exit_code
            )
        return result

    def _dispatch(self, command: list[str]) -> CommandResult:
        tool = command[0]

        if tool == "pgrep":
            lines = [f"{pid} {name}" for pid, name in sorted(self.processes.items())]
            if not lines:
                return CommandResult(success=False, message="", exit_code=1)
            return CommandResult(success=True, message="\n".join(lines))

        if tool == "osascript":
            self.processes = {
                pid: name for pid, name in self.processes.items()
                if "FileProvider" in name
            }
            return CommandResult(success=True, message="")

        if tool == "open":
            # LaunchServices only activates an app that is already running
            if not self.processes:
                self.start_app()
            return CommandResult(success=True, message="")

        if tool == "launchctl":
            if command[1] == "bootout":
                if not self.loaded:
                    return CommandResult(success=False, message="No such process", exit_code=3)
                self.loaded = False
                return CommandResult(success=True, message="")
            if command[1] == "bootstrap":
                if self.loaded:
                    return CommandResult(
                        success=False, message="Bootstrap failed: 5: Input/output error", exit_code=5
                    )
                self.loaded = True
                return CommandResult(success=True, message="")

        if tool == "pluginkit":
            identifier = command[-1]
            if command[1] == "-m":
                if identifier not in self.extensions:
                    return CommandResult(success=True, message="")
                mark = "+" if self.extensions[identifier] else "-"
                return CommandResult(success=True, message=f"{mark}    {identifier}(1.0)")
            if command[1] == "-e":
                if identifier not in self.extensions:
                    return CommandResult(success=False, message="no such plugin", exit_code=1)
                self.extensions[identifier] = command[2] == "use"
                return CommandResult(success=True, message="")

        if tool == "killall":
            return CommandResult(success=True, message="")

        raise AssertionError(f"unexpected command {command}")


@pytest.fixture
def home(tmp_path) -> Path:
    home = tmp_path / "home"
    (home / "Library" / "LaunchAgents").mkdir(parents=True)
    return home


@pytest.fixture
def config() -> DroponoffConfig:
    return DroponoffConfig(
        app=AppConfig(),
        timing=TimingConfig(wait_timeout=1.0, poll_interval=0.0, verify_attempts=5, verify_delay=0.0),
    )


@pytest.fixture
def paths(home, config, tmp_path) -> PathResolver:
    return PathResolver(config.app, home=home, data_volume=tmp_path / "no-data-volume")


@pytest.fixture
def fake_mac(monkeypatch) -> FakeMac:
    mac = FakeMac()
    monkeypatch.setenv("USER", "tester")
    monkeypatch.setattr(sys, "platform", "darwin")
    monkeypatch.setattr("os.kill", mac.kill)
    return mac


@pytest.fixture
def controllers(paths, fake_mac, config) -> Controllers:
    processes = ProcessMonitor(
        paths, fake_mac, poll_interval=config.timing.poll_interval, sleep=lambda _: None
    )
    launch_agent = LaunchctlManager(paths, fake_mac)
    extensions = ExtensionController(paths, fake_mac)
    status = StatusActions(paths, processes, launch_agent, extensions)
    return Controllers(
        paths=paths,
        runner=fake_mac,
        processes=processes,
        launch_agent=launch_agent,
        extensions=extensions,
        status=status,
    )


def make_snapshot(
    processes=(),
    service_state=ServiceState.DISABLED,
    extensions=None,
) -> SystemSnapshot:
    """Build a snapshot from (identifier, enabled, found) triples."""
    if extensions is None:
        extensions = [(FILEPROVIDER, False, True), (TRANSFER, False, True), (GARCON, False, True)]
    return SystemSnapshot(
        app_path=Path("/Applications/Dropbox.app"),
        processes=tuple(ProcessRecord(pid, name) for pid, name in processes),
        service_state=service_state,
        extensions=tuple(
            (ident, ExtensionRecord(ident, enabled=enabled, found=found))
            for ident, enabled, found in extensions
        ),
    )


@pytest.fixture
def snapshot_factory():
    return make_snapshot
