"""Controllers for the macOS subsystems Dropbox hooks into."""

from droponoff.process_manager.command_runner import CommandRunner
from droponoff.process_manager.extension_controller import ExtensionController
from droponoff.process_manager.finder import restart_finder
from droponoff.process_manager.launchctl_manager import LaunchctlManager
from droponoff.process_manager.process_monitor import ProcessMonitor

__all__ = [
    "CommandRunner",
    "ExtensionController",
    "LaunchctlManager",
    "ProcessMonitor",
    "restart_finder",
]
