"""Wiring of the subsystem controllers from configuration."""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from droponoff.actions.status_actions import StatusActions
from droponoff.discovery import PathResolver
from droponoff.models.config import DroponoffConfig
from droponoff.process_manager import (
    CommandRunner,
    ExtensionController,
    LaunchctlManager,
    ProcessMonitor,
)


@dataclass
class Controllers:
    """The collaborators every action works through.

    Tests substitute any of them with fakes; nothing here talks to the
    OS until a method is called.
    """

    paths: PathResolver
    runner: CommandRunner
    processes: ProcessMonitor
    launch_agent: LaunchctlManager
    extensions: ExtensionController
    status: StatusActions

    @classmethod
    def from_config(
        cls,
        config: DroponoffConfig,
        home: Path | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> "Controllers":
        """Build the default, OS-backed controllers.

        Args:
            config: Loaded configuration
            home: Home directory override
            sleep: Sleep function for process polling

        Returns:
            Wired Controllers
        """
        paths = PathResolver(config.app, home=home)
        runner = CommandRunner()
        processes = ProcessMonitor(
            paths,
            runner,
            poll_interval=config.timing.poll_interval,
            sleep=sleep,
        )
        launch_agent = LaunchctlManager(paths, runner)
        extensions = ExtensionController(paths, runner)
        status = StatusActions(paths, processes, launch_agent, extensions)
        return cls(
            paths=paths,
            runner=runner,
            processes=processes,
            launch_agent=launch_agent,
            extensions=extensions,
            status=status,
        )
