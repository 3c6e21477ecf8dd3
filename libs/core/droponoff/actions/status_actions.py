"""Point-in-time status of every subsystem."""

from droponoff.discovery import PathResolver
from droponoff.models.status import SystemSnapshot
from droponoff.process_manager import ExtensionController, LaunchctlManager, ProcessMonitor


class StatusActions:
    """Builds SystemSnapshots from the three controllers.

    Nothing is cached; every snapshot re-queries the OS.
    """

    def __init__(
        self,
        paths: PathResolver,
        processes: ProcessMonitor,
        launch_agent: LaunchctlManager,
        extensions: ExtensionController,
    ):
        self.paths = paths
        self.processes = processes
        self.launch_agent = launch_agent
        self.extensions = extensions

    def snapshot(self) -> SystemSnapshot:
        """Query all subsystems.

        Returns:
            A fresh SystemSnapshot
        """
        return SystemSnapshot(
            app_path=self.paths.find_app(),
            processes=tuple(self.processes.list_processes()),
            service_state=self.launch_agent.current_state(),
            extensions=tuple(self.extensions.query_all()),
        )
