"""macOS launchctl manager for the updater LaunchAgent."""

import sys

from droponoff.discovery import PathResolver
from droponoff.errors import DiscoveryError, ExternalCommandError
from droponoff.models.launchctl import CommandResult, ServiceState
from droponoff.process_manager.command_runner import CommandRunner
from droponoff_logging import get_logger

logger = get_logger("launchctl")


class LaunchctlManager:
    """Manages the Dropbox updater LaunchAgent.

    Two things are controlled here: whether launchd currently has the
    agent loaded (bootstrap/bootout), and whether it is durably enabled.
    The durable flag is the plist file itself; disabling renames it to
    ``<name>.plist.disabled`` so launchd no longer picks it up at login.
    """

    def __init__(
        self,
        paths: PathResolver | None = None,
        runner: CommandRunner | None = None,
    ):
        """Initialize the launchctl manager.

        Args:
            paths: Resolver for the plist locations
            runner: Command runner used to call launchctl
        """
        self.paths = paths or PathResolver()
        self.runner = runner or CommandRunner()

    @property
    def label(self) -> str:
        return self.paths.app.launch_agent_label

    def is_macos(self) -> bool:
        """Check if running on macOS.

        Returns:
            True if running on macOS
        """
        return sys.platform == "darwin"

    def current_state(self) -> ServiceState:
        """Read the durable state from the marker files.

        Returns:
            ENABLED if the plist is in place, DISABLED if only the parked
            copy exists, MISSING if neither does
        """
        if self.paths.launch_agent_path.exists():
            return ServiceState.ENABLED
        if self.paths.launch_agent_disabled_path.exists():
            return ServiceState.DISABLED
        return ServiceState.MISSING

    def unload(self) -> CommandResult:
        """Bootout the agent from the user's GUI domain.

        An agent that is not loaded makes launchctl exit non-zero; that
        outcome is returned rather than raised.

        Returns:
            CommandResult from launchctl

        Raises:
            ExternalCommandError: If launchctl cannot be run
        """
        self._require_macos()

        service_target = f"gui/{self.paths.current_uid()}/{self.label}"
        result = self.runner.run("launchctl", "bootout", service_target)

        if not result.success:
            logger.debug(
                "  LaunchAgent was not loaded",
                exit_code=result.exit_code,
                stderr=result.stderr,
            )
        return result

    def load(self) -> CommandResult:
        """Bootstrap the agent into the user's GUI domain.

        Returns:
            CommandResult from launchctl

        Raises:
            DiscoveryError: If the enabled plist does not exist
            ExternalCommandError: If launchctl cannot be run
        """
        plist_path = self.paths.launch_agent_path
        if not plist_path.exists():
            raise DiscoveryError(f"LaunchAgent plist not found at {plist_path}")

        self._require_macos()

        domain_target = f"gui/{self.paths.current_uid()}"
        result = self.runner.run("launchctl", "bootstrap", domain_target, str(plist_path))

        if not result.success:
            # bootstrap refuses an agent that is already loaded
            logger.warning(
                f"  launchctl bootstrap exited with {result.exit_code}: {result.message}",
            )
        return result

    def disable(self) -> None:
        """Park the plist so launchd ignores it.

        Raises:
            DiscoveryError: If neither marker exists
            OSError: If the rename fails
        """
        state = self.current_state()
        if state is ServiceState.DISABLED:
            logger.info("  LaunchAgent already disabled")
            return
        if state is ServiceState.MISSING:
            raise DiscoveryError(
                f"LaunchAgent plist not found at {self.paths.launch_agent_path}"
            )

        enabled_path = self.paths.launch_agent_path
        disabled_path = self.paths.launch_agent_disabled_path
        enabled_path.rename(disabled_path)
        logger.info(f"  Renamed {enabled_path} → {disabled_path}")

    def enable(self) -> None:
        """Restore the parked plist.

        Raises:
            DiscoveryError: If neither marker exists
            OSError: If the rename fails
        """
        state = self.current_state()
        if state is ServiceState.ENABLED:
            logger.info("  LaunchAgent already enabled")
            return
        if state is ServiceState.MISSING:
            raise DiscoveryError(
                f"LaunchAgent plist not found at {self.paths.launch_agent_path}"
                f" or {self.paths.launch_agent_disabled_path}"
            )

        enabled_path = self.paths.launch_agent_path
        disabled_path = self.paths.launch_agent_disabled_path
        disabled_path.rename(enabled_path)
        logger.info(f"  Renamed {disabled_path} → {enabled_path}")

    def _require_macos(self) -> None:
        if not self.is_macos():
            raise ExternalCommandError(
                "launchctl is only available on macOS",
                command=["launchctl"],
                exit_code=1,
            )
