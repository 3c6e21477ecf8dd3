"""ON/OFF transitions across processes, LaunchAgent and extensions."""

import time
from typing import Callable

from droponoff.actions.controllers import Controllers
from droponoff.actions.verification import off_problems, on_problems, verify_with_retry
from droponoff.errors import DroponoffError
from droponoff.models.actions import ActionResult
from droponoff.models.config import DroponoffConfig
from droponoff.models.process import ProcessSelector
from droponoff.models.status import SystemSnapshot
from droponoff.process_manager.finder import restart_finder
from droponoff_logging import get_logger

logger = get_logger("toggle")


class ToggleActions:
    """Sequences the OFF and ON transitions.

    The subsystems share no transaction, so each transition is a strict
    serial pipeline: a step starts only after the previous one took
    effect. Best-effort steps log and continue; any other failure stops
    the pipeline where it is, with no rollback, and is reported in the
    returned ActionResult. Each transition ends with a bounded
    verification over fresh snapshots.
    """

    def __init__(
        self,
        config: DroponoffConfig | None = None,
        controllers: Controllers | None = None,
        finder_restart: Callable[[], object] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """Initialize toggle actions.

        Args:
            config: Configuration (defaults apply when omitted)
            controllers: Subsystem controllers (built from config when omitted)
            finder_restart: Callable restarting Finder
            sleep: Sleep function used between verification attempts
        """
        self.config = config or DroponoffConfig()
        self.controllers = controllers or Controllers.from_config(self.config, sleep=sleep)
        self._finder_restart = (
            finder_restart
            if finder_restart is not None
            else (lambda: restart_finder(self.controllers.runner))
        )
        self._sleep = sleep

    @property
    def app_name(self) -> str:
        return self.config.app.name

    @property
    def on_exempt(self) -> frozenset[str]:
        return frozenset({self.config.app.legacy_extension_id})

    def off(self) -> ActionResult:
        """Turn the app fully OFF.

        Returns:
            ActionResult indicating success or failure
        """
        return self._run(self.turn_off, f"{self.app_name} is now OFF")

    def on(self) -> ActionResult:
        """Turn the app fully ON.

        Returns:
            ActionResult indicating success or failure
        """
        return self._run(self.turn_on, f"{self.app_name} is now ON")

    def turn_off(self) -> SystemSnapshot:
        """Run the OFF pipeline.

        Returns:
            The snapshot that passed verification

        Raises:
            DroponoffError: If a mandatory step or the verification fails
            OSError: If the LaunchAgent plist cannot be renamed
        """
        c = self.controllers
        timing = self.config.timing
        logger.info(f"Disabling {self.app_name}...")

        logger.info(f"→ Requesting {self.app_name} to quit...")
        c.processes.request_graceful_quit()

        logger.info("→ Disabling LaunchAgent...")
        try:
            c.launch_agent.unload()
        except DroponoffError as e:
            logger.warning(f"  Note: {e}")
        c.launch_agent.disable()

        logger.info(f"→ Disabling {self.app_name} extensions...")
        c.extensions.apply_to_all(False)

        # A fresh Finder lets go of file-provider domains it was holding
        logger.info("→ Restarting Finder...")
        try:
            self._finder_restart()
        except DroponoffError as e:
            logger.warning(f"  Note: {e}")

        logger.info("→ Waiting for non-FileProvider processes to stop...")
        c.processes.wait_until_empty(ProcessSelector.NON_FILE_PROVIDER, timing.wait_timeout)

        # File-provider hosts ignore the quit request
        logger.info(f"→ Terminating {self.app_name}FileProvider processes...")
        c.processes.terminate(c.processes.file_provider_processes())

        logger.info("→ Waiting for all processes to stop...")
        c.processes.wait_until_empty(ProcessSelector.ALL, timing.wait_timeout)

        logger.info("→ Checking status...")
        return verify_with_retry(
            c.status.snapshot,
            off_problems,
            max_attempts=timing.verify_attempts,
            delay=timing.verify_delay,
            sleep=self._sleep,
        )

    def turn_on(self) -> SystemSnapshot:
        """Run the ON pipeline.

        Returns:
            The snapshot that passed verification

        Raises:
            DroponoffError: If any step or the verification fails
            OSError: If the LaunchAgent plist cannot be renamed
        """
        c = self.controllers
        timing = self.config.timing
        exempt = self.on_exempt
        logger.info(f"Enabling {self.app_name}...")

        logger.info("→ Restoring LaunchAgent...")
        c.launch_agent.enable()
        c.launch_agent.load()

        logger.info(f"→ Enabling {self.app_name} extensions...")
        c.extensions.apply_to_all(True)

        logger.info(f"→ Launching {self.app_name}...")
        c.processes.launch()

        logger.info(f"→ Waiting for {self.app_name} to start...")
        c.processes.wait_until_non_empty(timing.wait_timeout)

        logger.info("→ Checking status...")
        return verify_with_retry(
            c.status.snapshot,
            lambda snapshot: on_problems(snapshot, exempt),
            max_attempts=timing.verify_attempts,
            delay=timing.verify_delay,
            sleep=self._sleep,
        )

    def _run(self, operation: Callable[[], SystemSnapshot], done: str) -> ActionResult:
        try:
            snapshot = operation()
        except (DroponoffError, OSError) as e:
            logger.error(str(e), error=type(e).__name__)
            return ActionResult(
                success=False,
                message=str(e),
                data={"error": type(e).__name__},
            )

        logger.info(f"✓ {done}")
        return ActionResult(success=True, message=done, data={"snapshot": snapshot})
