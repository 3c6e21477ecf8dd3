"""Finder restart used to drop stale file-provider bindings."""

from droponoff.errors import DroponoffError
from droponoff.models.launchctl import CommandResult
from droponoff.process_manager.command_runner import CommandRunner
from droponoff_logging import get_logger

logger = get_logger("finder")


def restart_finder(runner: CommandRunner | None = None) -> CommandResult:
    """Kill Finder so launchd respawns it.

    A fresh Finder lets go of any file-provider domain the old one held
    open. Finder may not be running at all, so nothing here raises.

    Args:
        runner: Command runner used to call killall

    Returns:
        CommandResult from killall
    """
    runner = runner or CommandRunner()
    try:
        result = runner.run("killall", "Finder")
    except DroponoffError as e:
        logger.warning(f"  Could not restart Finder: {e}")
        return CommandResult(success=False, message=str(e), exit_code=127)

    if not result.success:
        logger.warning(f"  Could not restart Finder: {result.message or 'not running'}")
    return result
