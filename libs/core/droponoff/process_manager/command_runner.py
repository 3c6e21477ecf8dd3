"""Thin wrapper around subprocess for the OS tools droponoff drives."""

import subprocess

from droponoff.errors import ExternalCommandError
from droponoff.models.launchctl import CommandResult
from droponoff_logging import get_logger

logger = get_logger("commands")


class CommandRunner:
    """Runs external commands and normalizes their outcome.

    A command that cannot be spawned at all always raises
    ExternalCommandError. A non-zero exit only raises when ``check`` is
    set; otherwise it comes back as an unsuccessful CommandResult and the
    caller decides whether that matters.
    """

    def __init__(self, timeout: float = 30.0):
        """Initialize the runner.

        Args:
            timeout: Seconds before a hung command is abandoned
        """
        self.timeout = timeout

    def run(self, *args: str, check: bool = False) -> CommandResult:
        """Run a command.

        Args:
            *args: Command and arguments
            check: Whether a non-zero exit raises

        Returns:
            CommandResult with command output

        Raises:
            ExternalCommandError: If the command could not run, or exited
                non-zero while ``check`` is set
        """
        command = list(args)
        logger.debug("Running command", command=" ".join(command))

        try:
            result = subprocess.run(
                command,
                capture_output=True,
                text=True,
                check=False,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ExternalCommandError(
                f"{command[0]} command not found",
                command=command,
                exit_code=127,
            ) from e
        except subprocess.SubprocessError as e:
            raise ExternalCommandError(
                f"Command failed: {' '.join(command)}: {e}",
                command=command,
                stderr=str(e),
            ) from e

        success = result.returncode == 0
        message = result.stdout if success else result.stderr or result.stdout
        outcome = CommandResult(
            success=success,
            message=message.strip(),
            exit_code=result.returncode,
            stderr=result.stderr.strip(),
            command=command,
        )

        if check and not success:
            raise ExternalCommandError(
                f"{' '.join(command)} exited with {result.returncode}: {outcome.message}",
                command=command,
                exit_code=result.returncode,
                stderr=outcome.stderr,
            )

        return outcome
