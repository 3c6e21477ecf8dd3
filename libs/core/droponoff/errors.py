"""Error types raised by droponoff operations."""


class DroponoffError(Exception):
    """Base class for every error droponoff raises on purpose."""


class DiscoveryError(DroponoffError):
    """A required path or environment fact is unavailable."""


class ExternalCommandError(DroponoffError):
    """An underlying OS command failed.

    Attributes:
        command: The argv that was run
        exit_code: Exit code, or None when the command could not be spawned
        stderr: Captured error output
    """

    def __init__(
        self,
        message: str,
        command: list[str] | None = None,
        exit_code: int | None = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.command = command or []
        self.exit_code = exit_code
        self.stderr = stderr


class WaitTimeoutError(DroponoffError, TimeoutError):
    """A bounded poll wait ran past its deadline.

    Attributes:
        remaining: Names of the processes that kept the wait from finishing
    """

    def __init__(self, message: str, remaining: list[str] | None = None):
        super().__init__(message)
        self.remaining = remaining or []


class VerificationFailure(DroponoffError):
    """State did not converge within the allowed verification attempts.

    Attributes:
        attempts: Number of snapshots evaluated
        problems: Unsatisfied conditions seen on the last attempt
    """

    def __init__(self, attempts: int, problems: list[str]):
        self.attempts = attempts
        self.problems = list(problems)
        detail = "; ".join(self.problems) or "unknown condition"
        super().__init__(f"Verification failed after {attempts} attempts: {detail}")


class PreconditionError(DroponoffError):
    """An operation refused to run because its safety gate is closed."""
