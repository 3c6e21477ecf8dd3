from dataclasses import dataclass, field
from enum import Enum


@dataclass
class CommandResult:
    """Result from an external command.

    Attributes:
        success: Whether the command exited zero
        message: Stdout on success, stderr (or stdout) otherwise
        exit_code: Exit code from the command
        stderr: Any error output
        command: The argv that was run
    """

    success: bool
    message: str
    exit_code: int = 0
    stderr: str = ""
    command: list[str] = field(default_factory=list)


class ServiceState(Enum):
    """Durable state of the updater LaunchAgent.

    ENABLED and DISABLED are the two modes; MISSING means neither marker
    file exists, which is an installation problem rather than a mode.
    """

    ENABLED = "enabled"
    DISABLED = "disabled"
    MISSING = "missing"
