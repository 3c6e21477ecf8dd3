"""droponoff core package"""

from droponoff.actions import (
    Controllers,
    ScratchActions,
    StatusActions,
    ToggleActions,
)
from droponoff.errors import (
    DiscoveryError,
    DroponoffError,
    ExternalCommandError,
    PreconditionError,
    VerificationFailure,
    WaitTimeoutError,
)
from droponoff.process_manager import (
    CommandRunner,
    ExtensionController,
    LaunchctlManager,
    ProcessMonitor,
)

__version__ = "0.1.0"

__all__ = [
    # Actions
    "Controllers",
    "ScratchActions",
    "StatusActions",
    "ToggleActions",
    # Process Manager
    "CommandRunner",
    "ExtensionController",
    "LaunchctlManager",
    "ProcessMonitor",
    # Errors
    "DiscoveryError",
    "DroponoffError",
    "ExternalCommandError",
    "PreconditionError",
    "VerificationFailure",
    "WaitTimeoutError",
]
