"""Data types shared by the droponoff controllers and actions."""

from droponoff.models.actions import ActionResult
from droponoff.models.config import (
    AppConfig,
    DroponoffConfig,
    LoggingConfig,
    TimingConfig,
)
from droponoff.models.extension import ExtensionRecord
from droponoff.models.launchctl import CommandResult, ServiceState
from droponoff.models.process import ProcessRecord, ProcessSelector
from droponoff.models.scratch import ScratchReport
from droponoff.models.status import SystemSnapshot

__all__ = [
    "ActionResult",
    "AppConfig",
    "CommandResult",
    "DroponoffConfig",
    "ExtensionRecord",
    "LoggingConfig",
    "ProcessRecord",
    "ProcessSelector",
    "ScratchReport",
    "ServiceState",
    "SystemSnapshot",
    "TimingConfig",
]
