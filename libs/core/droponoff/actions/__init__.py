"""Actions module encapsulating business logic for CLI operations."""

from droponoff.actions.controllers import Controllers
from droponoff.actions.scratch_actions import ScratchActions, clean_scratch_files
from droponoff.actions.status_actions import StatusActions
from droponoff.actions.toggle_actions import ToggleActions
from droponoff.actions.verification import (
    aggregate_mode,
    off_problems,
    on_problems,
    verify_with_retry,
)

__all__ = [
    "Controllers",
    "ScratchActions",
    "StatusActions",
    "ToggleActions",
    "aggregate_mode",
    "clean_scratch_files",
    "off_problems",
    "on_problems",
    "verify_with_retry",
]
