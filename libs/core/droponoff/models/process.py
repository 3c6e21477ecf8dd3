from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class ProcessRecord:
    """A Dropbox process seen in one enumeration.

    Attributes:
        pid: Process ID
        name: Process name or command line as reported by pgrep
    """

    pid: int
    name: str


class ProcessSelector(Enum):
    """Which processes a wait is watching."""

    ALL = "all"
    NON_FILE_PROVIDER = "non_file_provider"
