from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class ScratchReport:
    """Outcome of a scratch_files cleanup run.

    Attributes:
        root_mount: The root-mount directory that was scanned
        directories: scratch_files directories that were cleaned
        files_deleted: Number of files and symlinks removed
        bytes_freed: Total size of the removed entries
        skipped: Nested directories left untouched
    """

    root_mount: Path
    directories: list[Path] = field(default_factory=list)
    files_deleted: int = 0
    bytes_freed: int = 0
    skipped: list[Path] = field(default_factory=list)

    @property
    def found_any(self) -> bool:
        """Whether at least one scratch_files directory existed."""
        return bool(self.directories)
