"""Deletion of the sync engine's scratch_files working set.

This is destructive. Scratch files can hold data that has not been
uploaded yet, so the cleanup only runs when no Dropbox process is alive
and is never undone once started.
"""

import stat
from pathlib import Path
from typing import Callable

from droponoff.actions.controllers import Controllers
from droponoff.errors import DiscoveryError, DroponoffError, PreconditionError
from droponoff.models.actions import ActionResult
from droponoff.models.config import DroponoffConfig
from droponoff.models.scratch import ScratchReport
from droponoff_logging import get_logger

logger = get_logger("scratch")

SCRATCH_DIR_NAME = "scratch_files"

# (bytes deleted so far, size of the entry about to go, its path)
ProgressCallback = Callable[[int, int, Path], None]


def _is_real_dir(path: Path) -> bool:
    """Directory check that does not follow symlinks out of the root mount."""
    try:
        return stat.S_ISDIR(path.lstat().st_mode)
    except FileNotFoundError:
        return False


def clean_scratch_files(
    root_mount: Path,
    progress_callback: ProgressCallback | None = None,
) -> ScratchReport:
    """Delete the immediate children of every scratch_files directory.

    Looks for ``<root_mount>/<id>/scratch_files`` and removes the files
    and symlinks directly inside. Nested directories are not expected
    there; they are logged and left alone rather than recursed into.
    Deletion errors propagate, and whatever was already removed stays
    removed.

    Args:
        root_mount: The sync group container's root-mount directory
        progress_callback: Called before each deletion

    Returns:
        ScratchReport with totals

    Raises:
        DiscoveryError: If root_mount does not exist
        OSError: If listing or deleting fails
    """
    if not root_mount.exists():
        raise DiscoveryError(f"Dropbox root-mount not found at {root_mount}")

    report = ScratchReport(root_mount=root_mount)

    for entry in sorted(root_mount.iterdir()):
        if not _is_real_dir(entry):
            continue

        scratch_dir = entry / SCRATCH_DIR_NAME
        if not _is_real_dir(scratch_dir):
            continue

        report.directories.append(scratch_dir)
        logger.info(f"  Cleaning {scratch_dir}")

        for child in sorted(scratch_dir.iterdir()):
            info = child.lstat()

            if not (stat.S_ISREG(info.st_mode) or stat.S_ISLNK(info.st_mode)):
                kind = "directory" if stat.S_ISDIR(info.st_mode) else "entry"
                logger.info(f"    Skipping {kind} {child}")
                report.skipped.append(child)
                continue

            if progress_callback:
                progress_callback(report.bytes_freed, info.st_size, child)

            logger.debug(f"    rm {child}", size=info.st_size)
            child.unlink()
            report.files_deleted += 1
            report.bytes_freed += info.st_size

    if not report.found_any:
        logger.info(f"  No scratch_files directories found under {root_mount}")

    return report


class ScratchActions:
    """Precondition-gated scratch_files cleanup."""

    def __init__(
        self,
        config: DroponoffConfig | None = None,
        controllers: Controllers | None = None,
    ):
        self.config = config or DroponoffConfig()
        self.controllers = controllers or Controllers.from_config(self.config)

    def ensure_stopped(self) -> None:
        """Refuse to continue while any app process is alive.

        Raises:
            PreconditionError: If the snapshot shows running processes
        """
        snapshot = self.controllers.status.snapshot()
        if snapshot.processes:
            raise PreconditionError(
                f"{self.config.app.name} appears to be running. Run `droponoff status` "
                "to check and `droponoff off` to turn it off."
            )

    def nuke(self, progress_callback: ProgressCallback | None = None) -> ActionResult:
        """Delete scratch_files contents after checking the app is stopped.

        Args:
            progress_callback: Called before each deletion

        Returns:
            ActionResult whose data holds the ScratchReport
        """
        logger.info("Deleting scratch_files contents...")
        try:
            logger.info(f"→ Checking {self.config.app.name} status...")
            self.ensure_stopped()

            logger.info("→ Cleaning scratch_files directories...")
            root_mount = self.controllers.paths.scratch_root_mount()
            report = clean_scratch_files(root_mount, progress_callback)
        except (DroponoffError, OSError) as e:
            logger.error(str(e), error=type(e).__name__)
            return ActionResult(
                success=False,
                message=str(e),
                data={"error": type(e).__name__},
            )

        if report.found_any:
            message = (
                f"Deleted {report.files_deleted} file(s), "
                f"{report.bytes_freed} bytes freed"
            )
        else:
            message = f"No scratch_files directories found under {root_mount}"

        logger.info(f"✓ {message}")
        return ActionResult(success=True, message=message, data={"report": report})
