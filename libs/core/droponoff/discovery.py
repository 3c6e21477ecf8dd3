"""Resolution of the fixed paths and environment facts droponoff relies on."""

import os
from pathlib import Path

from droponoff.errors import DiscoveryError
from droponoff.models.config import AppConfig

DATA_VOLUME = Path("/System/Volumes/Data")


class PathResolver:
    """Resolves install, LaunchAgent and group container locations.

    Every path hangs off the invoking user's home directory, which is
    read from the OS unless a fixed one is passed in.
    """

    def __init__(
        self,
        app: AppConfig | None = None,
        home: Path | None = None,
        data_volume: Path = DATA_VOLUME,
    ):
        """Initialize the resolver.

        Args:
            app: Application identity (defaults to Dropbox)
            home: Home directory override
            data_volume: Mount point of the APFS data volume
        """
        self.app = app or AppConfig()
        self._home = home
        self.data_volume = data_volume

    @property
    def home(self) -> Path:
        """The invoking user's home directory."""
        if self._home is not None:
            return self._home
        try:
            return Path.home()
        except RuntimeError as e:
            raise DiscoveryError("Could not determine home directory") from e

    def current_user(self) -> str:
        """Name of the invoking user, used to scope process listings."""
        user = os.environ.get("USER")
        if not user:
            raise DiscoveryError("Could not get USER environment variable")
        return user

    @staticmethod
    def current_uid() -> int:
        """Current user's UID, used for launchctl domain targets."""
        return os.getuid()

    def _expand(self, candidate: str) -> Path:
        if candidate.startswith("~/"):
            return self.home / candidate[2:]
        return Path(candidate)

    def find_app(self) -> Path | None:
        """First existing install location of the app bundle, if any."""
        for candidate in self.app.install_candidates:
            path = self._expand(candidate)
            if path.exists():
                return path
        return None

    @property
    def launch_agents_dir(self) -> Path:
        return self.home / "Library" / "LaunchAgents"

    @property
    def launch_agent_path(self) -> Path:
        """Active marker: the plist launchd loads."""
        return self.launch_agents_dir / f"{self.app.launch_agent_label}.plist"

    @property
    def launch_agent_disabled_path(self) -> Path:
        """Parked marker: the same plist with a .disabled suffix."""
        return self.launch_agents_dir / f"{self.app.launch_agent_label}.plist.disabled"

    def scratch_root_mount(self) -> Path:
        """Root mount of the sync group container.

        The data volume view of the home directory is preferred when it
        exists, since that is where the sync engine keeps its files.
        """
        home = self.home
        data_home = self.data_volume / home.relative_to(home.anchor)
        base_home = data_home if data_home.exists() else home

        container = f"{self.app.team_id}{self.app.group_container_suffix}"
        return base_home / "Library" / "Group Containers" / container / "root-mount"
