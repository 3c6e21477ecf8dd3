from dataclasses import dataclass, field


DROPBOX_BUNDLE_IDS = [
    "com.getdropbox.dropbox.fileprovider",
    "com.getdropbox.dropbox.TransferExtension",
    "com.getdropbox.dropbox.garcon",
]


@dataclass
class AppConfig:
    """Identity of the application being switched.

    Attributes:
        name: Application name used for quit and launch requests
        process_pattern: pgrep -f pattern matching all of its processes
        file_provider_pattern: Regex picking out the file-provider hosts
        install_candidates: Where to look for the app bundle, in order
        bundle_ids: Extension identifiers managed through pluginkit
        legacy_extension_id: Identifier left out of the ON check
        launch_agent_label: Label of the updater LaunchAgent
        team_id: Developer team ID of the group container
        group_container_suffix: Suffix of the sync group container
    """

    name: str = "Dropbox"
    process_pattern: str = "Dropbox"
    file_provider_pattern: str = "DropboxFileProvider"
    install_candidates: list[str] = field(
        default_factory=lambda: ["/Applications/Dropbox.app", "~/Applications/Dropbox.app"]
    )
    bundle_ids: list[str] = field(default_factory=lambda: list(DROPBOX_BUNDLE_IDS))
    legacy_extension_id: str = "com.getdropbox.dropbox.garcon"
    launch_agent_label: str = "com.dropbox.DropboxMacUpdate.agent"
    team_id: str = "G7HH3F8CAK"
    group_container_suffix: str = ".com.getdropbox.dropbox.sync"


@dataclass
class TimingConfig:
    """Bounds on the polling loops.

    Attributes:
        wait_timeout: Seconds to wait for processes to exit or appear
        poll_interval: Seconds between process list polls
        verify_attempts: Snapshots taken before verification gives up
        verify_delay: Seconds between verification snapshots
    """

    wait_timeout: float = 10.0
    poll_interval: float = 0.1
    verify_attempts: int = 5
    verify_delay: float = 0.5

    def __post_init__(self):
        if self.verify_attempts < 1:
            raise ValueError(
                f"timing.verify_attempts must be at least 1, got {self.verify_attempts}"
            )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_dir: str | None = None
    console: bool = True
    syslog: bool = False


@dataclass
class DroponoffConfig:
    """Top-level configuration."""

    app: AppConfig = field(default_factory=AppConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
