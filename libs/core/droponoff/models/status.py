from dataclasses import dataclass
from pathlib import Path

from droponoff.models.extension import ExtensionRecord
from droponoff.models.launchctl import ServiceState
from droponoff.models.process import ProcessRecord


@dataclass(frozen=True)
class SystemSnapshot:
    """Point-in-time read of every subsystem droponoff controls.

    Attributes:
        app_path: Location of Dropbox.app, None if not installed
        processes: Dropbox processes running for the current user
        service_state: State of the updater LaunchAgent markers
        extensions: (identifier, record) pairs in configured order
    """

    app_path: Path | None
    processes: tuple[ProcessRecord, ...]
    service_state: ServiceState
    extensions: tuple[tuple[str, ExtensionRecord], ...]

    def enabled_extensions(self) -> list[str]:
        return [ident for ident, record in self.extensions if record.enabled]

    def disabled_extensions(self, exempt: frozenset[str] = frozenset()) -> list[str]:
        return [
            ident
            for ident, record in self.extensions
            if ident not in exempt and not record.enabled
        ]
