from dataclasses import dataclass


@dataclass(frozen=True)
class ExtensionRecord:
    """State of one pluginkit extension registration.

    Attributes:
        identifier: Extension bundle identifier
        enabled: Whether the registry marks it as in use
        found: Whether the registry knows the identifier at all
    """

    identifier: str
    enabled: bool = False
    found: bool = False

    @property
    def label(self) -> str:
        """Short state name for display."""
        if not self.found:
            return "not found"
        return "enabled" if self.enabled else "disabled"
