"""pluginkit-backed control of the app's system extensions."""

from droponoff.discovery import PathResolver
from droponoff.models.extension import ExtensionRecord
from droponoff.process_manager.command_runner import CommandRunner
from droponoff_logging import get_logger

logger = get_logger("extensions")


class ExtensionController:
    """Queries and toggles the app's pluginkit registrations.

    Not every installation registers every extension, so an identifier
    pluginkit does not know is a normal "not found" state, not an error.
    """

    def __init__(
        self,
        paths: PathResolver | None = None,
        runner: CommandRunner | None = None,
    ):
        self.paths = paths or PathResolver()
        self.runner = runner or CommandRunner()

    @property
    def bundle_ids(self) -> list[str]:
        return list(self.paths.app.bundle_ids)

    def query_one(self, identifier: str) -> ExtensionRecord:
        """Look up one identifier in the extension registry.

        ``pluginkit -m`` prints nothing for unknown identifiers and marks
        each match with ``+`` when in use and ``-`` when ignored.

        Args:
            identifier: Extension bundle identifier

        Returns:
            ExtensionRecord for the identifier

        Raises:
            ExternalCommandError: If pluginkit cannot run
        """
        result = self.runner.run("pluginkit", "-m", "-i", identifier)

        output = result.message.strip() if result.success else ""
        if not output:
            return ExtensionRecord(identifier=identifier, enabled=False, found=False)

        return ExtensionRecord(
            identifier=identifier,
            enabled=output.startswith("+"),
            found=True,
        )

    def query_all(self) -> list[tuple[str, ExtensionRecord]]:
        return [(ident, self.query_one(ident)) for ident in self.bundle_ids]

    def set_enabled(self, identifier: str, target: bool) -> None:
        """Elect to use or ignore one extension.

        Raises:
            ExternalCommandError: If pluginkit rejects the request
        """
        election = "use" if target else "ignore"
        self.runner.run("pluginkit", "-e", election, "-i", identifier, check=True)
        logger.info(f"  {'Enabled' if target else 'Disabled'} {identifier}")

    def apply_to_all(self, target: bool) -> None:
        """Enable or disable every registered extension of the app.

        Args:
            target: True to enable, False to disable
        """
        for identifier in self.bundle_ids:
            record = self.query_one(identifier)
            if not record.found:
                logger.info(f"  {identifier} not found, skipping")
                continue
            self.set_enabled(identifier, target)
