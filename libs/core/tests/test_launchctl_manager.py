"""Unit tests for the launchctl manager."""

import sys
from unittest.mock import MagicMock, patch

import pytest

from droponoff.errors import DiscoveryError, ExternalCommandError
from droponoff.models.launchctl import CommandResult, ServiceState
from droponoff.process_manager.launchctl_manager import LaunchctlManager


@pytest.fixture
def runner():
    runner = MagicMock()
    runner.run.return_value = CommandResult(success=True, message="")
    return runner


@pytest.fixture
def manager(paths, runner):
    return LaunchctlManager(paths, runner)


def write_enabled(paths):
    paths.launch_agent_path.write_text("<plist/>")


def write_disabled(paths):
    paths.launch_agent_disabled_path.write_text("<plist/>")


class TestServiceState:
    """Tests for marker-based state."""

    def test_enabled(self, manager, paths):
        write_enabled(paths)

        assert manager.current_state() is ServiceState.ENABLED

    def test_disabled(self, manager, paths):
        write_disabled(paths)

        assert manager.current_state() is ServiceState.DISABLED

    def test_missing(self, manager):
        assert manager.current_state() is ServiceState.MISSING

    def test_marker_names(self, paths):
        """Test the parked marker is the plist name plus .disabled."""
        assert paths.launch_agent_path.name == "com.dropbox.DropboxMacUpdate.agent.plist"
        assert paths.launch_agent_disabled_path.name == (
            "com.dropbox.DropboxMacUpdate.agent.plist.disabled"
        )


class TestEnableDisable:
    """Tests for renaming the plist."""

    def test_disable_renames(self, manager, paths):
        write_enabled(paths)

        manager.disable()

        assert not paths.launch_agent_path.exists()
        assert paths.launch_agent_disabled_path.read_text() == "<plist/>"
        assert manager.current_state() is ServiceState.DISABLED

    def test_disable_twice_is_noop(self, manager, paths):
        write_disabled(paths)

        manager.disable()

        assert manager.current_state() is ServiceState.DISABLED

    def test_disable_missing_raises(self, manager):
        with pytest.raises(DiscoveryError):
            manager.disable()

    def test_enable_renames(self, manager, paths):
        write_disabled(paths)

        manager.enable()

        assert paths.launch_agent_path.exists()
        assert not paths.launch_agent_disabled_path.exists()

    def test_enable_twice_is_noop(self, manager, paths):
        write_enabled(paths)

        manager.enable()

        assert manager.current_state() is ServiceState.ENABLED

    def test_enable_missing_raises(self, manager):
        with pytest.raises(DiscoveryError):
            manager.enable()

    def test_disable_uses_single_rename(self, manager, paths):
        """Test the transition never copies the plist."""
        write_enabled(paths)

        with patch("shutil.copy") as mock_copy, patch("shutil.copy2") as mock_copy2:
            manager.disable()

        mock_copy.assert_not_called()
        mock_copy2.assert_not_called()


class TestLoadUnload:
    """Tests for launchctl bootstrap and bootout."""

    def test_unload_targets_gui_domain(self, manager, runner):
        with (
            patch.object(sys, "platform", "darwin"),
            patch("os.getuid", return_value=501),
        ):
            result = manager.unload()

        assert result.success is True
        runner.run.assert_called_once_with(
            "launchctl", "bootout", "gui/501/com.dropbox.DropboxMacUpdate.agent"
        )

    def test_unload_not_loaded_is_not_an_error(self, manager, runner):
        runner.run.return_value = CommandResult(
            success=False, message="No such process", exit_code=3
        )

        with patch.object(sys, "platform", "darwin"):
            result = manager.unload()

        assert result.success is False

    def test_unload_not_macos(self, manager):
        with patch.object(sys, "platform", "linux"):
            with pytest.raises(ExternalCommandError, match="only available on macOS"):
                manager.unload()

    def test_load_bootstraps_plist(self, manager, runner, paths):
        write_enabled(paths)

        with (
            patch.object(sys, "platform", "darwin"),
            patch("os.getuid", return_value=501),
        ):
            manager.load()

        runner.run.assert_called_once_with(
            "launchctl", "bootstrap", "gui/501", str(paths.launch_agent_path)
        )

    def test_load_requires_enabled_plist(self, manager, runner, paths):
        write_disabled(paths)

        with patch.object(sys, "platform", "darwin"):
            with pytest.raises(DiscoveryError, match="not found"):
                manager.load()

        runner.run.assert_not_called()

    def test_load_already_loaded_is_tolerated(self, manager, runner, paths):
        write_enabled(paths)
        runner.run.return_value = CommandResult(
            success=False, message="Bootstrap failed: 5: Input/output error", exit_code=5
        )

        with patch.object(sys, "platform", "darwin"):
            result = manager.load()

        assert result.exit_code == 5

    def test_load_launchctl_missing_raises(self, manager, runner, paths):
        write_enabled(paths)
        runner.run.side_effect = ExternalCommandError("launchctl command not found")

        with patch.object(sys, "platform", "darwin"):
            with pytest.raises(ExternalCommandError):
                manager.load()
