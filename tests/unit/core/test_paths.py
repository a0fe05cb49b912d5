"""Unit tests for XDG path management."""

import os
from pathlib import Path
from unittest.mock import patch

from fileops.core.paths import APP_NAME, get_config_dir, get_settings_path


class TestGetConfigDir:
    """Tests for get_config_dir function."""

    def test_default_config_dir(self, tmp_path: Path) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {"HOME": str(tmp_path)}, clear=True):
            result = get_config_dir()

        assert result == tmp_path / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            result = get_config_dir()

        assert result == tmp_path / APP_NAME


class TestSettingsPath:
    """Tests for get_settings_path."""

    def test_settings_path_in_config_dir(self, tmp_path: Path) -> None:
        """Settings live in the config directory."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_settings_path() == tmp_path / APP_NAME / "settings.toml"
