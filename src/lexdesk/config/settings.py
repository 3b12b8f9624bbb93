"""
Application settings and configuration.

This module provides centralized access to application settings with automatic
persistence to disk. Settings are stored as JSON in a platform-specific location:

- Windows: %APPDATA%/LocalLow/lexdesk/settings.json
- macOS: ~/Library/Application Support/lexdesk/settings.json
- Linux: ~/.config/lexdesk/settings.json

Settings are automatically loaded on first access and saved when updated.

Example:
    from lexdesk.config.settings import get_settings, get_settings_manager

    # Get current settings
    settings = get_settings()
    print(settings.theme)

    # Update settings (auto-saves)
    manager = get_settings_manager()
    manager.update(theme="light_blue", download_delay_ms=1000)
"""

import json
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional
import logging

from ..infrastructure.paths import get_persistent_data_directory, get_log_file_path


PATH_SETTINGS = ('log_file_path', 'snapshot_file')


@dataclass
class AppSettings:
    """Application-wide settings."""

    # Logging settings
    log_level: int = logging.INFO
    log_to_file: bool = True
    log_file_path: Optional[Path] = None

    # UI settings
    window_width: int = 1200
    window_height: int = 800
    theme: str = "light_blue"  # Any qt-material theme: dark_blue, dark_teal, light_blue, light_teal, ...

    # Session
    current_user: str = "user-1"

    # Storage settings
    snapshot_file: Optional[Path] = None  # None = storage.json in the persistent data directory
    storage_namespace: str = "app-storage"
    strict_validation: bool = True

    # Workflow settings
    download_delay_ms: int = 2000
    default_download_format: str = "PDF"
    export_file_name: str = "application_data.json"
    share_base_url: str = "https://app.dz"
    max_search_preview: int = 3

    def __post_init__(self):
        if self.log_file_path is None:
            self.log_file_path = get_log_file_path()


class SettingsManager:
    """
    Manages loading and saving application settings.
    """

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize the settings manager.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        if config_file is None:
            data_dir = get_persistent_data_directory()
            config_file = data_dir / "settings.json"

        self.config_file = config_file
        self._settings = AppSettings()
        self._logger = logging.getLogger(__name__)

    def load(self) -> AppSettings:
        """
        Load settings from configuration file.

        Returns:
            The loaded settings object.
        """
        if not self.config_file.exists():
            self._logger.info(f"Settings file not found at {self.config_file}, using defaults")
            return self._settings

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)

            # Convert Path strings back to Path objects
            for key in PATH_SETTINGS:
                if data.get(key):
                    data[key] = Path(data[key])

            for key, value in data.items():
                if hasattr(self._settings, key):
                    setattr(self._settings, key, value)
                else:
                    self._logger.warning(f"Ignoring unknown setting in file: {key}")

            self._logger.info(f"Settings loaded from {self.config_file}")

        except json.JSONDecodeError as e:
            self._logger.error(f"Failed to parse settings file: {e}. Using defaults.")
        except (OSError, AttributeError) as e:
            self._logger.error(f"Failed to load settings: {e}. Using defaults.")

        return self._settings

    def save(self, settings: Optional[AppSettings] = None) -> None:
        """
        Save settings to configuration file.

        Args:
            settings: Settings object to save. If None, saves current settings.
        """
        if settings is not None:
            self._settings = settings

        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            data = asdict(self._settings)

            # Convert Path objects to strings with forward slashes for JSON serialization
            for key in PATH_SETTINGS:
                if data.get(key):
                    data[key] = str(Path(data[key])).replace('\\', '/')

            # Atomic write: write to temp file, then rename
            temp_file = self.config_file.with_suffix('.tmp')
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

            temp_file.replace(self.config_file)

            self._logger.info(f"Settings saved to {self.config_file}")

        except (OSError, TypeError) as e:
            self._logger.error(f"Failed to save settings: {e}")

    def get(self) -> AppSettings:
        """
        Get the current settings.

        Returns:
            The current settings object.
        """
        return self._settings

    def update(self, **kwargs) -> None:
        """
        Update specific settings and auto-save.

        Args:
            **kwargs: Setting names and values to update.
        """
        for key, value in kwargs.items():
            if hasattr(self._settings, key):
                setattr(self._settings, key, value)
            else:
                self._logger.warning(f"Ignoring unknown setting: {key}")

        self.save()

    def reset_to_defaults(self) -> None:
        """Reset all settings to their default values and save."""
        self._settings = AppSettings()
        self.save()


# Global settings instance
_settings_manager: Optional[SettingsManager] = None


def get_settings_manager() -> SettingsManager:
    """
    Get the global settings manager instance.

    Returns:
        The global SettingsManager.
    """
    global _settings_manager
    if _settings_manager is None:
        _settings_manager = SettingsManager()
        _settings_manager.load()
    return _settings_manager


def get_settings() -> AppSettings:
    """
    Get the current application settings.

    Returns:
        The current AppSettings object.
    """
    return get_settings_manager().get()
