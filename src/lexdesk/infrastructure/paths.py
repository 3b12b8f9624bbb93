"""
Path utilities and constants.

This module provides helper functions for locating the application's
persistent files.
"""

import platform
import re
from pathlib import Path


APP_NAME = "lexdesk"


def get_persistent_data_directory() -> Path:
    """
    Get the persistent data directory for the application (cross-platform).

    Returns:
        Path to the persistent data directory.

    Platform-specific locations:
        - Windows: %APPDATA%/LocalLow/lexdesk
        - macOS: ~/Library/Application Support/lexdesk
        - Linux: ~/.config/lexdesk
    """
    system = platform.system()

    if system == "Windows":
        base = Path.home() / "AppData" / "LocalLow"
    elif system == "Darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path.home() / ".config"

    data_dir = base / APP_NAME
    data_dir.mkdir(parents=True, exist_ok=True)

    return data_dir


def get_settings_file_path() -> Path:
    """
    Get the path to the settings file.

    Returns:
        Path to the settings.json file.
    """
    return get_persistent_data_directory() / "settings.json"


def get_snapshot_file_path() -> Path:
    """
    Get the path to the entity store snapshot.

    Returns:
        Path to the storage.json file.
    """
    return get_persistent_data_directory() / "storage.json"


def get_log_file_path() -> Path:
    """
    Get the path to the main log file.

    Returns:
        Path to the log.txt file.
    """
    return get_persistent_data_directory() / "log.txt"


def get_old_log_file_path() -> Path:
    """
    Get the path to the old log file.

    Returns:
        Path to the log.old.txt file.
    """
    return get_persistent_data_directory() / "log.old.txt"


def sanitize_filename(name: str, default: str = "document") -> str:
    """
    Make a display title usable as a file name on every platform.

    Args:
        name: Title to convert.
        default: Name to use when nothing usable remains.

    Returns:
        File name without path separators or reserved characters.
    """
    cleaned = re.sub(r'[<>:"/\\|?*\x00-\x1f]', '_', name or '').strip().strip('.')
    return cleaned or default
