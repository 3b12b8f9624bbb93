"""
Presentation services used by the workflows.

Workflows never touch widgets directly. They notify the user, save and open
files, copy to the clipboard and schedule delayed callbacks through these
interfaces, which the Qt layer implements in qt_services.
"""

from typing import Callable, Optional


class Notifier:
    """Shows short user-visible messages."""

    def notify(self, title: str, message: str) -> None:
        raise NotImplementedError


class FileService:
    """Saves generated content and reads user-selected files."""

    def save_text(self, content: str, filename: str) -> bool:
        """
        Offer text content for saving under a suggested file name.

        Returns:
            True if the content was written, False if the user cancelled.
        """
        raise NotImplementedError

    def open_text(self, accept: str = ".json") -> Optional[str]:
        """
        Let the user pick a file and return its text.

        Args:
            accept: File extension filter.

        Returns:
            The file content, or None if the selection was cancelled.
        """
        raise NotImplementedError


class Clipboard:
    def copy(self, text: str) -> None:
        raise NotImplementedError


class Scheduler:
    """Runs callbacks after a delay on the UI thread."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        """Schedule a callback. Scheduled callbacks cannot be cancelled."""
        raise NotImplementedError
