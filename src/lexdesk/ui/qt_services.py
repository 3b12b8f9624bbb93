"""
Qt implementations of the presentation services.
"""

from pathlib import Path
from typing import Callable, Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QGuiApplication
from PySide6.QtWidgets import QFileDialog, QMainWindow, QMessageBox, QWidget

from ..infrastructure.logging_config import get_logger
from .services import Clipboard, FileService, Notifier, Scheduler


logger = get_logger(__name__)

NOTIFICATION_TIMEOUT_MS = 5000


class StatusBarNotifier(Notifier):
    """Shows notifications in the main window's status bar."""

    def __init__(self, window: QMainWindow):
        self._window = window

    def notify(self, title: str, message: str) -> None:
        logger.info(f"{title}: {message}")
        self._window.statusBar().showMessage(f"{title}: {message}", NOTIFICATION_TIMEOUT_MS)


class QtFileService(FileService):
    """Saves and opens files through the native file dialogs."""

    def __init__(self, parent: Optional[QWidget] = None):
        self._parent = parent
        self._last_directory = Path.home()

    def save_text(self, content: str, filename: str) -> bool:
        path, _ = QFileDialog.getSaveFileName(
            self._parent,
            "Save File",
            str(self._last_directory / filename),
        )
        if not path:
            return False

        try:
            Path(path).write_text(content, encoding='utf-8')
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            QMessageBox.critical(self._parent, "Error", f"Failed to save file:\n{str(e)}")
            return False

        self._last_directory = Path(path).parent
        logger.info(f"Saved {path}")
        return True

    def open_text(self, accept: str = ".json") -> Optional[str]:
        path, _ = QFileDialog.getOpenFileName(
            self._parent,
            "Open File",
            str(self._last_directory),
            f"Files (*{accept});;All Files (*)",
        )
        if not path:
            return None

        try:
            content = Path(path).read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read {path}: {e}")
            QMessageBox.critical(self._parent, "Error", f"Failed to read file:\n{str(e)}")
            return None

        self._last_directory = Path(path).parent
        return content


class QtClipboard(Clipboard):

    def copy(self, text: str) -> None:
        QGuiApplication.clipboard().setText(text)


class QtScheduler(Scheduler):

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        QTimer.singleShot(delay_ms, callback)
