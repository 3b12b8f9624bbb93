"""
Main application entry point.

This module wires the application together and runs the PySide6 event loop:
settings, logging, the entity store and its snapshot, the command bus, the
modal presenter and the workflow handlers.
"""

import sys

from PySide6.QtWidgets import QApplication

from lexdesk import __version__
from lexdesk.commands.bus import get_command_bus
from lexdesk.config.settings import get_settings
from lexdesk.core.store import EntityStore
from lexdesk.infrastructure.logging_config import setup_logging, get_logger
from lexdesk.infrastructure.snapshot_storage import SnapshotStorage
from lexdesk.ui.main_window import MainWindow
from lexdesk.ui.qt_presenter import QtModalPresenter
from lexdesk.ui.qt_services import QtClipboard, QtFileService, QtScheduler, StatusBarNotifier
from lexdesk.workflows import WorkflowContext, register_workflows


logger = get_logger(__name__)


def main():
    """
    Main entry point for the GUI application.
    """
    # Setup logging (logs to persistent data directory with rotation)
    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        log_file=settings.log_file_path,
        log_to_file=settings.log_to_file
    )

    logger.info("Starting lexdesk application")

    # Create Qt application
    app = QApplication(sys.argv)
    app.setApplicationName("lexdesk")
    app.setApplicationVersion(__version__)

    # The store is created once and lives for the whole process
    store = EntityStore(current_user=settings.current_user, strict_validation=settings.strict_validation)
    storage = SnapshotStorage(settings.snapshot_file, namespace=settings.storage_namespace)
    storage.attach(store)

    bus = get_command_bus()
    window = MainWindow(store, bus)

    context = WorkflowContext(
        store_provider=lambda: store,
        bus=bus,
        presenter=QtModalPresenter(window),
        notifier=StatusBarNotifier(window),
        files=QtFileService(window),
        clipboard=QtClipboard(),
        scheduler=QtScheduler(),
        settings=settings,
    )
    subscriptions = register_workflows(context)
    logger.info(f"{len(subscriptions)} command handlers registered")

    window.apply_theme(settings.theme)
    window.show()

    logger.info("Main window displayed")

    # Run event loop
    exit_code = app.exec()

    logger.info(f"Application exiting with code {exit_code}")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
