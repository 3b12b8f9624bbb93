"""
Main application window.

The window lists the records of one catalog section at a time. Every user
action (open, create, edit, delete, bookmark, search, import, export) is
dispatched as a command on the bus; the window itself never mutates the
store. It refreshes whenever the store reports a change.
"""

from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSplitter,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)
from qt_material import apply_stylesheet

from .. import __version__
from ..commands import names
from ..commands.bus import CommandBus
from ..config.settings import get_settings, get_settings_manager
from ..core.store import EntityStore
from ..infrastructure.logging_config import get_logger
from ..workflows.formatting import format_date
from .sections import SECTIONS, Section, get_section


logger = get_logger(__name__)


class MainWindow(QMainWindow):
    """
    Main application window.

    Business logic lives in the workflows reached through the command bus.
    """

    def __init__(self, store: EntityStore, bus: CommandBus, parent=None):
        """
        Initialize the main window.

        Args:
            store: Entity store whose records are listed.
            bus: Command bus user actions are dispatched on.
            parent: Parent widget.
        """
        super().__init__(parent)

        self._store = store
        self._bus = bus
        self._section: Section = SECTIONS[0]
        self._records: dict[int, object] = {}

        self._setup_ui()
        self._setup_menus()
        self._connect_signals()
        self._refresh()

        logger.info("MainWindow initialized")

    def _setup_ui(self):
        """Setup the user interface."""
        self.setWindowTitle(f"lexdesk {__version__}")
        settings = get_settings()
        self.resize(settings.window_width, settings.window_height)

        self._section_list = QListWidget(self)
        for section in SECTIONS:
            item = QListWidgetItem(section.label)
            item.setData(Qt.ItemDataRole.UserRole, section.key)
            self._section_list.addItem(item)
        self._section_list.setCurrentRow(0)

        self._search_edit = QLineEdit(self)
        self._search_edit.setPlaceholderText("Search...")
        self._search_button = QPushButton("Search", self)

        self._tree = QTreeWidget(self)
        self._tree.setHeaderLabels(["Title", "Details", "Date"])
        self._tree.setRootIsDecorated(False)
        self._tree.setColumnWidth(0, int(settings.window_width * 0.35))

        self._new_button = QPushButton("New", self)
        self._open_button = QPushButton("Open", self)
        self._edit_button = QPushButton("Edit", self)
        self._favorite_button = QPushButton("Add to favorites", self)
        self._delete_button = QPushButton("Delete", self)

        search_row = QHBoxLayout()
        search_row.addWidget(self._search_edit)
        search_row.addWidget(self._search_button)

        button_row = QHBoxLayout()
        for button in (self._new_button, self._open_button, self._edit_button,
                       self._favorite_button, self._delete_button):
            button_row.addWidget(button)
        button_row.addStretch()

        content = QWidget(self)
        content_layout = QVBoxLayout(content)
        content_layout.addLayout(search_row)
        content_layout.addWidget(self._tree)
        content_layout.addLayout(button_row)

        splitter = QSplitter(self)
        splitter.addWidget(self._section_list)
        splitter.addWidget(content)
        splitter.setSizes([int(settings.window_width * 0.2), int(settings.window_width * 0.8)])
        self.setCentralWidget(splitter)

        self.statusBar().showMessage("Ready")
        logger.debug("UI setup complete")

    def _setup_menus(self):
        file_menu = self.menuBar().addMenu("&File")

        export_action = QAction("&Export Data...", self)
        export_action.triggered.connect(lambda: self._bus.dispatch(names.EXPORT_DATA))
        file_menu.addAction(export_action)

        import_action = QAction("&Import Data...", self)
        import_action.triggered.connect(lambda: self._bus.dispatch(names.IMPORT_DATA))
        file_menu.addAction(import_action)

        file_menu.addSeparator()
        quit_action = QAction("&Quit", self)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = self.menuBar().addMenu("&View")
        favorites_action = QAction("&Favorites...", self)
        favorites_action.triggered.connect(lambda: self._bus.dispatch(names.VIEW_FAVORITES, {}))
        view_menu.addAction(favorites_action)

        help_menu = self.menuBar().addMenu("&Help")
        about_action = QAction("&About", self)
        about_action.triggered.connect(self.show_about)
        help_menu.addAction(about_action)

    def _connect_signals(self):
        """Connect signals and slots."""
        self._section_list.currentItemChanged.connect(self._on_section_selected)
        self._tree.itemDoubleClicked.connect(lambda item, column: self._dispatch_for_selection('open'))
        self._tree.itemSelectionChanged.connect(self._update_buttons)
        self._search_button.clicked.connect(self._search)
        self._search_edit.returnPressed.connect(self._search)
        self._new_button.clicked.connect(self._new_record)
        self._open_button.clicked.connect(lambda: self._dispatch_for_selection('open'))
        self._edit_button.clicked.connect(lambda: self._dispatch_for_selection('edit'))
        self._favorite_button.clicked.connect(lambda: self._dispatch_for_selection('favorite'))
        self._delete_button.clicked.connect(lambda: self._dispatch_for_selection('delete'))

        self._store.add_listener(self._on_store_changed)
        self._section_subscription = self._bus.subscribe(names.SECTION_CHANGE, self._on_section_change)

    def _on_store_changed(self, what: str):
        if what != 'currentSection':
            self._refresh()

    def _on_section_change(self, payload: dict):
        """Follow section changes requested through the bus."""
        section = get_section(payload.get('section', ''))
        if section is None:
            logger.warning(f"Unknown section: {payload.get('section')!r}")
            return
        self._section = section
        for row in range(self._section_list.count()):
            if self._section_list.item(row).data(Qt.ItemDataRole.UserRole) == section.key:
                self._section_list.blockSignals(True)
                self._section_list.setCurrentRow(row)
                self._section_list.blockSignals(False)
                break
        self._refresh()

    def _on_section_selected(self, current: Optional[QListWidgetItem], previous: Optional[QListWidgetItem]):
        if current is None:
            return
        self._bus.dispatch(names.NAVIGATE_TO_SECTION, {'section': current.data(Qt.ItemDataRole.UserRole)})

    def _refresh(self):
        """Repopulate the record list of the current section."""
        self._tree.clear()
        self._records.clear()

        records = self._section.records(self._store)
        for index, record in enumerate(records):
            date = getattr(record, 'date_modified', None) or getattr(record, record.CREATED_FIELD, None)
            item = QTreeWidgetItem([
                record.title,
                self._section.describe(record),
                format_date(date) if date else "",
            ])
            item.setData(0, Qt.ItemDataRole.UserRole, index)
            self._records[index] = record
            self._tree.addTopLevelItem(item)

        self._update_buttons()
        self.statusBar().showMessage(f"{self._section.label}: {len(records)} record(s)")

    def _selected_record(self):
        items = self._tree.selectedItems()
        if not items:
            return None
        return self._records.get(items[0].data(0, Qt.ItemDataRole.UserRole))

    def _update_buttons(self):
        selected = self._selected_record() is not None
        self._new_button.setEnabled(self._section.add_command is not None)
        self._open_button.setEnabled(selected)
        self._edit_button.setEnabled(selected and self._section.edit is not None)
        self._favorite_button.setEnabled(selected and self._section.favorite is not None)
        self._delete_button.setEnabled(selected and self._section.delete is not None)
        self._delete_button.setText("Remove" if self._section.key == 'favorites' else "Delete")

    def _dispatch_for_selection(self, kind: str):
        record = self._selected_record()
        builder = getattr(self._section, kind)
        if record is None or builder is None:
            return
        command = builder(record)
        if command is not None:
            self._bus.dispatch(*command)

    @Slot()
    def _new_record(self):
        if self._section.add_command:
            self._bus.dispatch(self._section.add_command, {'data': None})

    @Slot()
    def _search(self):
        query = self._search_edit.text().strip()
        self._bus.dispatch(names.IMMERSIVE_SEARCH, {'searchType': self._section.search_type, 'query': query})

    def apply_theme(self, theme: str):
        """
        Apply the specified qt-material theme to the application.

        Args:
            theme: Name of the theme to apply.
        """
        try:
            app = QApplication.instance()
            if not theme.endswith('.xml'):
                theme = f"{theme}.xml"

            if app:
                apply_stylesheet(app, theme=theme, invert_secondary=theme.startswith('light_'))
                logger.info(f"Theme applied: {theme}")
        except Exception as e:
            logger.error(f"Failed to apply theme: {e}")

    @Slot()
    def show_about(self):
        QMessageBox.about(
            self,
            "About lexdesk",
            f"lexdesk {__version__}\n\nCatalog of legal texts, procedures, news and document templates.",
        )

    def closeEvent(self, event):
        """Handle window close event."""
        self._store.remove_listener(self._on_store_changed)
        self._section_subscription.cancel()

        settings_manager = get_settings_manager()
        settings_manager.update(
            window_width=self.width(),
            window_height=self.height()
        )

        logger.info(f"Main window closing (size: {self.width()}x{self.height()})")
        event.accept()
