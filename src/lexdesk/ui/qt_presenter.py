"""
Qt rendering of the modal presenter.

Each open session is shown as a QDialog over the main window: a Markdown body
rendered to HTML, an optional form and one button per action. Closing the
dialog with the title bar or Escape, or clicking the main window outside
it, dismisses the session. When a session closes for any reason its dialog
is torn down.
"""

from typing import Optional

import markdown
from PySide6.QtCore import QEvent, QObject
from PySide6.QtWidgets import (
    QApplication,
    QCheckBox,
    QComboBox,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPlainTextEdit,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from ..config.settings import get_settings
from ..infrastructure.logging_config import get_logger
from .presenter import FormField, ModalPresenter, ModalSession


logger = get_logger(__name__)

MARKDOWN_EXTENSIONS = ['extra', 'sane_lists']


def render_markdown(content: str, dark: bool = False) -> str:
    """
    Render a dialog body to styled HTML.

    Args:
        content: Markdown content (raw HTML blocks pass through).
        dark: Whether the application uses a dark theme.

    Returns:
        HTML document.
    """
    html_body = markdown.markdown(content, extensions=MARKDOWN_EXTENSIONS)

    if dark:
        colors = {'text': '#c9d1d9', 'border': '#30363d', 'code_bg': '#161b22', 'link': '#58a6ff'}
    else:
        colors = {'text': '#24292e', 'border': '#eaecef', 'code_bg': '#f6f8fa', 'link': '#0366d6'}

    css = f"""
    <style>
        body {{ font-size: 14px; line-height: 1.5; color: {colors['text']}; }}
        h1, h2 {{ border-bottom: 1px solid {colors['border']}; padding-bottom: 0.3em; }}
        code {{ background-color: {colors['code_bg']}; padding: 0.2em 0.4em; }}
        a {{ color: {colors['link']}; }}
    </style>
    """
    return f"<html><head><meta charset=\"UTF-8\">{css}</head><body>{html_body}</body></html>"


class ModalDialog(QDialog):
    """Dialog showing one modal session."""

    def __init__(self, session: ModalSession, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._session = session
        self._inputs: dict[str, QWidget] = {}

        self._setup_ui()

    def _setup_ui(self):
        view = self._session.view
        layout = QVBoxLayout(self)

        if view.body:
            browser = QTextBrowser(self)
            browser.setOpenExternalLinks(True)
            browser.setHtml(render_markdown(view.body, get_settings().theme.startswith('dark')))
            layout.addWidget(browser)

        if view.fields:
            form = QFormLayout()
            for form_field in view.fields:
                widget = self._create_input(form_field)
                self._inputs[form_field.name] = widget
                form.addRow(form_field.label, widget)
            layout.addLayout(form)

        buttons = QHBoxLayout()
        buttons.addStretch()
        for action in view.actions:
            button = QPushButton(action.label, self)
            if action.variant == 'danger':
                button.setProperty('class', 'danger')
            elif action.variant == 'primary':
                button.setDefault(True)
            button.clicked.connect(lambda checked=False, label=action.label: self._select(label))
            buttons.addWidget(button)
        layout.addLayout(buttons)

        self.setWindowTitle(view.title)
        self.resize(700, 520 if view.body else 360)

    def _create_input(self, form_field: FormField) -> QWidget:
        if form_field.kind == 'bool':
            widget = QCheckBox(self)
            widget.setChecked(bool(form_field.value))
        elif form_field.choices:
            widget = QComboBox(self)
            widget.addItems(form_field.choices)
            if form_field.value in form_field.choices:
                widget.setCurrentText(form_field.value)
        elif form_field.multiline:
            widget = QPlainTextEdit(self)
            widget.setPlainText(str(form_field.value or ''))
        else:
            widget = QLineEdit(self)
            widget.setText(str(form_field.value or ''))
        return widget

    def values(self) -> dict:
        """Read the current value of every form input."""
        values = {}
        for name, widget in self._inputs.items():
            if isinstance(widget, QCheckBox):
                values[name] = widget.isChecked()
            elif isinstance(widget, QComboBox):
                values[name] = widget.currentText()
            elif isinstance(widget, QPlainTextEdit):
                values[name] = widget.toPlainText()
            else:
                values[name] = widget.text()
        return values

    def _select(self, label: str):
        self._session.select(label, self.values())

    def reject(self):
        """Escape key or window close button."""
        self._session.dismiss()
        super().reject()

    def release(self):
        """Close the dialog after its session has closed."""
        self.done(QDialog.DialogCode.Rejected)
        self.deleteLater()


class OutsideClickFilter(QObject):
    """
    Application event filter dismissing the active dialog on a click in the
    main window.

    The click is consumed, so it only closes the dialog.
    """

    def __init__(self, presenter: ModalPresenter, window: QWidget):
        super().__init__()
        self._presenter = presenter
        self._window = window

    def eventFilter(self, watched, event) -> bool:
        if event.type() != QEvent.Type.MouseButtonPress or self._presenter.active is None:
            return False
        if not watched.isWidgetType() or watched.window() is not self._window:
            return False
        logger.debug("Click outside the dialog, dismissing it")
        self._presenter.dismiss()
        return True


class QtModalPresenter(ModalPresenter):
    """Modal presenter showing sessions as dialogs over a parent window."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__()
        self._parent = parent
        self._dialogs: dict[int, ModalDialog] = {}
        self._outside_clicks = OutsideClickFilter(self, parent) if parent is not None else None
        self._filter_installed = False

    def _show(self, session: ModalSession) -> None:
        self._install_outside_click_filter()
        dialog = ModalDialog(session, self._parent)
        self._dialogs[id(session)] = dialog
        # Not window-modal: a blocked main window would never see the click
        dialog.show()
        dialog.raise_()
        dialog.activateWindow()

    def _install_outside_click_filter(self) -> None:
        app = QApplication.instance()
        if self._filter_installed or self._outside_clicks is None or app is None:
            return
        app.installEventFilter(self._outside_clicks)
        self._filter_installed = True

    def _hide(self, session: ModalSession) -> None:
        dialog = self._dialogs.pop(id(session), None)
        if dialog is not None:
            dialog.release()
