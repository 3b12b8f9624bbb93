"""
Modal presenter.

This module holds the GUI-free part of the single shared dialog surface:
what a dialog shows (ModalView), which actions it offers (DialogAction),
which values it captures (FormField), and the lifecycle of one shown dialog
(ModalSession). At most one session is open at a time; presenting a new view
while one is open closes the old session first.

Widget toolkits subclass ModalPresenter and override _show/_hide; the
headless base class is what workflows and tests talk to.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)

# Session outcomes
OUTCOME_ACTION = 'action'
OUTCOME_DISMISSED = 'dismissed'

ActionCallback = Callable[[dict], None]
CloseCallback = Callable[['ModalSession'], None]


@dataclass
class FormField:
    """One value captured by a form dialog."""

    name: str
    """Key of the value in the dictionary passed to action callbacks."""

    label: str
    """Label shown next to the input."""

    value: Any = ""
    """Initial value (str for text, bool for checkboxes, list[str] for lists)."""

    choices: Optional[list[str]] = None
    """If set, the value must be one of these (rendered as a combo box)."""

    multiline: bool = False

    kind: str = "text"
    """One of 'text', 'bool' or 'list' (comma-separated list of strings)."""


@dataclass
class DialogAction:
    """A button offered by a dialog."""

    label: str
    callback: Optional[ActionCallback] = None
    """Called with the form values when the action is selected; None just closes."""

    variant: str = "default"
    """Rendering hint: 'default', 'primary' or 'danger'."""


@dataclass
class ModalView:
    """Everything a dialog shows."""

    title: str
    body: str = ""
    """Markdown content."""

    actions: list[DialogAction] = field(default_factory=list)
    fields: list[FormField] = field(default_factory=list)

    def action_labels(self) -> list[str]:
        return [action.label for action in self.actions]

    def find_action(self, label: str) -> Optional[DialogAction]:
        for action in self.actions:
            if action.label == label:
                return action
        return None


class ModalSession:
    """
    One shown dialog, from presentation to close.

    A session closes exactly once, either because an action was selected
    (the action's callback runs first) or because it was dismissed (outside
    click, close control, or replacement by a newer dialog). Close callbacks
    run on every exit path, after which the session holds no more callbacks.
    """

    def __init__(self, presenter: 'ModalPresenter', view: ModalView):
        self._presenter = presenter
        self.view = view
        self.outcome: Optional[str] = None
        self.selected: Optional[str] = None
        self._selecting = False
        self._close_callbacks: list[CloseCallback] = []

    @property
    def is_open(self) -> bool:
        return self.outcome is None

    def on_close(self, callback: CloseCallback) -> None:
        """
        Register a callback run when the session closes, whatever the path.

        Registering on an already closed session runs the callback at once.
        """
        if not self.is_open:
            callback(self)
            return
        self._close_callbacks.append(callback)

    def form_values(self, overrides: Optional[dict] = None) -> dict:
        """Get the current form values, with overrides from the widget layer applied."""
        values = {form_field.name: form_field.value for form_field in self.view.fields}
        if overrides:
            values.update(overrides)
        return values

    def select(self, label: str, values: Optional[dict] = None) -> None:
        """
        Select an action: run its callback, then close the session.

        Args:
            label: Label of the action.
            values: Form values entered by the user, if any.

        Raises:
            ValueError: If the view has no action with this label.
        """
        if not self.is_open:
            logger.warning(f"Ignoring '{label}' on closed dialog '{self.view.title}'")
            return

        action = self.view.find_action(label)
        if action is None:
            raise ValueError(f"Dialog '{self.view.title}' has no action '{label}'")

        self.selected = label
        self._selecting = True
        try:
            if action.callback is not None:
                action.callback(self.form_values(values))
        except Exception as e:
            logger.error(f"Action '{label}' of dialog '{self.view.title}' failed: {e}", exc_info=True)
        finally:
            self._close(OUTCOME_ACTION)

    def dismiss(self) -> None:
        """Close without selecting an action."""
        self._close(OUTCOME_DISMISSED)

    def _close(self, outcome: str) -> None:
        if not self.is_open:
            return
        # A callback that presents a new dialog replaces this one mid-selection
        self.outcome = OUTCOME_ACTION if self._selecting else outcome
        logger.debug(f"Dialog '{self.view.title}' closed ({self.outcome})")

        callbacks, self._close_callbacks = self._close_callbacks, []
        for callback in callbacks:
            try:
                callback(self)
            except Exception as e:
                logger.error(f"Close callback of dialog '{self.view.title}' failed: {e}", exc_info=True)

        self._presenter._release(self)


class ModalPresenter:
    """
    The single shared dialog surface.

    The base class keeps dialogs in memory only, which is enough for
    workflows and tests; toolkit subclasses render the active session.
    """

    def __init__(self):
        self._active: Optional[ModalSession] = None

    @property
    def active(self) -> Optional[ModalSession]:
        """The open session, or None if no dialog is shown."""
        return self._active

    def present(self, view: ModalView) -> ModalSession:
        """
        Show a dialog, replacing the one currently shown.

        The replaced session is closed as dismissed, and fully released,
        before the new one is shown.

        Args:
            view: What to show.

        Returns:
            The new open session.
        """
        if self._active is not None:
            logger.debug(f"Replacing dialog '{self._active.view.title}' with '{view.title}'")
            self._active.dismiss()

        session = ModalSession(self, view)
        self._active = session
        logger.debug(f"Presenting dialog '{view.title}' ({', '.join(view.action_labels())})")
        self._show(session)
        return session

    def dismiss(self) -> None:
        """Dismiss the active dialog, if any."""
        if self._active is not None:
            self._active.dismiss()

    def _release(self, session: ModalSession) -> None:
        if self._active is session:
            self._active = None
            self._hide(session)

    def _show(self, session: ModalSession) -> None:
        """Render a session. Overridden by toolkit presenters."""

    def _hide(self, session: ModalSession) -> None:
        """Tear down a rendered session. Overridden by toolkit presenters."""
