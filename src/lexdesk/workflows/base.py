"""
Shared plumbing for workflow handlers.

A workflow groups the handlers of related commands. Each handler receives
the command payload, reads or mutates the entity store, presents dialogs and
notifies the user. Handlers get everything they need from a WorkflowContext;
the store in particular is looked up through the context on every call so
that no handler keeps a reference to state that may since have been replaced.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from ..commands.bus import CommandBus, Handler, SubscriptionGroup
from ..config.settings import AppSettings
from ..core.errors import ValidationError
from ..core.store import EntityStore
from ..infrastructure.logging_config import get_logger
from ..ui.presenter import DialogAction, ModalPresenter, ModalSession, ModalView
from ..ui.services import Clipboard, FileService, Notifier, Scheduler


logger = get_logger(__name__)

CLOSE = "Close"
CANCEL = "Cancel"
SAVE = "Save"


@dataclass
class WorkflowContext:
    """Collaborators available to every workflow handler."""

    store_provider: Callable[[], EntityStore]
    """Returns the current entity store."""

    bus: CommandBus
    presenter: ModalPresenter
    notifier: Notifier
    files: FileService
    clipboard: Clipboard
    scheduler: Scheduler
    settings: AppSettings

    @property
    def store(self) -> EntityStore:
        return self.store_provider()


class Workflow:
    """
    Base class for a group of command handlers.

    Subclasses implement handlers() and use the helpers below to talk to the
    store, the presenter and the notifier.
    """

    def __init__(self, context: WorkflowContext):
        self.context = context

    def handlers(self) -> dict[str, Handler]:
        """
        Get the handlers of this workflow.

        Returns:
            Mapping of command name to handler.
        """
        raise NotImplementedError("Subclasses must implement handlers()")

    def register(self, group: Optional[SubscriptionGroup] = None) -> SubscriptionGroup:
        """
        Subscribe every handler of this workflow to the bus.

        Args:
            group: Group to add the subscriptions to; a new one if None.

        Returns:
            The group holding the subscriptions.
        """
        if group is None:
            group = SubscriptionGroup()
        handlers = self.handlers()
        for command, handler in handlers.items():
            group.add(self.context.bus.subscribe(command, handler))
        logger.debug(f"{type(self).__name__} registered {len(handlers)} handler(s)")
        return group

    @property
    def store(self) -> EntityStore:
        return self.context.store

    @property
    def settings(self) -> AppSettings:
        return self.context.settings

    def notify(self, title: str, message: str) -> None:
        self.context.notifier.notify(title, message)

    def dispatch(self, command: str, payload: Optional[Mapping[str, Any]] = None) -> None:
        self.context.bus.dispatch(command, payload)

    def present(self, title: str, body: str = "", actions: Optional[list[DialogAction]] = None,
                fields: Optional[list] = None) -> ModalSession:
        """
        Present a dialog.

        A dialog without actions gets a single Close action.
        """
        if not actions:
            actions = [DialogAction(CLOSE)]
        view = ModalView(title=title, body=body, actions=actions, fields=fields or [])
        return self.context.presenter.present(view)

    def deliver(self, content: str, filename: str) -> bool:
        """
        Hand generated content to the file service and report progress.

        A "started" notification is shown at once and a "complete" one after
        the configured delay. The delayed notification cannot be cancelled:
        it fires even if the dialog that triggered the download has closed.

        Args:
            content: File content.
            filename: Suggested file name.

        Returns:
            True if the file was saved, False if the user cancelled.
        """
        if not self.context.files.save_text(content, filename):
            logger.info(f"Saving {filename} cancelled")
            return False

        self.notify("Download started", f"Downloading \"{filename}\"...")
        self.context.scheduler.call_later(
            self.settings.download_delay_ms,
            lambda: self.notify("Download complete", f"\"{filename}\" downloaded successfully."),
        )
        return True

    def guarded(self, operation: Callable[[], Any], failure_title: str = "Invalid data") -> bool:
        """
        Run a store operation, turning validation errors into a notification.

        Args:
            operation: Callable performing the store call.
            failure_title: Title of the notification shown on failure.

        Returns:
            True if the operation completed, False if validation failed.
        """
        try:
            operation()
        except ValidationError as e:
            logger.warning(f"{failure_title}: {e}")
            self.notify(failure_title, str(e))
            return False
        return True
