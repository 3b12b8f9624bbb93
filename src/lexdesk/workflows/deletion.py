"""
Delete workflows.

Every delete command goes through the same two-step flow: a confirmation
dialog is shown (Requested); selecting Delete dispatches confirm-delete with
the item type and id (Confirmed), and the one outstanding confirmation
listener performs the deletion. Any other way of closing the dialog cancels
the listener (Cancelled), so abandoned confirmations leave nothing behind.
"""

from typing import Callable, Optional

from ..commands import names
from ..commands.bus import Subscription
from ..infrastructure.logging_config import get_logger
from ..ui.presenter import DialogAction, ModalSession
from .base import CANCEL, Workflow


logger = get_logger(__name__)

ID_KEYS = {
    names.DELETE_LEGAL_TEXT: ('legal-text', 'textId'),
    names.DELETE_PROCEDURE: ('procedure', 'procedureId'),
    names.DELETE_NEWS: ('news', 'newsId'),
    names.DELETE_TEMPLATE: ('template', 'templateId'),
    names.DELETE_SAVED_SEARCH: ('saved-search', 'searchId'),
}
"""Delete command to (confirm-delete type, payload key of the id)."""


class DeletionWorkflow(Workflow):
    """Confirm-then-delete handlers for every deletable collection."""

    def handlers(self):
        return {command: self._request_handler(command) for command in ID_KEYS}

    def _request_handler(self, command: str) -> Callable[[dict], None]:
        item_type, id_key = ID_KEYS[command]
        return lambda payload: self.request_delete(item_type, payload.get(id_key))

    def deleter(self, item_type: str) -> Optional[Callable[[str], None]]:
        """Get the store operation deleting items of a type."""
        store = self.store
        return {
            'legal-text': store.delete_legal_text,
            'procedure': store.delete_procedure,
            'news': store.delete_news,
            'template': store.delete_template,
            'saved-search': store.delete_saved_search,
        }.get(item_type)

    def request_delete(self, item_type: str, item_id: Optional[str]) -> ModalSession:
        """
        Ask for confirmation before deleting an item.

        Args:
            item_type: Type carried by confirm-delete.
            item_id: Identifier of the item.

        Returns:
            The confirmation dialog session.
        """
        confirmation = {'type': item_type, 'id': item_id}
        session = self.present(
            "Confirm deletion",
            "Are you sure you want to delete this item? This cannot be undone.",
            [
                DialogAction("Delete", lambda values: self.dispatch(names.CONFIRM_DELETE, confirmation),
                             variant='danger'),
                DialogAction(CANCEL),
            ],
        )

        subscription = self.context.bus.subscribe_once(names.CONFIRM_DELETE, self.confirm_delete)
        session.on_close(lambda closed: self._release(subscription, closed))
        return session

    def _release(self, subscription: Subscription, session: ModalSession) -> None:
        if subscription.active:
            logger.debug(f"Deletion not confirmed ({session.outcome}), dropping confirmation listener")
        subscription.cancel()

    def confirm_delete(self, payload: dict) -> None:
        """Perform a confirmed deletion."""
        item_type = payload.get('type')
        item_id = payload.get('id')

        delete = self.deleter(item_type)
        if delete is None:
            logger.warning(f"Cannot delete item of unknown type {item_type!r}")
            self.notify("Deletion failed", f"Unknown item type {item_type!r}.")
            return

        delete(item_id)
        logger.info(f"Deleted {item_type} {item_id}")
        self.notify("Deleted", "The item was deleted.")
