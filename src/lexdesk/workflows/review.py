"""Document review workflows: approve, reject and request changes."""

from ..commands import names
from ..infrastructure.logging_config import get_logger
from ..ui.presenter import DialogAction, FormField
from .base import CANCEL, Workflow


logger = get_logger(__name__)


class ReviewWorkflow(Workflow):
    """
    Confirmation dialogs for review decisions.

    Decisions are reported to the user and logged; documents under review
    are not records of the store.
    """

    def handlers(self):
        return {
            names.APPROVE_DOCUMENT: self.approve,
            names.REJECT_DOCUMENT: self.reject,
            names.REQUEST_CHANGES_DOCUMENT: self.request_changes,
            names.REQUEST_CHANGES: self.request_changes,
        }

    def approve(self, payload: dict) -> None:
        document_id = payload.get('documentId')
        title = payload.get('documentTitle') or "Document"

        def confirm(values):
            logger.info(f"Document {document_id!r} approved")
            self.notify("Document approved", f"\"{title}\" was approved.")

        self.present("Approve document", f"Do you want to approve \"{title}\"?", [
            DialogAction("Approve", confirm, variant='primary'),
            DialogAction(CANCEL),
        ])

    def reject(self, payload: dict) -> None:
        document_id = payload.get('documentId')
        title = payload.get('documentTitle') or "Document"

        def confirm(values):
            reason = (values.get('comment') or '').strip()
            logger.info(f"Document {document_id!r} rejected: {reason or 'no reason given'}")
            message = f"\"{title}\" was rejected."
            if reason:
                message += f" Reason: {reason}"
            self.notify("Document rejected", message)

        self.present("Reject document", f"Why are you rejecting \"{title}\"?", [
            DialogAction("Reject", confirm, variant='danger'),
            DialogAction(CANCEL),
        ], [FormField('comment', "Reason", multiline=True)])

    def request_changes(self, payload: dict) -> None:
        document_id = payload.get('documentId')
        title = payload.get('documentTitle') or "Document"

        def confirm(values):
            changes = (values.get('comment') or '').strip()
            logger.info(f"Changes requested on document {document_id!r}: {changes or 'unspecified'}")
            self.notify("Changes requested", f"A change request was sent for \"{title}\".")

        self.present("Request changes", f"Which changes do you request for \"{title}\"?", [
            DialogAction("Send request", confirm, variant='primary'),
            DialogAction(CANCEL),
        ], [FormField('comment', "Requested changes", multiline=True)])
