"""
Legal text workflows: view, download, share, create and edit.

Deletion is handled by the deletion workflow.
"""

from dataclasses import replace

from ..commands import names
from ..core.models import LEGAL_TEXT_STATUSES, LEGAL_TEXT_TYPES, LegalText
from ..infrastructure.paths import sanitize_filename
from ..ui.presenter import DialogAction, FormField
from .base import CANCEL, CLOSE, SAVE, Workflow
from .formatting import format_date, plain_text, properties
from .forms import collect, initial_record, join_list
from .placeholders import resolve_legal_text


def legal_text_fields(text: LegalText) -> list[FormField]:
    return [
        FormField('title', "Title", text.title),
        FormField('type', "Type", text.type, choices=list(LEGAL_TEXT_TYPES)),
        FormField('status', "Status", text.status, choices=list(LEGAL_TEXT_STATUSES)),
        FormField('category', "Category", text.category),
        FormField('author', "Author", text.author),
        FormField('tags', "Tags (comma-separated)", join_list(text.tags), kind='list'),
        FormField('content', "Content", text.content, multiline=True),
    ]


def legal_text_body(text: LegalText) -> str:
    """Build the Markdown body of the legal text viewer."""
    details = properties([
        ("Type", text.type),
        ("Status", text.status),
        ("Category", text.category),
        ("Author", text.author),
        ("Tags", join_list(text.tags)),
        ("Source", text.metadata.source),
        ("Validity", text.metadata.validity),
    ])
    return f"## {text.title}\n\n{details}\n\n---\n\n{text.content or 'No content.'}\n"


class LegalTextWorkflow(Workflow):
    """Handlers for viewing and editing legal texts."""

    def handlers(self):
        return {
            names.VIEW_LEGAL_TEXT: self.view,
            names.DOWNLOAD_LEGAL_TEXT: self.download,
            names.SHARE_LEGAL_TEXT: self.share,
            names.ADD_LEGAL_TEXT: self.add,
            names.EDIT_LEGAL_TEXT: self.edit,
        }

    def view(self, payload: dict) -> None:
        """Show a legal text, or a placeholder if the id is unknown."""
        text = resolve_legal_text(self.store, payload.get('textId'), payload.get('title'))
        fmt = self.settings.default_download_format
        reference = {'textId': text.id, 'title': text.title}

        self.present("Document viewer", legal_text_body(text), [
            DialogAction(f"Download {fmt}", lambda values: self.dispatch(
                names.DOWNLOAD_LEGAL_TEXT, {**reference, 'format': fmt}), variant='primary'),
            DialogAction("Share", lambda values: self.dispatch(names.SHARE_LEGAL_TEXT, reference)),
            DialogAction("Add to favorites", lambda values: self.dispatch(
                names.ADD_TO_FAVORITES,
                {'itemType': 'legal-text', 'itemId': text.id, 'itemName': text.title})),
            DialogAction(CLOSE),
        ])

    def download(self, payload: dict) -> None:
        text = resolve_legal_text(self.store, payload.get('textId'), payload.get('title'))
        fmt = payload.get('format') or self.settings.default_download_format

        content = f"{text.title}\n\n{plain_text(text.content) or 'No content.'}\n\n---\nGenerated on {format_date()}\n"
        filename = f"{sanitize_filename(text.title)}.{fmt.lower()}"
        self.deliver(content, filename)

    def share_url(self, text_id: str) -> str:
        return f"{self.settings.share_base_url.rstrip('/')}/document/{text_id}"

    def share(self, payload: dict) -> None:
        """Copy the share link of a document and show it."""
        title = payload.get('title') or "Document"
        url = self.share_url(payload.get('textId') or '-'.join(title.lower().split()))

        def copy_link(values=None):
            self.context.clipboard.copy(url)
            self.notify("Link copied", "The share link was copied to the clipboard.")

        copy_link()
        self.present(f"Share: {title}", f"Share link:\n\n`{url}`", [
            DialogAction("Copy link", copy_link, variant='primary'),
            DialogAction(CLOSE),
        ])

    def add(self, payload: dict) -> None:
        text = initial_record(LegalText, payload.get('data'))
        if not text.author:
            text = replace(text, author=self.store.current_user)
        fields = legal_text_fields(text)

        def save(values):
            if self.guarded(lambda: self.store.add_legal_text(collect(fields, values))):
                self.notify("Text created", "The new legal text was created.")

        self.present("New legal text", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)

    def edit(self, payload: dict) -> None:
        text_id = payload.get('textId')
        text = self.store.get_legal_text(text_id) if text_id else None
        if text is None:
            self.notify("Not found", f"No legal text with id {text_id!r}.")
            return
        fields = legal_text_fields(text)

        def save(values):
            if self.guarded(lambda: self.store.update_legal_text(text_id, collect(fields, values))):
                self.notify("Text updated", "The legal text was updated.")

        self.present("Edit legal text", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)
