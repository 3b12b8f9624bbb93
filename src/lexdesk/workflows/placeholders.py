"""
Resolve-or-synthesize policy for view workflows.

Commands may reference ids that have no record in the store (for example
triggers on sample dashboard cards). Instead of failing, the view workflows
show a placeholder record built from the payload. Placeholders are never
added to the store.
"""

from typing import Optional

from ..core.models import LegalText, LegalTextMetadata, NewsItem, Procedure, ProcedureStep, utc_now
from ..core.store import EntityStore
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)

DEFAULT_LEGAL_TITLE = "Legal document"
DEFAULT_PROCEDURE_TITLE = "Administrative procedure"
DEFAULT_NEWS_TITLE = "Legal news"
PLACEHOLDER_AUTHOR = "System"
PLACEHOLDER_CATEGORY = "General"


def placeholder_legal_content(title: Optional[str]) -> str:
    """Build the example articles shown for an unknown legal text."""
    subject = title or "these regulations"
    return (
        f"<h1>{title or DEFAULT_LEGAL_TITLE}</h1>\n"
        "<h2>Article 1 - Purpose</h2>\n"
        f"<p>This document sets out the rules and procedures applicable to {subject}.</p>\n"
        "<h2>Article 2 - Scope</h2>\n"
        "<p>The provisions of this document apply to every case within its remit.</p>\n"
        "<h2>Article 3 - Implementation</h2>\n"
        "<p>Implementation details are defined by the corresponding implementing texts.</p>\n"
        "<h2>Article 4 - Entry into force</h2>\n"
        "<p>This document enters into force on the date of its publication.</p>\n"
    )


def placeholder_legal_text(text_id: Optional[str], title: Optional[str]) -> LegalText:
    return LegalText(
        id=text_id or '',
        title=title or DEFAULT_LEGAL_TITLE,
        content=placeholder_legal_content(title),
        type='law',
        status='published',
        category=PLACEHOLDER_CATEGORY,
        author=PLACEHOLDER_AUTHOR,
        tags=['example', 'legal'],
        metadata=LegalTextMetadata(source="Generated automatically", references=[], validity="In force"),
    )


def placeholder_steps() -> list[ProcedureStep]:
    return [
        ProcedureStep(
            id='1',
            title="Prepare the documents",
            description="Gather every document the procedure requires",
            order=1,
            is_required=True,
            documents=["Identity document", "Proof of address"],
        ),
        ProcedureStep(
            id='2',
            title="Submit the application",
            description="Submit the application to the competent office",
            order=2,
            is_required=True,
        ),
        ProcedureStep(
            id='3',
            title="Follow up the application",
            description="Track the progress of your application",
            order=3,
            is_required=False,
        ),
    ]


def placeholder_procedure(procedure_id: Optional[str], title: Optional[str]) -> Procedure:
    return Procedure(
        id=procedure_id or '',
        title=title or DEFAULT_PROCEDURE_TITLE,
        description="Description of the administrative procedure",
        steps=placeholder_steps(),
        category=PLACEHOLDER_CATEGORY,
        difficulty='medium',
        estimated_time="30 minutes",
        required_documents=["Identity document", "Proof of address"],
        status='active',
    )


def placeholder_news(news_id: Optional[str], title: Optional[str]) -> NewsItem:
    return NewsItem(
        id=news_id or '',
        title=title or DEFAULT_NEWS_TITLE,
        content=(
            "Latest legal news with the most important information.\n\n"
            "This item covers recent legislative and regulatory developments."
        ),
        category="Legal",
        author="Editorial team",
        date_published=utc_now(),
    )


def resolve_legal_text(store: EntityStore, text_id: Optional[str], title: Optional[str]) -> LegalText:
    """
    Get a legal text from the store, or a placeholder if it is unknown.

    Args:
        store: Entity store to look in.
        text_id: Identifier from the command payload (may be missing).
        title: Title from the command payload, used for the placeholder.

    Returns:
        The stored legal text or a synthesized one.
    """
    text = store.get_legal_text(text_id) if text_id else None
    if text is None:
        logger.debug(f"Legal text {text_id!r} not found, showing placeholder")
        text = placeholder_legal_text(text_id, title)
    return text


def resolve_procedure(store: EntityStore, procedure_id: Optional[str], title: Optional[str]) -> Procedure:
    procedure = store.get_procedure(procedure_id) if procedure_id else None
    if procedure is None:
        logger.debug(f"Procedure {procedure_id!r} not found, showing placeholder")
        procedure = placeholder_procedure(procedure_id, title)
    return procedure


def resolve_news(store: EntityStore, news_id: Optional[str], title: Optional[str]) -> NewsItem:
    item = store.get_news(news_id) if news_id else None
    if item is None:
        logger.debug(f"News item {news_id!r} not found, showing placeholder")
        item = placeholder_news(news_id, title)
    return item
