"""
Search workflows: immersive search, saved searches and their execution.
"""

from typing import Optional

from ..commands import names
from ..core.filters import SearchResults
from ..core.models import SearchQuery, utc_now
from ..infrastructure.logging_config import get_logger
from ..ui.presenter import DialogAction, FormField
from .base import CANCEL, CLOSE, SAVE, Workflow
from .formatting import excerpt
from .forms import collect


logger = get_logger(__name__)

SECTION_TITLES = {
    'legal-text': "Legal texts",
    'procedure': "Procedures",
    'news': "News",
    'template': "Templates",
}

SEARCH_TYPES = {
    'legal-text': 'legal-text',
    'legal-texts': 'legal-text',
    'legalTexts': 'legal-text',
    'procedure': 'procedure',
    'procedures': 'procedure',
    'news': 'news',
    'template': 'template',
    'templates': 'template',
}
"""Accepted searchType values and the collection they restrict to."""


def _preview_text(record) -> str:
    return getattr(record, 'description', None) or getattr(record, 'content', '')


def results_body(results: SearchResults, query: Optional[str], limit: int) -> str:
    """
    Build the Markdown body of a results dialog.

    Each collection with matches gets a section listing at most limit
    records.
    """
    header = f"**{results.total} result(s)**" + (f" for \"{query}\"" if query else "")
    sections = [header]
    for item_type, records in results.by_collection().items():
        if not records:
            continue
        lines = [f"### {SECTION_TITLES[item_type]} ({len(records)})", ""]
        for record in records[:limit]:
            lines.append(f"- **{record.title}**: {excerpt(_preview_text(record))}")
        if len(records) > limit:
            lines.append(f"- *... and {len(records) - limit} more*")
        sections.append("\n".join(lines))
    return "\n\n".join(sections) + "\n"


class SearchWorkflow(Workflow):
    """Handlers for searching and managing saved searches."""

    def handlers(self):
        return {
            names.IMMERSIVE_SEARCH: self.immersive_search,
            names.SAVE_SEARCH: self.save_search,
            names.EXECUTE_SAVED_SEARCH: self.execute_saved_search,
            names.EDIT_SAVED_SEARCH: self.edit_saved_search,
        }

    def search(self, query: str, search_type: Optional[str] = None) -> SearchResults:
        """
        Search one collection, or all four if search_type names none.
        """
        item_type = SEARCH_TYPES.get(search_type or '')
        if item_type is None:
            return self.store.global_search(query)
        if item_type == 'legal-text':
            return SearchResults(legal_texts=self.store.search_legal_texts(query))
        if item_type == 'procedure':
            return SearchResults(procedures=self.store.search_procedures(query))
        if item_type == 'news':
            return SearchResults(news=self.store.search_news(query))
        return SearchResults(templates=self.store.search_templates(query))

    def immersive_search(self, payload: dict) -> None:
        query = payload.get('query') or ''
        results = self.search(query, payload.get('searchType'))
        logger.debug(f"Search for {query!r} found {results.total} record(s)")

        save_payload = {
            'name': f"Search {utc_now().astimezone().strftime('%H:%M:%S')}",
            'query': query,
            'filters': {},
        }
        self.present("Search results", results_body(results, query, self.settings.max_search_preview), [
            DialogAction("Save this search", lambda values: self.dispatch(names.SAVE_SEARCH, save_payload),
                         variant='primary'),
            DialogAction(CLOSE),
        ])

    def save_search(self, payload: dict) -> None:
        name = payload.get('name') or "Search"
        data = {'name': name, 'query': payload.get('query') or '', 'filters': payload.get('filters') or {}}
        if self.guarded(lambda: self.store.save_search(data)):
            self.notify("Search saved", f"The search \"{name}\" was saved.")

    def execute_saved_search(self, payload: dict) -> None:
        """Replay a saved search and show its results."""
        search_id = payload.get('searchId')
        search = self.store.get_saved_search(search_id) if search_id else None
        if search is None:
            self.notify("Not found", f"No saved search with id {search_id!r}.")
            return

        results = self.store.execute_saved_search(search_id)
        self.present(f"Results: {search.name}",
                     results_body(results, search.query, self.settings.max_search_preview))

    def edit_saved_search(self, payload: dict) -> None:
        search_id = payload.get('searchId')
        search: Optional[SearchQuery] = self.store.get_saved_search(search_id) if search_id else None
        if search is None:
            self.notify("Not found", f"No saved search with id {search_id!r}.")
            return
        fields = [
            FormField('name', "Name", search.name),
            FormField('query', "Query", search.query),
        ]

        def save(values):
            if self.guarded(lambda: self.store.update_saved_search(search_id, collect(fields, values))):
                self.notify("Search updated", "The saved search was updated.")

        self.present("Edit saved search", "", [DialogAction(SAVE, save, variant='primary'), DialogAction(CANCEL)], fields)
