"""
Entity store for the catalog collections.

This module provides the single owner of the six record collections (legal
texts, procedures, news, saved searches, favorites and templates). All
mutations go through the store's operations, which stamp identifiers and
timestamps, validate fields, cascade favorite removal on delete, and notify
change listeners (used for write-through persistence).
"""

import copy
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from .errors import ImportParseError
from .export import COLLECTION_MODELS, build_document, parse_collections, parse_document, serialize_document
from .filters import SearchResults, search_records
from .models import (
    DocumentTemplate,
    Favorite,
    LegalText,
    NewsItem,
    Procedure,
    Record,
    SearchQuery,
    utc_now,
)
from .validation import validate_fields
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)


LEGAL_TEXTS = 'legalTexts'
PROCEDURES = 'procedures'
NEWS = 'news'
SAVED_SEARCHES = 'savedSearches'
FAVORITES = 'favorites'
TEMPLATES = 'templates'

FAVORITE_TYPE_BY_COLLECTION = {
    LEGAL_TEXTS: 'legal-text',
    PROCEDURES: 'procedure',
    NEWS: 'news',
    TEMPLATES: 'template',
}
"""Favorite item type removed by the delete cascade of each collection."""

DEFAULT_USER = 'user-1'

ChangeListener = Callable[[str], None]


class EntityStore:
    """
    Owner of the canonical record collections.

    The store is process-wide shared state: it is created once at startup and
    handed to the components that need it. Records are frozen and every
    accessor returns copies, so callers never hold an alias of stored data.
    """

    def __init__(
        self,
        current_user: str = DEFAULT_USER,
        strict_validation: bool = True,
        clock: Callable[[], datetime] = utc_now,
    ):
        """
        Initialize an empty store.

        Args:
            current_user: Identifier of the user the application runs for.
            strict_validation: If True, invalid fields raise ValidationError;
                otherwise they are logged and dropped.
            clock: Callable returning the current time (injectable for tests).
        """
        self._collections: dict[str, list[Record]] = {key: [] for key in COLLECTION_MODELS}
        self._listeners: list[ChangeListener] = []
        self._current_user = current_user
        self._current_section = 'dashboard'
        self._strict = strict_validation
        self._clock = clock

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def add_listener(self, listener: ChangeListener) -> None:
        """
        Register a callback invoked after every committed mutation.

        Args:
            listener: Callable receiving the name of the changed collection
                (or 'currentUser' / 'currentSection' / 'import').
        """
        self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _changed(self, what: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(what)
            except Exception as e:
                logger.error(f"Store listener failed after change to {what}: {e}", exc_info=True)

    # ------------------------------------------------------------------
    # Session state
    # ------------------------------------------------------------------

    @property
    def current_user(self) -> str:
        return self._current_user

    def set_current_user(self, user: str) -> None:
        self._current_user = user
        self._changed('currentUser')

    @property
    def current_section(self) -> str:
        return self._current_section

    def set_current_section(self, section: str) -> None:
        self._current_section = section
        self._changed('currentSection')

    # ------------------------------------------------------------------
    # Generic collection operations
    # ------------------------------------------------------------------

    def _records(self, key: str) -> list:
        return copy.deepcopy(self._collections[key])

    def _find_index(self, key: str, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._collections[key]):
            if record.id == record_id:
                return index
        return None

    def _get(self, key: str, record_id: str) -> Optional[Any]:
        index = self._find_index(key, record_id)
        return None if index is None else copy.deepcopy(self._collections[key][index])

    def _new_id(self, key: str) -> str:
        existing = {record.id for record in self._collections[key]}
        while True:
            candidate = uuid.uuid4().hex[:9]
            if candidate not in existing:
                return candidate

    def _add(self, key: str, data: Mapping[str, Any], **managed: Any) -> Any:
        model = COLLECTION_MODELS[key]
        values = copy.deepcopy(validate_fields(model, data, partial=False, strict=self._strict))

        now = self._clock()
        stamps = {model.CREATED_FIELD: now}
        if model.MODIFIED_FIELD:
            stamps[model.MODIFIED_FIELD] = now

        record = model(**values, **stamps, **managed, id=self._new_id(key))
        self._collections[key].append(record)
        logger.debug(f"Added {model.__name__} {record.id}")
        self._changed(key)
        return copy.deepcopy(record)

    def _update(self, key: str, record_id: str, partial: Mapping[str, Any]) -> None:
        model = COLLECTION_MODELS[key]
        values = copy.deepcopy(validate_fields(model, partial, partial=True, strict=self._strict))

        index = self._find_index(key, record_id)
        if index is None:
            logger.debug(f"Update ignored, no {model.__name__} with id {record_id}")
            return

        if model.MODIFIED_FIELD:
            values[model.MODIFIED_FIELD] = self._clock()
        self._collections[key][index] = replace(self._collections[key][index], **values)
        logger.debug(f"Updated {model.__name__} {record_id}: {', '.join(sorted(values))}")
        self._changed(key)

    def _replace_managed(self, key: str, index: int, **values: Any) -> Any:
        record = replace(self._collections[key][index], **values)
        self._collections[key][index] = record
        self._changed(key)
        return copy.deepcopy(record)

    def _delete(self, key: str, record_id: str) -> None:
        changed = False

        index = self._find_index(key, record_id)
        if index is not None:
            del self._collections[key][index]
            changed = True

        item_type = FAVORITE_TYPE_BY_COLLECTION.get(key)
        if item_type is not None:
            favorites = self._collections[FAVORITES]
            kept = [fav for fav in favorites if not (fav.item_id == record_id and fav.item_type == item_type)]
            if len(kept) != len(favorites):
                self._collections[FAVORITES] = kept
                changed = True

        if changed:
            logger.debug(f"Deleted {record_id} from {key}")
            self._changed(key)
        else:
            logger.debug(f"Delete ignored, no record {record_id} in {key}")

    # ------------------------------------------------------------------
    # Legal texts
    # ------------------------------------------------------------------

    def legal_texts(self) -> list[LegalText]:
        return self._records(LEGAL_TEXTS)

    def add_legal_text(self, data: Mapping[str, Any]) -> LegalText:
        """
        Add a legal text.

        Args:
            data: Field values (everything except id and timestamps).

        Returns:
            The stored record with its generated id and timestamps.

        Raises:
            ValidationError: If a field is unknown, managed or invalid.
        """
        return self._add(LEGAL_TEXTS, data)

    def update_legal_text(self, text_id: str, updates: Mapping[str, Any]) -> None:
        self._update(LEGAL_TEXTS, text_id, updates)

    def delete_legal_text(self, text_id: str) -> None:
        self._delete(LEGAL_TEXTS, text_id)

    def get_legal_text(self, text_id: str) -> Optional[LegalText]:
        return self._get(LEGAL_TEXTS, text_id)

    def search_legal_texts(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> list[LegalText]:
        """
        Search legal texts by title, content and tags.

        Args:
            query: Case-insensitive substring to look for.
            filters: Field name to required value; falsy values are ignored.

        Returns:
            Matching legal texts.
        """
        return copy.deepcopy(search_records(self._collections[LEGAL_TEXTS], query, filters))

    # ------------------------------------------------------------------
    # Procedures
    # ------------------------------------------------------------------

    def procedures(self) -> list[Procedure]:
        return self._records(PROCEDURES)

    def add_procedure(self, data: Mapping[str, Any]) -> Procedure:
        return self._add(PROCEDURES, data)

    def update_procedure(self, procedure_id: str, updates: Mapping[str, Any]) -> None:
        self._update(PROCEDURES, procedure_id, updates)

    def delete_procedure(self, procedure_id: str) -> None:
        self._delete(PROCEDURES, procedure_id)

    def get_procedure(self, procedure_id: str) -> Optional[Procedure]:
        return self._get(PROCEDURES, procedure_id)

    def search_procedures(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> list[Procedure]:
        """Search procedures by title, description and step text."""
        return copy.deepcopy(search_records(self._collections[PROCEDURES], query, filters))

    # ------------------------------------------------------------------
    # News
    # ------------------------------------------------------------------

    def news(self) -> list[NewsItem]:
        return self._records(NEWS)

    def add_news(self, data: Mapping[str, Any]) -> NewsItem:
        return self._add(NEWS, data, read_by=[])

    def update_news(self, news_id: str, updates: Mapping[str, Any]) -> None:
        self._update(NEWS, news_id, updates)

    def delete_news(self, news_id: str) -> None:
        self._delete(NEWS, news_id)

    def get_news(self, news_id: str) -> Optional[NewsItem]:
        return self._get(NEWS, news_id)

    def search_news(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> list[NewsItem]:
        return copy.deepcopy(search_records(self._collections[NEWS], query, filters))

    def mark_news_as_read(self, news_id: str, user_id: str) -> None:
        """
        Record that a user has read a news item.

        Marking the same user twice is a no-op; unknown ids are ignored.
        """
        index = self._find_index(NEWS, news_id)
        if index is None:
            return
        item = self._collections[NEWS][index]
        if item.is_read_by(user_id):
            return
        self._replace_managed(NEWS, index, read_by=[*item.read_by, user_id])

    def get_unread_news(self, user_id: str) -> list[NewsItem]:
        return [copy.deepcopy(item) for item in self._collections[NEWS] if not item.is_read_by(user_id)]

    # ------------------------------------------------------------------
    # Saved searches
    # ------------------------------------------------------------------

    def saved_searches(self) -> list[SearchQuery]:
        return self._records(SAVED_SEARCHES)

    def save_search(self, data: Mapping[str, Any]) -> SearchQuery:
        """
        Save a named query and filter map.

        The new search starts with a use count of zero; its last-used time is
        its creation time.
        """
        return self._add(SAVED_SEARCHES, data, use_count=0, last_used=self._clock())

    def update_saved_search(self, search_id: str, updates: Mapping[str, Any]) -> None:
        self._update(SAVED_SEARCHES, search_id, updates)

    def delete_saved_search(self, search_id: str) -> None:
        self._delete(SAVED_SEARCHES, search_id)

    def get_saved_search(self, search_id: str) -> Optional[SearchQuery]:
        return self._get(SAVED_SEARCHES, search_id)

    def execute_saved_search(self, search_id: str) -> SearchResults:
        """
        Replay a saved search.

        The search's use count is incremented by one and its last-used time
        set to now before the results are computed. Executing an unknown id
        returns empty results and changes nothing.

        Args:
            search_id: Identifier of the saved search.

        Returns:
            Results of the global search for the saved query and filters.
        """
        index = self._find_index(SAVED_SEARCHES, search_id)
        if index is None:
            logger.debug(f"Saved search {search_id} not found")
            return SearchResults()

        search = self._collections[SAVED_SEARCHES][index]
        search = self._replace_managed(
            SAVED_SEARCHES, index,
            use_count=search.use_count + 1,
            last_used=self._clock(),
        )
        return self.global_search(search.query, search.filters)

    # ------------------------------------------------------------------
    # Favorites
    # ------------------------------------------------------------------

    def add_to_favorites(self, item_id: str, item_type: str, title: str) -> Favorite:
        """
        Bookmark an item.

        At most one favorite exists per (item_id, item_type): adding an item
        that is already a favorite returns the existing entry unchanged.

        Raises:
            ValidationError: If item_type is not a favorite item type.
        """
        for favorite in self._collections[FAVORITES]:
            if favorite.item_id == item_id and favorite.item_type == item_type:
                logger.debug(f"{item_type} {item_id} is already a favorite")
                return copy.deepcopy(favorite)
        return self._add(FAVORITES, {'item_id': item_id, 'item_type': item_type, 'title': title})

    def remove_from_favorites(self, item_id: str, item_type: str) -> None:
        favorites = self._collections[FAVORITES]
        kept = [fav for fav in favorites if not (fav.item_id == item_id and fav.item_type == item_type)]
        if len(kept) != len(favorites):
            self._collections[FAVORITES] = kept
            self._changed(FAVORITES)

    def get_favorites(self, item_type: Optional[str] = None) -> list[Favorite]:
        """
        List favorites, optionally restricted to one item type.
        """
        if not item_type:
            return self._records(FAVORITES)
        return [copy.deepcopy(fav) for fav in self._collections[FAVORITES] if fav.item_type == item_type]

    def is_favorite(self, item_id: str, item_type: str) -> bool:
        return any(
            fav.item_id == item_id and fav.item_type == item_type
            for fav in self._collections[FAVORITES]
        )

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def templates(self) -> list[DocumentTemplate]:
        return self._records(TEMPLATES)

    def add_template(self, data: Mapping[str, Any]) -> DocumentTemplate:
        return self._add(TEMPLATES, data, usage_count=0)

    def update_template(self, template_id: str, updates: Mapping[str, Any]) -> None:
        self._update(TEMPLATES, template_id, updates)

    def delete_template(self, template_id: str) -> None:
        self._delete(TEMPLATES, template_id)

    def get_template(self, template_id: str) -> Optional[DocumentTemplate]:
        return self._get(TEMPLATES, template_id)

    def search_templates(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> list[DocumentTemplate]:
        return copy.deepcopy(search_records(self._collections[TEMPLATES], query, filters))

    def use_template(self, template_id: str) -> Optional[DocumentTemplate]:
        """
        Mark a template as used.

        Returns:
            The template with its usage count incremented, or None if the
            id is unknown.
        """
        index = self._find_index(TEMPLATES, template_id)
        if index is None:
            return None
        template = self._collections[TEMPLATES][index]
        return self._replace_managed(TEMPLATES, index, usage_count=template.usage_count + 1)

    def get_templates_by_category(self, category: str) -> list[DocumentTemplate]:
        return [copy.deepcopy(t) for t in self._collections[TEMPLATES] if t.category == category]

    # ------------------------------------------------------------------
    # Cross-collection search
    # ------------------------------------------------------------------

    def global_search(self, query: str, filters: Optional[Mapping[str, Any]] = None) -> SearchResults:
        """
        Run the same search over the four searchable collections.

        Saved searches and favorites are not searched.

        Args:
            query: Case-insensitive substring to look for.
            filters: Field filters applied to every collection; a record
                lacking a filtered field does not match.

        Returns:
            SearchResults with one list per collection.
        """
        return SearchResults(
            legal_texts=self.search_legal_texts(query, filters),
            procedures=self.search_procedures(query, filters),
            news=self.search_news(query, filters),
            templates=self.search_templates(query, filters),
        )

    # ------------------------------------------------------------------
    # Import / export / snapshot
    # ------------------------------------------------------------------

    def export_data(self) -> str:
        """
        Export the six content collections.

        Returns:
            Pretty-printed JSON document (without the current user).
        """
        return serialize_document(build_document(self._collections))

    def load_document(self, text: str) -> None:
        """
        Import a document, replacing the collections it contains.

        Collections absent from the document are kept. Parsing completes
        before anything is replaced, so a failure leaves the store untouched.

        Raises:
            ImportParseError: If the document is malformed.
        """
        self._apply_collections(parse_document(text))
        logger.info("Data imported")
        self._changed('import')

    def import_data(self, text: str) -> bool:
        """
        Import a document, reporting failure instead of raising.

        Returns:
            True if the document was imported, False if it was rejected.
        """
        try:
            self.load_document(text)
        except ImportParseError as e:
            logger.error(f"Failed to import data: {e}")
            return False
        return True

    def snapshot(self) -> dict:
        """
        Build the persisted snapshot: the six collections plus current user.
        """
        state = build_document(self._collections)
        state['currentUser'] = self._current_user
        return state

    def restore(self, state: Mapping[str, Any]) -> None:
        """
        Restore a persisted snapshot without notifying listeners.

        Raises:
            ImportParseError: If the snapshot is malformed.
        """
        collections = parse_collections(state)
        self._apply_collections(collections)
        if isinstance(state.get('currentUser'), str):
            self._current_user = state['currentUser']

    def _apply_collections(self, collections: Mapping[str, list[Record]]) -> None:
        for key, records in collections.items():
            self._collections[key] = list(records)
