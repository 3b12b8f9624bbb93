"""
Catalog sections shown by the main window.

Each section knows how to list its records and which command (with which
payload) opens, creates, edits or deletes one of them. The main window only
dispatches what these descriptions return, so every user action goes through
the command bus.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from ..commands import names
from ..core.store import EntityStore


Command = tuple[str, dict]
RecordCommand = Callable[[Any], Optional[Command]]


@dataclass
class Section:
    """Description of one catalog section."""

    key: str
    """Section name carried by navigate-to-section."""

    label: str
    records: Callable[[EntityStore], list]
    describe: Callable[[Any], str]
    """Second column text for a record."""

    open: RecordCommand
    edit: Optional[RecordCommand] = None
    delete: Optional[RecordCommand] = None
    favorite: Optional[RecordCommand] = None
    add_command: Optional[str] = None
    search_type: Optional[str] = None
    """searchType of immersive-search when searching from this section."""


def _favorite(item_type: str) -> RecordCommand:
    return lambda record: (names.ADD_TO_FAVORITES,
                           {'itemType': item_type, 'itemId': record.id, 'itemName': record.title})


FAVORITE_OPENERS = {
    'legal-text': lambda fav: (names.VIEW_LEGAL_TEXT, {'textId': fav.item_id, 'title': fav.title}),
    'procedure': lambda fav: (names.VIEW_PROCEDURE, {'procedureId': fav.item_id, 'title': fav.title}),
    'news': lambda fav: (names.READ_NEWS, {'newsId': fav.item_id, 'newsTitle': fav.title}),
    'template': lambda fav: (names.USE_TEMPLATE, {'templateId': fav.item_id}),
}


def open_favorite(favorite) -> Optional[Command]:
    opener = FAVORITE_OPENERS.get(favorite.item_type)
    return opener(favorite) if opener else None


SECTIONS = [
    Section(
        key='legal-texts',
        label="Legal texts",
        records=lambda store: store.legal_texts(),
        describe=lambda text: f"{text.type} · {text.status}",
        open=lambda text: (names.VIEW_LEGAL_TEXT, {'textId': text.id, 'title': text.title}),
        edit=lambda text: (names.EDIT_LEGAL_TEXT, {'textId': text.id}),
        delete=lambda text: (names.DELETE_LEGAL_TEXT, {'textId': text.id}),
        favorite=_favorite('legal-text'),
        add_command=names.ADD_LEGAL_TEXT,
        search_type='legal-text',
    ),
    Section(
        key='procedures',
        label="Procedures",
        records=lambda store: store.procedures(),
        describe=lambda procedure: f"{procedure.difficulty} · {len(procedure.steps)} step(s)",
        open=lambda procedure: (names.VIEW_PROCEDURE, {'procedureId': procedure.id, 'title': procedure.title}),
        edit=lambda procedure: (names.EDIT_PROCEDURE, {'procedureId': procedure.id}),
        delete=lambda procedure: (names.DELETE_PROCEDURE, {'procedureId': procedure.id}),
        favorite=_favorite('procedure'),
        add_command=names.ADD_PROCEDURE,
        search_type='procedure',
    ),
    Section(
        key='news',
        label="News",
        records=lambda store: store.news(),
        describe=lambda item: ("important · " if item.is_important else "") + item.category,
        open=lambda item: (names.READ_NEWS, {'newsId': item.id, 'newsTitle': item.title}),
        edit=lambda item: (names.EDIT_NEWS, {'newsId': item.id}),
        delete=lambda item: (names.DELETE_NEWS, {'newsId': item.id}),
        favorite=_favorite('news'),
        add_command=names.ADD_NEWS,
        search_type='news',
    ),
    Section(
        key='templates',
        label="Templates",
        records=lambda store: store.templates(),
        describe=lambda template: f"{template.category} · used {template.usage_count} time(s)",
        open=lambda template: (names.USE_TEMPLATE, {'templateId': template.id}),
        edit=lambda template: (names.EDIT_TEMPLATE, {'templateId': template.id}),
        delete=lambda template: (names.DELETE_TEMPLATE, {'templateId': template.id}),
        favorite=_favorite('template'),
        add_command=names.CREATE_TEMPLATE,
        search_type='template',
    ),
    Section(
        key='saved-searches',
        label="Saved searches",
        records=lambda store: store.saved_searches(),
        describe=lambda search: f"\"{search.query}\" · used {search.use_count} time(s)",
        open=lambda search: (names.EXECUTE_SAVED_SEARCH, {'searchId': search.id}),
        edit=lambda search: (names.EDIT_SAVED_SEARCH, {'searchId': search.id}),
        delete=lambda search: (names.DELETE_SAVED_SEARCH, {'searchId': search.id}),
    ),
    Section(
        key='favorites',
        label="Favorites",
        records=lambda store: store.get_favorites(),
        describe=lambda favorite: favorite.item_type,
        open=open_favorite,
        delete=lambda favorite: (names.REMOVE_FROM_FAVORITES,
                                 {'itemId': favorite.item_id, 'itemType': favorite.item_type}),
    ),
]


def get_section(key: str) -> Optional[Section]:
    for section in SECTIONS:
        if section.key == key:
            return section
    return None
