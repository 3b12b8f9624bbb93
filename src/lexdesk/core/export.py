"""
Export and import document format.

The export document is a pretty-printed JSON object holding the six content
collections, each a list of camelCase record dictionaries:

    {
      "legalTexts": [...], "procedures": [...], "news": [...],
      "savedSearches": [...], "favorites": [...], "templates": [...]
    }

The same shape is accepted on import. Parsing is all-or-nothing: the caller
receives either every collection present in the document or an
ImportParseError, never a partial result.
"""

import json
from typing import Any, Mapping

from .errors import ImportParseError
from .models import (
    DocumentTemplate,
    Favorite,
    LegalText,
    NewsItem,
    Procedure,
    Record,
    SearchQuery,
)


COLLECTION_MODELS: dict[str, type[Record]] = {
    'legalTexts': LegalText,
    'procedures': Procedure,
    'news': NewsItem,
    'savedSearches': SearchQuery,
    'favorites': Favorite,
    'templates': DocumentTemplate,
}
"""Document key of each content collection and the model it holds."""


def build_document(collections: Mapping[str, list[Record]]) -> dict[str, list[dict]]:
    """
    Build the export document from the store collections.

    Args:
        collections: Mapping of document key to list of records.

    Returns:
        Dictionary with exactly the six content collections.
    """
    return {
        key: [record.to_dict() for record in collections.get(key, [])]
        for key in COLLECTION_MODELS
    }


def serialize_document(document: Mapping[str, Any]) -> str:
    """Serialize a document to pretty-printed JSON."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def parse_document(text: str) -> dict[str, list[Record]]:
    """
    Parse an import document.

    Args:
        text: JSON text of the document.

    Returns:
        Mapping of document key to list of parsed records.

    Raises:
        ImportParseError: If the text is not valid JSON or parse_collections()
            rejects its content.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise ImportParseError(f"Invalid JSON: {e}") from e

    return parse_collections(data)


def parse_collections(data: Any) -> dict[str, list[Record]]:
    """
    Parse the content collections of an already-decoded document.

    Only the collections present in the document are returned; keys other
    than the six content collections are ignored.

    Raises:
        ImportParseError: If data is not an object, holds a collection that
            is not a list, contains a record that cannot be parsed, or
            repeats an identifier within a collection or a favorite item.
    """
    if not isinstance(data, dict):
        raise ImportParseError(f"Import document must be an object, got {type(data).__name__}")

    parsed: dict[str, list[Record]] = {}
    for key, model in COLLECTION_MODELS.items():
        if key not in data:
            continue

        entries = data[key]
        if not isinstance(entries, list):
            raise ImportParseError(f"Collection '{key}' must be a list")

        records = []
        seen_ids = set()
        seen_favorites = set()
        for index, entry in enumerate(entries):
            try:
                record = model.from_dict(entry)
            except (TypeError, ValueError) as e:
                raise ImportParseError(f"Invalid entry {key}[{index}]: {e}") from e

            if record.id in seen_ids:
                raise ImportParseError(f"Duplicate id in '{key}': {record.id}")
            if isinstance(record, Favorite):
                if record.key in seen_favorites:
                    raise ImportParseError(f"Duplicate favorite in '{key}': {record.item_type} {record.item_id}")
                seen_favorites.add(record.key)
            seen_ids.add(record.id)
            records.append(record)

        parsed[key] = records

    return parsed
