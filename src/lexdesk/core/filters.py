"""
Search predicates for catalog records.

This module contains filter condition classes and functions for matching
records against a free-text query and a map of exact field filters, plus
the result container returned by cross-collection searches.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator, Mapping, Optional

from .models import DocumentTemplate, LegalText, NewsItem, Procedure, to_snake_case


@dataclass
class FilterCondition:
    """
    Base class for all filter conditions.

    Each filter condition must implement an evaluate() method that determines
    whether a record matches the condition.
    """

    def evaluate(self, record: Any) -> bool:
        """
        Evaluate whether a record matches this condition.

        Args:
            record: The record to evaluate.

        Returns:
            True if the record matches the condition, False otherwise.
        """
        raise NotImplementedError("Subclasses must implement evaluate()")


@dataclass
class TextQueryCondition(FilterCondition):
    """Case-insensitive substring match over a record's searchable text."""

    query: str = ''
    """Text to look for. An empty query matches every record."""

    def evaluate(self, record: Any) -> bool:
        """Check if any searchable text of the record contains the query."""
        if not self.query:
            return True
        needle = self.query.casefold()
        return any(needle in str(text or '').casefold() for text in record.search_texts())


@dataclass
class FieldEqualsFilter(FilterCondition):
    """Exact equality on a single record attribute."""

    field_name: str = ''
    """Attribute to compare (snake_case or camelCase)."""

    value: Any = None
    """Expected value. Falsy values impose no constraint."""

    def evaluate(self, record: Any) -> bool:
        """Check if the record attribute equals the expected value."""
        if not self.value:
            return True

        name = self.field_name
        if not hasattr(record, name):
            name = to_snake_case(name)
        if not hasattr(record, name):
            return False

        return getattr(record, name) == self.value


def build_conditions(query: str, filters: Optional[Mapping[str, Any]] = None) -> list[FilterCondition]:
    """
    Build the condition list for a query and a filter map.

    Args:
        query: Free-text query.
        filters: Mapping of field name to required value.

    Returns:
        List of conditions; a record matches when all of them evaluate True.
    """
    conditions: list[FilterCondition] = [TextQueryCondition(query=query or '')]
    for key, value in (filters or {}).items():
        conditions.append(FieldEqualsFilter(field_name=key, value=value))
    return conditions


def search_records(records: Iterable[Any], query: str, filters: Optional[Mapping[str, Any]] = None) -> list:
    """
    Filter records by free-text query and exact field filters.

    Args:
        records: Records to search.
        query: Free-text query (title, content/description, tags).
        filters: Mapping of field name to required value.

    Returns:
        Matching records, in their original order.
    """
    conditions = build_conditions(query, filters)
    return [record for record in records if all(c.evaluate(record) for c in conditions)]


@dataclass
class SearchResults:
    """
    Results of a search fanned out over the four searchable collections.

    Behaves as a sequence of all matched records (legal texts first, then
    procedures, news and templates).
    """

    legal_texts: list[LegalText] = field(default_factory=list)
    procedures: list[Procedure] = field(default_factory=list)
    news: list[NewsItem] = field(default_factory=list)
    templates: list[DocumentTemplate] = field(default_factory=list)

    def all(self) -> list:
        return [*self.legal_texts, *self.procedures, *self.news, *self.templates]

    @property
    def total(self) -> int:
        return len(self.legal_texts) + len(self.procedures) + len(self.news) + len(self.templates)

    def by_collection(self) -> dict[str, list]:
        """Get the results keyed by their item type."""
        return {
            'legal-text': self.legal_texts,
            'procedure': self.procedures,
            'news': self.news,
            'template': self.templates,
        }

    def __len__(self) -> int:
        return self.total

    def __iter__(self) -> Iterator:
        return iter(self.all())
