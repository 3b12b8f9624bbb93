"""
Core domain models for the legal documentation catalog.

This module contains pure data models for the six record collections held by
the entity store. These models are GUI-agnostic and should not import any UI
frameworks.

Python attribute names are snake_case; the serialized form used for snapshots
and export documents is camelCase (``dateCreated``, ``readBy``, ...), which is
the format the catalog has always been stored in.
"""

import re
import typing
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional


LEGAL_TEXT_TYPES = ('law', 'decree', 'regulation', 'circular')
LEGAL_TEXT_STATUSES = ('draft', 'published', 'archived')
PROCEDURE_DIFFICULTIES = ('easy', 'medium', 'hard')
PROCEDURE_STATUSES = ('active', 'inactive', 'under_review')
FAVORITE_ITEM_TYPES = ('legal-text', 'procedure', 'news', 'template')

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """
    Serialize a timestamp to ISO 8601 with a trailing 'Z' for UTC.

    Args:
        value: Datetime to serialize, or None.

    Returns:
        ISO string, or None if value is None.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a serialized timestamp.

    Accepts datetimes, ISO 8601 strings (with or without a trailing 'Z') and
    None. Naive values are assumed to be UTC.

    Raises:
        ValueError: If the value cannot be interpreted as a timestamp.
    """
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    else:
        raise ValueError(f"Not a timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def to_camel_case(name: str) -> str:
    """Convert a snake_case attribute name to its camelCase document key."""
    head, *rest = name.split('_')
    return head + ''.join(part.capitalize() for part in rest)


def to_snake_case(name: str) -> str:
    """Convert a camelCase document key to its snake_case attribute name."""
    return _CAMEL_BOUNDARY.sub('_', name).lower()


class Record:
    """
    Mixin shared by every stored model.

    Subclasses are dataclasses; class attributes describe which fields the
    store manages itself and how records are serialized.
    """

    CREATED_FIELD = 'date_created'
    """Attribute stamped once when the store adds the record."""

    MODIFIED_FIELD: Optional[str] = 'date_modified'
    """Attribute refreshed on every update (None if the record is never updated)."""

    COUNTER_FIELDS: tuple = ()
    """Counters that only dedicated store operations may change."""

    EXTRA_MANAGED_FIELDS: tuple = ()
    """Other attributes written only by dedicated store operations."""

    NESTED: dict = {}
    """Mapping of attribute name to nested model class (single or list)."""

    CHOICES: dict = {}
    """Mapping of attribute name to its allowed values."""

    @classmethod
    def field_names(cls) -> list[str]:
        """Get the attribute names of this model in declaration order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def managed_fields(cls) -> set[str]:
        """Get the attributes that partial updates are not allowed to write."""
        managed = {'id', cls.CREATED_FIELD}
        if cls.MODIFIED_FIELD:
            managed.add(cls.MODIFIED_FIELD)
        managed.update(cls.COUNTER_FIELDS)
        managed.update(cls.EXTRA_MANAGED_FIELDS)
        return managed

    @classmethod
    def field_types(cls) -> dict[str, Any]:
        """Get the resolved type hints of the dataclass fields."""
        hints = typing.get_type_hints(cls)
        return {name: hints[name] for name in cls.field_names()}

    @classmethod
    def normalize_keys(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Map camelCase document keys onto attribute names.

        Keys that are already attribute names are kept as-is; unknown keys are
        kept unchanged so that validation can report them.
        """
        known = set(cls.field_names())
        normalized = {}
        for key, value in data.items():
            if key in known:
                normalized[key] = value
            else:
                snake = to_snake_case(key)
                normalized[snake if snake in known else key] = value
        return normalized

    def to_dict(self) -> dict:
        """
        Serialize the record to a camelCase dictionary for JSON storage.

        Returns:
            Dictionary representation of the record.
        """
        return {to_camel_case(f.name): _serialize_value(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """
        Deserialize a record from a dictionary.

        Missing fields take their defaults, unknown keys are ignored.

        Args:
            data: Dictionary representation of the record.

        Returns:
            Record instance.

        Raises:
            ValueError: If a timestamp or nested record cannot be parsed.
            TypeError: If data is not a mapping.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"{cls.__name__} entry must be an object, got {type(data).__name__}")
        values = cls.normalize_keys(data)
        types = cls.field_types()
        kwargs = {}
        for name in cls.field_names():
            if name not in values:
                continue
            kwargs[name] = _deserialize_value(cls, name, types[name], values[name])
        return cls(**kwargs)


def _serialize_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return format_timestamp(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {to_camel_case(f.name): _serialize_value(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, list):
        return [_serialize_value(item) for item in value]
    if isinstance(value, dict):
        return {key: _serialize_value(item) for key, item in value.items()}
    return value


def _deserialize_value(owner: type, name: str, hint: Any, value: Any) -> Any:
    nested = owner.NESTED.get(name) if issubclass(owner, Record) else None
    if nested is not None:
        if value is None:
            return [] if typing.get_origin(hint) is list else nested()
        if isinstance(value, list):
            return [item if isinstance(item, nested) else nested.from_dict(item) for item in value]
        return value if isinstance(value, nested) else nested.from_dict(value)
    if datetime in _hint_members(hint):
        return parse_timestamp(value)
    return value


def _hint_members(hint: Any) -> tuple:
    """Flatten Optional[...] / Union[...] hints into their member types."""
    args = typing.get_args(hint)
    if typing.get_origin(hint) is typing.Union:
        return args
    return (hint,)


@dataclass(frozen=True)
class LegalTextMetadata:
    """Bibliographic metadata attached to a legal text."""

    source: Optional[str] = None
    """Official source (e.g., the journal the text was published in)."""

    references: list[str] = field(default_factory=list)
    """References to related or amending texts."""

    validity: Optional[str] = None
    """Validity statement (e.g., 'En vigueur')."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'LegalTextMetadata':
        if not isinstance(data, Mapping):
            raise TypeError("metadata must be an object")
        return cls(
            source=data.get('source'),
            references=list(data.get('references') or []),
            validity=data.get('validity'),
        )


@dataclass(frozen=True)
class LegalText(Record):
    """A law, decree, regulation or circular."""

    id: str = ''
    title: str = ''
    content: str = ''
    """Rich (HTML) content of the text."""

    type: str = 'law'
    """One of LEGAL_TEXT_TYPES."""

    status: str = 'draft'
    """One of LEGAL_TEXT_STATUSES."""

    category: str = ''
    author: str = ''
    tags: list[str] = field(default_factory=list)
    metadata: LegalTextMetadata = field(default_factory=LegalTextMetadata)
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None

    NESTED = {'metadata': LegalTextMetadata}
    CHOICES = {'type': LEGAL_TEXT_TYPES, 'status': LEGAL_TEXT_STATUSES}

    def search_texts(self) -> list[str]:
        """Get the text fields matched by free-text search."""
        return [self.title, self.content, *self.tags]


@dataclass(frozen=True)
class ProcedureStep:
    """A single step of an administrative procedure."""

    id: str = ''
    title: str = ''
    description: str = ''
    order: int = 0
    """Position of the step within the procedure (1-based)."""

    is_required: bool = True
    documents: Optional[list[str]] = None
    """Documents needed for this step, if any."""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ProcedureStep':
        if not isinstance(data, Mapping):
            raise TypeError("procedure step must be an object")
        documents = data.get('documents')
        return cls(
            id=str(data.get('id', '')),
            title=data.get('title', ''),
            description=data.get('description', ''),
            order=data.get('order', 0),
            is_required=data.get('isRequired', data.get('is_required', True)),
            documents=list(documents) if documents is not None else None,
        )


@dataclass(frozen=True)
class Procedure(Record):
    """An administrative procedure made of ordered steps."""

    id: str = ''
    title: str = ''
    description: str = ''
    steps: list[ProcedureStep] = field(default_factory=list)
    category: str = ''
    difficulty: str = 'medium'
    """One of PROCEDURE_DIFFICULTIES."""

    estimated_time: str = ''
    """Free-form duration (e.g., '3-4 semaines')."""

    required_documents: list[str] = field(default_factory=list)
    status: str = 'active'
    """One of PROCEDURE_STATUSES."""

    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None

    NESTED = {'steps': ProcedureStep}
    CHOICES = {'difficulty': PROCEDURE_DIFFICULTIES, 'status': PROCEDURE_STATUSES}

    def ordered_steps(self) -> list[ProcedureStep]:
        """Get the steps sorted by their order attribute."""
        return sorted(self.steps, key=lambda step: step.order)

    def search_texts(self) -> list[str]:
        """Get the text fields matched by free-text search (steps included)."""
        texts = [self.title, self.description]
        for step in self.steps:
            texts.extend([step.title, step.description])
        return texts


@dataclass(frozen=True)
class NewsItem(Record):
    """A news item; readBy holds the users who have read it."""

    id: str = ''
    title: str = ''
    content: str = ''
    category: str = ''
    author: str = ''
    tags: list[str] = field(default_factory=list)
    is_important: bool = False
    read_by: list[str] = field(default_factory=list)
    """User identifiers, without duplicates."""

    date_published: Optional[datetime] = None
    date_modified: Optional[datetime] = None

    CREATED_FIELD = 'date_published'
    EXTRA_MANAGED_FIELDS = ('read_by',)

    def is_read_by(self, user_id: str) -> bool:
        return user_id in self.read_by

    def search_texts(self) -> list[str]:
        return [self.title, self.content, *self.tags]


@dataclass(frozen=True)
class SearchQuery(Record):
    """A saved search: a named query string and filter map."""

    id: str = ''
    name: str = ''
    query: str = ''
    filters: dict[str, Any] = field(default_factory=dict)
    use_count: int = 0
    """Number of executions; never decreases."""

    last_used: Optional[datetime] = None
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None

    COUNTER_FIELDS = ('use_count',)
    EXTRA_MANAGED_FIELDS = ('last_used',)

    @property
    def title(self) -> str:
        return self.name


@dataclass(frozen=True)
class Favorite(Record):
    """A bookmark keyed by the pair (item_id, item_type)."""

    id: str = ''
    item_id: str = ''
    item_type: str = 'legal-text'
    """One of FAVORITE_ITEM_TYPES."""

    title: str = ''
    """Display title copied from the bookmarked item."""

    date_added: Optional[datetime] = None

    CREATED_FIELD = 'date_added'
    MODIFIED_FIELD = None
    CHOICES = {'item_type': FAVORITE_ITEM_TYPES}

    @property
    def key(self) -> tuple[str, str]:
        return (self.item_id, self.item_type)


@dataclass(frozen=True)
class DocumentTemplate(Record):
    """A document template with {{variable}} placeholders."""

    id: str = ''
    name: str = ''
    content: str = ''
    category: str = ''
    variables: list[str] = field(default_factory=list)
    is_public: bool = False
    created_by: str = ''
    usage_count: int = 0
    """Number of times the template was used; never decreases."""

    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None

    COUNTER_FIELDS = ('usage_count',)

    @property
    def title(self) -> str:
        """Display title (templates are named rather than titled)."""
        return self.name

    def search_texts(self) -> list[str]:
        return [self.name, self.content]
