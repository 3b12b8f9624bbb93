"""
Field validation at the entity store boundary.

Every add and partial update goes through validate_fields(), which checks
field names, value shapes and enumerated values before the store touches its
collections. Content is not judged: empty or duplicate titles are accepted.
"""

import typing
from datetime import datetime
from typing import Any, Mapping

from .errors import ValidationError
from .models import Record
from ..infrastructure.logging_config import get_logger


logger = get_logger(__name__)


def validate_fields(model: type[Record], data: Mapping[str, Any], partial: bool, strict: bool = True) -> dict[str, Any]:
    """
    Validate and coerce record fields for an add or a partial update.

    Args:
        model: Record class the fields belong to.
        data: Field values, keyed by attribute name or camelCase document key.
        partial: True for updates (only supplied fields are checked).
        strict: If False, problems are logged and offending fields dropped
            instead of raising.

    Returns:
        Dictionary of attribute name to coerced value.

    Raises:
        ValidationError: On the first problem found, when strict is True.
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"{model.__name__} data must be a mapping, got {type(data).__name__}")

    values = model.normalize_keys(data)
    known = set(model.field_names())
    managed = model.managed_fields()
    types = model.field_types()
    cleaned = {}

    for name, value in values.items():
        try:
            if name not in known:
                raise ValidationError(f"Unknown field for {model.__name__}: {name}", field=name)
            if name in managed:
                raise ValidationError(f"Field '{name}' is managed by the store and cannot be written", field=name)
            cleaned[name] = _check_value(model, name, types[name], value)
        except ValidationError as e:
            if strict:
                raise
            logger.warning(f"Ignoring invalid field on {model.__name__} ({'update' if partial else 'add'}): {e}")

    return cleaned


def _check_value(model: type[Record], name: str, hint: Any, value: Any) -> Any:
    nested = model.NESTED.get(name)
    if nested is not None:
        return _coerce_nested(name, hint, nested, value)

    choices = model.CHOICES.get(name)
    if choices is not None and value not in choices:
        raise ValidationError(
            f"Invalid value for '{name}': {value!r} (expected one of {', '.join(choices)})",
            field=name,
        )

    _check_shape(name, hint, value)
    return value


def _coerce_nested(name: str, hint: Any, nested: type, value: Any) -> Any:
    try:
        if typing.get_origin(hint) is list:
            if not isinstance(value, list):
                raise ValidationError(f"Field '{name}' must be a list", field=name)
            return [item if isinstance(item, nested) else nested.from_dict(item) for item in value]
        return value if isinstance(value, nested) else nested.from_dict(value)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid value for '{name}': {e}", field=name) from e


def _check_shape(name: str, hint: Any, value: Any) -> None:
    origin = typing.get_origin(hint)
    args = typing.get_args(hint)

    if origin is typing.Union:
        if value is None and type(None) in args:
            return
        members = [arg for arg in args if arg is not type(None)]
        _check_shape(name, members[0], value)
        return

    if hint is bool:
        if not isinstance(value, bool):
            raise ValidationError(f"Field '{name}' must be a boolean", field=name)
    elif hint is int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValidationError(f"Field '{name}' must be a non-negative integer", field=name)
    elif hint is str:
        if not isinstance(value, str):
            raise ValidationError(f"Field '{name}' must be a string", field=name)
    elif hint is datetime:
        if not isinstance(value, datetime):
            raise ValidationError(f"Field '{name}' must be a datetime", field=name)
    elif origin is list:
        if not isinstance(value, list):
            raise ValidationError(f"Field '{name}' must be a list", field=name)
        if args and args[0] is str and not all(isinstance(item, str) for item in value):
            raise ValidationError(f"Field '{name}' must be a list of strings", field=name)
    elif origin is dict:
        if not isinstance(value, dict):
            raise ValidationError(f"Field '{name}' must be an object", field=name)
