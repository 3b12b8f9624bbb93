"""
Conversion between records and form dialog values.

Form dialogs capture plain strings and booleans. These helpers turn the
captured values into store data (lists split on commas, procedure steps
parsed from one line per step) and records back into initial values.
"""

from typing import Any, Iterable, Optional

from ..core.models import ProcedureStep
from ..infrastructure.logging_config import get_logger
from ..ui.presenter import FormField


logger = get_logger(__name__)

STEP_SEPARATOR = "|"
OPTIONAL_MARKER = "optional"


def split_list(value: Any) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty items."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    else:
        items = str(value).split(',')
    return [str(item).strip() for item in items if str(item).strip()]


def join_list(values: Optional[Iterable[str]]) -> str:
    return ", ".join(values or [])


def to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def initial_record(model: type, data: Any):
    """
    Build the record whose values pre-fill a creation form.

    Args:
        model: Record class.
        data: Optional initial values from the command payload.

    Returns:
        A record with the given values and defaults for the rest; defaults
        only if the data cannot be read.
    """
    if not data:
        return model()
    try:
        return model.from_dict(data)
    except (TypeError, ValueError) as e:
        logger.warning(f"Ignoring unreadable initial {model.__name__} data: {e}")
        return model()


def collect(fields: list[FormField], values: dict) -> dict:
    """
    Convert submitted form values according to their field kinds.

    Args:
        fields: Fields of the form.
        values: Submitted values keyed by field name.

    Returns:
        Dictionary of field name to converted value.
    """
    data = {}
    for form_field in fields:
        value = values.get(form_field.name, form_field.value)
        if form_field.kind == 'list':
            data[form_field.name] = split_list(value)
        elif form_field.kind == 'bool':
            data[form_field.name] = to_bool(value)
        else:
            data[form_field.name] = '' if value is None else str(value)
    return data


def format_steps(steps: Iterable[ProcedureStep]) -> str:
    """Render steps as one 'title | description' line each."""
    lines = []
    for step in sorted(steps, key=lambda s: s.order):
        line = f"{step.title} {STEP_SEPARATOR} {step.description}"
        if not step.is_required:
            line += f" {STEP_SEPARATOR} {OPTIONAL_MARKER}"
        lines.append(line)
    return "\n".join(lines)


def parse_steps(text: str) -> list[dict]:
    """
    Parse step lines into step dictionaries.

    Each non-empty line is 'title | description', optionally followed by
    '| optional'. Steps are numbered in line order, starting at 1.

    Args:
        text: Multiline step text.

    Returns:
        List of step dictionaries ready for the store.
    """
    steps = []
    for line in (text or "").splitlines():
        if not line.strip():
            continue
        parts = [part.strip() for part in line.split(STEP_SEPARATOR)]
        order = len(steps) + 1
        steps.append({
            'id': str(order),
            'title': parts[0],
            'description': parts[1] if len(parts) > 1 else '',
            'order': order,
            'isRequired': not (len(parts) > 2 and parts[2].lower() == OPTIONAL_MARKER),
        })
    return steps
