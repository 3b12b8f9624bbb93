"""Text helpers for dialog bodies and generated files."""

import html
import re
from datetime import datetime
from typing import Iterable, Optional

from ..core.models import utc_now


_TAG_PATTERN = re.compile(r'<[^>]+>')
_BLANK_LINES = re.compile(r'\n\s*\n+')


def plain_text(content: Optional[str]) -> str:
    """Strip HTML markup and collapse runs of blank lines."""
    text = html.unescape(_TAG_PATTERN.sub('', content or ''))
    lines = [line.strip() for line in text.splitlines()]
    return _BLANK_LINES.sub('\n\n', '\n'.join(lines)).strip()


def excerpt(content: Optional[str], length: int = 100) -> str:
    text = ' '.join(plain_text(content).split())
    if len(text) <= length:
        return text
    return text[:length].rstrip() + '...'


def format_date(value: Optional[datetime] = None) -> str:
    """Format a date for display (day/month/year)."""
    return (value or utc_now()).strftime('%d/%m/%Y')


def bullet_list(items: Iterable[str], empty: str) -> str:
    lines = [f"- {item}" for item in items]
    return '\n'.join(lines) if lines else f"- {empty}"


def properties(pairs: Iterable[tuple[str, Optional[str]]]) -> str:
    """Render label/value pairs as a Markdown list, skipping empty values."""
    return '\n'.join(f"- **{label}:** {value}" for label, value in pairs if value)
