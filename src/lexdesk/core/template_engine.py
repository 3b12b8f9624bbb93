"""
Placeholder handling for document templates.

Templates mark variables as {{name}}; whitespace inside the braces is
tolerated.
"""

import re
from typing import Mapping


PLACEHOLDER_PATTERN = re.compile(r'\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}')


def extract_variables(content: str) -> list[str]:
    """
    List the placeholder names used in a template.

    Args:
        content: Template content.

    Returns:
        Variable names in order of first appearance, without duplicates.
    """
    names = []
    for match in PLACEHOLDER_PATTERN.finditer(content or ''):
        if match.group(1) not in names:
            names.append(match.group(1))
    return names


def render_template(content: str, values: Mapping[str, str]) -> str:
    """
    Replace placeholders with their values.

    Placeholders without a value are left in place so that the generated
    document shows what is still missing.

    Args:
        content: Template content.
        values: Mapping of variable name to replacement text.

    Returns:
        Rendered content.
    """
    def substitute(match: re.Match) -> str:
        value = values.get(match.group(1))
        if value is None or value == '':
            return match.group(0)
        return str(value)

    return PLACEHOLDER_PATTERN.sub(substitute, content or '')
