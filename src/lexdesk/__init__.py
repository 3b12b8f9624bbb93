"""
LEXDESK - A legal documentation desk application.

This package provides a local catalog of legal texts, administrative
procedures, news items and document templates, with saved searches,
favorites, and a command bus that connects UI triggers to workflows.
"""

__version__ = "0.1.0"
