"""Core domain logic package.

This package contains pure business logic for the catalog: record models,
search predicates, the entity store and the export document format.
Modules here must not import GUI frameworks (PySide6, Qt, etc.).
"""
