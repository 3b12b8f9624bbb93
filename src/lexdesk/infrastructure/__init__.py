"""
Infrastructure layer package.

This package contains modules for interacting with the outside world:
- Persistent data directory and file paths
- Logging configuration
- Snapshot storage of the entity store

Modules here must not import GUI frameworks (PySide6, Qt, etc.).
"""
