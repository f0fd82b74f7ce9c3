"""SQLAlchemy adapter package for questlog."""

from __future__ import annotations

from .mappings import documents_table, metadata
from .store import SqlAlchemyDocumentStore, StartupError, is_started, shutdown, startup

__all__ = [
    "SqlAlchemyDocumentStore",
    "StartupError",
    "documents_table",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
