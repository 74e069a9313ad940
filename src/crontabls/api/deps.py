"""Dependency injection for FastAPI: the DocumentStore singleton."""

from __future__ import annotations

from crontabls.service.document_store import DocumentStore

_document_store: DocumentStore | None = None


def init_document_store(store: DocumentStore) -> None:
    """Set the global DocumentStore (called at app startup)."""
    global _document_store  # noqa: PLW0603
    _document_store = store


def get_document_store() -> DocumentStore:
    """FastAPI ``Depends`` provider for DocumentStore."""
    if _document_store is None:
        raise RuntimeError("DocumentStore not initialised, call init_document_store() first")
    return _document_store


def reset_document_store() -> None:
    """Clear the global DocumentStore (for tests)."""
    global _document_store  # noqa: PLW0603
    _document_store = None
