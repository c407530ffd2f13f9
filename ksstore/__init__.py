from __future__ import annotations

from .codec import bind
from .errors import (
    ErrorKind,
    InternalError,
    InvalidDataError,
    NotFoundError,
    StoreError,
    from_error,
)
from .firestore_store import FirestoreStore, get_default_client
from .interfaces import Record, Storer, Term
from .memory_store import InMemoryStore
from .repositories import AsyncStore, AsyncStorer
from .settings import Settings, get_settings

__all__ = [
    "Storer",
    "FirestoreStore",
    "InMemoryStore",
    "AsyncStorer",
    "AsyncStore",
    "get_default_client",
    "Record",
    "Term",
    "bind",
    "ErrorKind",
    "StoreError",
    "NotFoundError",
    "InvalidDataError",
    "InternalError",
    "from_error",
    "Settings",
    "get_settings",
]
