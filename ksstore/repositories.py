from __future__ import annotations

import asyncio
from typing import Any, Protocol

from .interfaces import Record, Storer, Term


class AsyncStorer(Protocol):
    def client(self) -> Any: ...
    def set_table(self, table: str) -> None: ...

    async def get(self, uid: str, *, timeout: float | None = None) -> Record: ...
    async def set(self, uid: str, record: Any, *, timeout: float | None = None) -> Record: ...
    async def all(self, *, timeout: float | None = None) -> list[Record]: ...
    async def query(self, *terms: Term, timeout: float | None = None) -> list[Record]: ...
    async def delete(self, uid: str, *, timeout: float | None = None) -> Record: ...


class AsyncStore(AsyncStorer):
    """
    Async wrapper around any Storer.
    Uses asyncio.to_thread to avoid blocking the event loop on backend I/O.

    Cancelling the awaiting task returns control immediately; the worker
    thread still finishes its call, bounded by ``timeout``.
    """

    def __init__(self, store: Storer) -> None:
        self._store = store

    @property
    def store(self) -> Storer:
        return self._store

    def client(self) -> Any:
        return self._store.client()

    def set_table(self, table: str) -> None:
        self._store.set_table(table)

    async def get(self, uid: str, *, timeout: float | None = None) -> Record:
        return await asyncio.to_thread(self._store.get, uid, timeout=timeout)

    async def set(self, uid: str, record: Any, *, timeout: float | None = None) -> Record:
        return await asyncio.to_thread(self._store.set, uid, record, timeout=timeout)

    async def all(self, *, timeout: float | None = None) -> list[Record]:
        return await asyncio.to_thread(self._store.all, timeout=timeout)

    async def query(self, *terms: Term, timeout: float | None = None) -> list[Record]:
        return await asyncio.to_thread(self._store.query, *terms, timeout=timeout)

    async def delete(self, uid: str, *, timeout: float | None = None) -> Record:
        return await asyncio.to_thread(self._store.delete, uid, timeout=timeout)
