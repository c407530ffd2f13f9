from __future__ import annotations

from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict

Record = dict[str, Any]


class Term(BaseModel):
    """A single ``field <op> value`` query predicate."""

    model_config = ConfigDict(frozen=True)

    field: str
    op: str
    value: Any = None


class Storer(Protocol):
    """
    Generic record store over one table (collection) at a time.

    Every data operation raises a ``StoreError`` on failure and takes an
    optional ``timeout`` in seconds that is handed to the backend call.
    """

    def client(self) -> Any:
        """Return the underlying backend client for uncovered use cases."""
        ...

    def set_table(self, table: str) -> None:
        ...

    def get(self, uid: str, *, timeout: float | None = None) -> Record:
        ...

    def set(self, uid: str, record: Any, *, timeout: float | None = None) -> Record:
        """Merge-upsert ``record`` under ``uid`` (generated when empty) and return the stored document."""
        ...

    def all(self, *, timeout: float | None = None) -> list[Record]:
        ...

    def query(self, *terms: Term, timeout: float | None = None) -> list[Record]:
        ...

    def delete(self, uid: str, *, timeout: float | None = None) -> Record:
        """Delete and return the previous contents."""
        ...
