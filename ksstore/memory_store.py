from __future__ import annotations

import copy
import logging
import operator
import uuid
from typing import Any, Callable

from .codec import to_document
from .errors import InvalidDataError, NotFoundError
from .interfaces import Record, Storer, Term
from .locks import TableLockRegistry

logger = logging.getLogger(__name__)

_MISSING = object()


def _same(actual: Any, expected: Any) -> bool:
    # Booleans never equal numbers in Firestore; ints and doubles do.
    if isinstance(actual, bool) or isinstance(expected, bool):
        return type(actual) is type(expected) and actual == expected
    return actual == expected


def _contains(values: Any, expected: Any) -> bool:
    return any(_same(v, expected) for v in values)


def _ordered(cmp: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    def _apply(actual: Any, expected: Any) -> bool:
        if isinstance(actual, bool) != isinstance(expected, bool):
            return False
        try:
            return bool(cmp(actual, expected))
        except TypeError:
            # Firestore only orders values of the same type.
            return False

    return _apply


_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": _same,
    "!=": lambda actual, expected: not _same(actual, expected),
    "<": _ordered(operator.lt),
    "<=": _ordered(operator.le),
    ">": _ordered(operator.gt),
    ">=": _ordered(operator.ge),
    "in": lambda actual, expected: _contains(expected, actual),
    "not-in": lambda actual, expected: not _contains(expected, actual),
    "array-contains": lambda actual, expected: isinstance(actual, list) and _contains(actual, expected),
    "array-contains-any": lambda actual, expected: (
        isinstance(actual, list) and any(_contains(actual, v) for v in expected)
    ),
}

_LIST_OPERATORS = frozenset({"in", "not-in", "array-contains-any"})


def _lookup(doc: Record, path: str) -> Any:
    node: Any = doc
    for part in path.split("."):
        if not isinstance(node, dict) or part not in node:
            return _MISSING
        node = node[part]
    return node


def _merge(target: Record, fields: Record) -> None:
    # Nested maps merge field by field, like a Firestore merge write.
    for key, value in fields.items():
        current = target.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            _merge(current, value)
        else:
            target[key] = copy.deepcopy(value)


def _matches(doc: Record, term: Term) -> bool:
    actual = _lookup(doc, term.field)
    if actual is _MISSING:
        return False
    return _OPERATORS[term.op](actual, term.value)


class InMemoryStore(Storer):
    """
    Dict-backed Storer for tests and local runs.

    Mirrors FirestoreStore semantics: merge-upsert, re-read after write,
    last-term-wins queries unless ``match_all_terms`` is set. Records are
    copied on the way in and out so callers never alias stored state.
    """

    def __init__(
        self,
        table: str = "",
        *,
        tables: dict[str, dict[str, Record]] | None = None,
        match_all_terms: bool = False,
    ):
        self._tables: dict[str, dict[str, Record]] = tables if tables is not None else {}
        self._table = table
        self._match_all_terms = match_all_terms
        self._locks = TableLockRegistry()

    @property
    def table(self) -> str:
        return self._table

    def client(self) -> dict[str, dict[str, Record]]:
        return self._tables

    def set_table(self, table: str) -> None:
        self._table = table

    def get(self, uid: str, *, timeout: float | None = None) -> Record:
        with self._locks.lock_for(self._table):
            doc = self._tables.get(self._table, {}).get(uid)
            if doc is None:
                raise NotFoundError()
            return copy.deepcopy(doc)

    def set(self, uid: str, record: Any, *, timeout: float | None = None) -> Record:
        if not uid:
            uid = str(uuid.uuid4())
        doc = to_document(record)
        doc["id"] = uid

        with self._locks.lock_for(self._table):
            table = self._tables.setdefault(self._table, {})
            _merge(table.setdefault(uid, {}), doc)
            return self.get(uid)

    def all(self, *, timeout: float | None = None) -> list[Record]:
        with self._locks.lock_for(self._table):
            return [copy.deepcopy(d) for d in self._tables.get(self._table, {}).values()]

    def query(self, *terms: Term, timeout: float | None = None) -> list[Record]:
        for term in terms:
            if term.op not in _OPERATORS:
                logger.info("QUERY: unsupported operator %r on field %s", term.op, term.field)
                raise InvalidDataError()
            if term.op in _LIST_OPERATORS and not isinstance(term.value, (list, tuple)):
                logger.info("QUERY: operator %r needs a list value on field %s", term.op, term.field)
                raise InvalidDataError()

        active = list(terms) if self._match_all_terms else list(terms[-1:])
        with self._locks.lock_for(self._table):
            return [
                copy.deepcopy(d)
                for d in self._tables.get(self._table, {}).values()
                if all(_matches(d, t) for t in active)
            ]

    def delete(self, uid: str, *, timeout: float | None = None) -> Record:
        with self._locks.lock_for(self._table):
            previous = self.get(uid)
            self._tables[self._table].pop(uid, None)
            return previous
