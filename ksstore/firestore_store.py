from __future__ import annotations

import logging
import uuid
from typing import Any, Iterable

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .codec import to_document
from .errors import ErrorKind, InternalError, NotFoundError, from_error
from .interfaces import Record, Storer, Term
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class FirestoreStore(Storer):
    """
    Storer backed by a Cloud Firestore collection.

    - The client may be shared by several stores; ``table`` is per instance.
    - ``set_table`` is not synchronized. Use one store per table when targeting
      several tables concurrently.
    - ``query`` applies only the last term unless ``match_all_terms`` is set.
    """

    def __init__(
        self,
        client: firestore.Client,
        table: str = "",
        *,
        timeout: float | None = None,
        match_all_terms: bool = False,
        debug_log_requests: bool = False,
    ):
        self._client = client
        self._table = table
        self._timeout = timeout
        self._match_all_terms = match_all_terms
        self._debug = debug_log_requests

    @property
    def table(self) -> str:
        return self._table

    def client(self) -> firestore.Client:
        return self._client

    def set_table(self, table: str) -> None:
        self._table = table

    def get(self, uid: str, *, timeout: float | None = None) -> Record:
        self._trace("GET", uid)
        try:
            snapshot = self._client.collection(self._table).document(uid).get(timeout=self._deadline(timeout))
        except Exception as e:
            logger.info("GET: table=%s id=%s failed: %r", self._table, uid, e)
            raise from_error(e, ErrorKind.INVALID_DATA) from e
        if not snapshot.exists:
            raise NotFoundError()
        return _record(snapshot)

    def set(self, uid: str, record: Any, *, timeout: float | None = None) -> Record:
        if not uid:
            uid = str(uuid.uuid4())
        doc = to_document(record)
        doc["id"] = uid

        self._trace("SET", uid)
        try:
            self._client.collection(self._table).document(uid).set(doc, merge=True, timeout=self._deadline(timeout))
        except Exception as e:
            logger.warning("SET: table=%s id=%s write failed: %r", self._table, uid, e)
            raise from_error(e) from e
        return self.get(uid, timeout=timeout)

    def all(self, *, timeout: float | None = None) -> list[Record]:
        self._trace("ALL", None)
        return self._drain("ALL", lambda: self._client.collection(self._table).stream(timeout=self._deadline(timeout)))

    def query(self, *terms: Term, timeout: float | None = None) -> list[Record]:
        self._trace("QUERY", None, terms=terms)

        def _open():
            ref = self._client.collection(self._table)
            query = ref
            for term in terms:
                base = query if self._match_all_terms else ref
                query = base.where(filter=FieldFilter(term.field, term.op, term.value))
            return query.stream(timeout=self._deadline(timeout))

        return self._drain("QUERY", _open)

    def delete(self, uid: str, *, timeout: float | None = None) -> Record:
        previous = self.get(uid, timeout=timeout)

        self._trace("DELETE", uid)
        try:
            self._client.collection(self._table).document(uid).delete(timeout=self._deadline(timeout))
        except Exception as e:
            logger.warning("DELETE: table=%s id=%s failed: %r", self._table, uid, e)
            raise from_error(e) from e
        return previous

    def _drain(self, op: str, open_stream) -> list[Record]:
        # Any failure, including mid-stream, discards what was read so far.
        results: list[Record] = []
        try:
            for snapshot in open_stream():
                results.append(_record(snapshot))
        except Exception as e:
            logger.info("%s: table=%s stream failed after %d docs: %r", op, self._table, len(results), e)
            raise from_error(e, ErrorKind.INVALID_DATA) from e
        return results

    def _deadline(self, timeout: float | None) -> float | None:
        return self._timeout if timeout is None else timeout

    def _trace(self, op: str, uid: str | None, *, terms: Iterable[Term] = ()) -> None:
        if not self._debug:
            return
        logger.debug(
            "%s: table=%s id=%s terms=%s",
            op,
            self._table,
            uid,
            [(t.field, t.op, t.value) for t in terms],
        )


def _record(snapshot: Any) -> Record:
    data = snapshot.to_dict() or {}
    data.setdefault("id", snapshot.id)
    return data


def get_default_client(
    project: str | None = None,
    *,
    database: str | None = None,
    settings: Settings | None = None,
) -> FirestoreStore:
    """
    Open a Firestore connection and return a store over it.

    Arguments left as None are taken from ``settings`` (environment by default).
    """
    settings = settings or get_settings()
    project = project or settings.project
    database = database or settings.database
    try:
        client = firestore.Client(project=project, database=database)
    except Exception as e:
        logger.warning("CONNECT: project=%s database=%s failed: %r", project, database, e)
        raise InternalError() from e
    return FirestoreStore(
        client,
        settings.table,
        timeout=settings.timeout,
        match_all_terms=settings.query_match_all,
        debug_log_requests=settings.debug_log_requests,
    )
