from __future__ import annotations

from enum import Enum

from google.api_core import exceptions as api_exceptions


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    INVALID_DATA = "invalid_data"
    INTERNAL = "internal"


_DEFAULT_MESSAGES = {
    ErrorKind.NOT_FOUND: "record not found",
    ErrorKind.INVALID_DATA: "invalid data record",
    ErrorKind.INTERNAL: "internal datastore error",
}


class StoreError(Exception):
    """
    Base for every error a store operation raises.

    Compare by ``kind`` rather than by identity; the backend exception, when
    there is one, is available as ``__cause__``.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str | None = None):
        super().__init__(message or _DEFAULT_MESSAGES[self.kind])

    @classmethod
    def of(cls, kind: ErrorKind, message: str | None = None) -> "StoreError":
        return _BY_KIND[kind](message)


class NotFoundError(StoreError):
    kind = ErrorKind.NOT_FOUND


class InvalidDataError(StoreError):
    kind = ErrorKind.INVALID_DATA


class InternalError(StoreError):
    kind = ErrorKind.INTERNAL


_BY_KIND: dict[ErrorKind, type[StoreError]] = {
    ErrorKind.NOT_FOUND: NotFoundError,
    ErrorKind.INVALID_DATA: InvalidDataError,
    ErrorKind.INTERNAL: InternalError,
}


def from_error(err: BaseException | None, fallback: ErrorKind | None = None) -> StoreError | None:
    """
    Translate a backend exception into a StoreError.

    NotFound -> not found, InvalidArgument -> invalid data, anything else ->
    ``fallback`` when given, otherwise internal. Already-translated errors pass
    through unchanged.
    """
    if err is None:
        return None
    if isinstance(err, StoreError):
        return err
    if isinstance(err, api_exceptions.NotFound):
        return NotFoundError()
    if isinstance(err, api_exceptions.InvalidArgument):
        return InvalidDataError()
    if fallback is not None:
        return StoreError.of(fallback)
    return InternalError()
