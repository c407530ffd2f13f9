from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from .errors import InvalidDataError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def dumps(value: Any) -> str:
    """
    Serialize ``value`` to strict JSON.

    Pydantic models, dataclasses, datetimes etc. are converted the way pydantic
    would in ``mode="json"``. NaN/Infinity and unsupported types are rejected.
    """
    try:
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        return json.dumps(value, allow_nan=False, default=to_jsonable_python)
    except (TypeError, ValueError, PydanticSerializationError) as e:
        logger.info("MARSHAL: failed to encode %s: %r", type(value).__name__, e)
        raise InvalidDataError() from e


def to_document(value: Any) -> dict[str, Any]:
    """Re-marshal ``value`` into an untyped JSON object."""
    raw = dumps(value)
    try:
        doc = json.loads(raw)
    except ValueError as e:
        logger.info("UNMARSHAL: failed to decode document: %r", e)
        raise InvalidDataError() from e
    if not isinstance(doc, dict):
        logger.info("UNMARSHAL: expected a JSON object, got %s", type(doc).__name__)
        raise InvalidDataError()
    return doc


def bind(value: Any, dst: type[T]) -> T:
    """
    Decode ``value`` into ``dst`` through a JSON round-trip.

    Handy for projecting a generic record onto an application model:

        user = bind(store.get(uid), User)
    """
    raw = dumps(value)
    try:
        return TypeAdapter(dst).validate_json(raw)
    except ValidationError as e:
        logger.info("BIND: failed to decode into %r: %s", dst, e)
        raise InvalidDataError() from e
