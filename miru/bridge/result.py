"""Tagged success/failure results returned by backend commands.

The backend serializes ``Result<T, E>`` as ``{"status": "ok", "data": T}`` or
``{"status": "error", "error": E}``. Values without the ``status`` key are bare
payloads from commands that never adopted the tagged convention.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")

DISCRIMINANT = "status"
STATUS_OK = "ok"
STATUS_ERROR = "error"
DATA_KEY = "data"
ERROR_KEY = "error"


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    payload: T


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    detail: E | None = None


TaggedResult = Union[Success[T], Failure[E]]


class MalformedResult(ValueError):
    """A value carries the discriminant but is not a valid tagged result."""


def is_tagged(raw: Any) -> bool:
    """Return True when the raw value carries the result discriminant."""
    return isinstance(raw, Mapping) and DISCRIMINANT in raw


def parse_tagged_result(raw: Mapping[str, Any]) -> TaggedResult[Any, Any]:
    """Parse a discriminated mapping into Success or Failure.

    Raises MalformedResult when the status is unknown or when the payload keys
    do not match it (both populated, or success without data).
    """
    status = raw[DISCRIMINANT]
    has_data = DATA_KEY in raw
    has_error = ERROR_KEY in raw
    if status == STATUS_OK:
        if has_error:
            raise MalformedResult("ok result also carries an error")
        if not has_data:
            raise MalformedResult("ok result has no data")
        return Success(raw[DATA_KEY])
    if status == STATUS_ERROR:
        if has_data:
            raise MalformedResult("error result also carries data")
        return Failure(raw.get(ERROR_KEY))
    raise MalformedResult(f"unknown result status: {status!r}")


def to_wire(result: TaggedResult[Any, Any]) -> dict[str, Any]:
    """Serialize a tagged result into its wire shape."""
    if isinstance(result, Success):
        return {DISCRIMINANT: STATUS_OK, DATA_KEY: result.payload}
    return {DISCRIMINANT: STATUS_ERROR, ERROR_KEY: result.detail}
