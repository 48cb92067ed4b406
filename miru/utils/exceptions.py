"""
Error base class and classification helpers shared across miru.

Every miru error carries a stable ``code`` and an ``ErrorCategory`` so callers
can decide whether to retry, report, or give up without matching on message
text. ``sanitize_error_message`` scrubs credentials before anything is logged
or handed back from a backend procedure.
"""

from __future__ import annotations

import asyncio
import json
import re
from enum import Enum
from typing import Any, NamedTuple


class ErrorCategory(Enum):
    RECOVERABLE = "recoverable"
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"


class MiruError(Exception):
    """Base exception for all miru errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ErrorInfo(NamedTuple):
    code: str
    category: ErrorCategory
    retryable: bool


_REDACT = [
    re.compile(r"(api[_-]?key|token|secret|password|auth)[=:]\s*['\"]?([^\s'\"]+)['\"]?", re.IGNORECASE),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
    re.compile(r"[a-zA-Z0-9]{40,}"),
]

# Checked in order; JSONDecodeError must precede ValueError.
_BY_TYPE: list[tuple[tuple[type[BaseException], ...], ErrorInfo]] = [
    ((FileNotFoundError,), ErrorInfo("FILE_NOT_FOUND", ErrorCategory.NOT_FOUND, False)),
    ((asyncio.TimeoutError,), ErrorInfo("TIMEOUT", ErrorCategory.TIMEOUT, True)),
    ((ConnectionError, EOFError), ErrorInfo("CONNECTION_ERROR", ErrorCategory.RETRYABLE, True)),
    ((json.JSONDecodeError,), ErrorInfo("JSON_PARSE_ERROR", ErrorCategory.VALIDATION, False)),
    ((ValueError,), ErrorInfo("INVALID_VALUE", ErrorCategory.VALIDATION, False)),
    ((KeyError,), ErrorInfo("MISSING_KEY", ErrorCategory.VALIDATION, False)),
    ((TypeError,), ErrorInfo("TYPE_ERROR", ErrorCategory.VALIDATION, False)),
]

_BY_MESSAGE: list[tuple[tuple[str, ...], ErrorInfo]] = [
    (("timeout", "timed out"), ErrorInfo("TIMEOUT", ErrorCategory.TIMEOUT, True)),
    (("not found",), ErrorInfo("NOT_FOUND", ErrorCategory.NOT_FOUND, False)),
    (("connection", "broken pipe"), ErrorInfo("CONNECTION_ERROR", ErrorCategory.RETRYABLE, True)),
]

_FALLBACK = ErrorInfo("INTERNAL_ERROR", ErrorCategory.FATAL, False)


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Replace credentials and long opaque tokens in message."""
    for pattern in _REDACT:
        message = pattern.sub(replacement, message)
    return message


def classify_exception(exc: BaseException) -> ErrorInfo:
    """Map any exception to (code, category, retryable).

    MiruError subclasses report their own code; they are retryable only in
    the RETRYABLE category.
    """
    if isinstance(exc, MiruError):
        return ErrorInfo(exc.code, exc.category, exc.category is ErrorCategory.RETRYABLE)
    for types, info in _BY_TYPE:
        if isinstance(exc, types):
            return info
    text = str(exc).lower()
    for needles, info in _BY_MESSAGE:
        if any(needle in text for needle in needles):
            return info
    return _FALLBACK
