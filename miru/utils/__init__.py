"""Utility functions for miru."""

from miru.utils.exceptions import (
    ErrorCategory,
    ErrorInfo,
    MiruError,
    classify_exception,
    sanitize_error_message,
)

__all__ = [
    "ErrorCategory",
    "ErrorInfo",
    "MiruError",
    "classify_exception",
    "sanitize_error_message",
]
