"""Error taxonomy surfaced by the command bridge."""

from __future__ import annotations

from typing import Any

from miru.utils.exceptions import ErrorCategory, MiruError


class SchemaMismatchError(MiruError, TypeError):
    """Caller asked for a command or argument shape the registry does not declare.

    A caller-side defect: never sent to the backend and not meant to be caught
    by feature code.
    """

    def __init__(
        self,
        command: str,
        message: str,
        *,
        code: str = "SCHEMA_MISMATCH",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(
            message,
            code=code,
            category=ErrorCategory.VALIDATION,
            details={"command": command, **(details or {})},
        )
        self.command = command


class UnknownCommandError(SchemaMismatchError):
    """Command name is not registered."""

    def __init__(self, command: str):
        super().__init__(command, f"command not found: {command}", code="UNKNOWN_COMMAND")


class InvalidArgumentsError(SchemaMismatchError):
    """Argument count, names, or types do not match the command signature."""

    def __init__(self, command: str, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(
            command,
            f"invalid arguments for {command}: {message}",
            code="INVALID_ARGUMENTS",
            details={"errors": errors or []},
        )
        self.errors = errors or []


class BridgeError(MiruError):
    """A command reached the backend and did not succeed.

    ``detail`` is the backend's failure payload, passed through untouched so
    callers can branch on backend-defined error structures.
    """

    def __init__(
        self,
        command: str,
        detail: Any = None,
        *,
        code: str = "COMMAND_FAILED",
        category: ErrorCategory = ErrorCategory.RECOVERABLE,
    ):
        message = detail if isinstance(detail, str) else f'Command "{command}" failed'
        super().__init__(message, code=code, category=category, details={"command": command})
        self.command = command
        self.detail = detail

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["detail"] = self.detail
        return payload


class MalformedResponseError(BridgeError):
    """Backend answered with a tagged result that violates the result shape."""

    def __init__(self, command: str, reason: str):
        super().__init__(
            command,
            {"code": "MALFORMED_RESPONSE", "message": reason},
            code="MALFORMED_RESPONSE",
            category=ErrorCategory.FATAL,
        )
        self.reason = reason


class BridgeTransportError(BridgeError):
    """No tagged result could be obtained (connection lost, bad frame, dead process)."""

    def __init__(self, command: str, reason: str, *, data: dict[str, Any] | None = None):
        detail: dict[str, Any] = {"code": "TRANSPORT_ERROR", "message": reason}
        if data:
            detail["data"] = data
        super().__init__(command, detail, code="TRANSPORT_ERROR", category=ErrorCategory.RETRYABLE)
        self.reason = reason
