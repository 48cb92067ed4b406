"""Lifecycle of a single bridge call."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import BridgeError


class InvocationState(Enum):
    PENDING = "pending"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass(slots=True)
class CommandInvocation:
    """One call in flight: settles exactly once, then is discarded."""

    command: str
    args: tuple[Any, ...]
    state: InvocationState = InvocationState.PENDING
    payload: Any = None
    error: BridgeError | None = None

    def _settle(self, state: InvocationState) -> None:
        if self.state is not InvocationState.PENDING:
            raise RuntimeError(f"invocation of {self.command} already {self.state.value}")
        self.state = state

    def resolve(self, payload: Any) -> Any:
        self._settle(InvocationState.RESOLVED)
        self.payload = payload
        return payload

    def fail(self, error: BridgeError) -> BridgeError:
        self._settle(InvocationState.FAILED)
        self.error = error
        return error
