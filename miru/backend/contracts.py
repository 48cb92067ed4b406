"""Runtime contract for backend transports."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BackendTransport(Protocol):
    async def invoke(self, command: str, args: list[Any]) -> Any: ...
