"""Wire frames exchanged with the backend process."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class RpcError:
    """Transport-level error frame (the procedure never produced a result)."""

    code: str
    message: str
    data: dict[str, Any] | None = None


@dataclass(slots=True)
class RpcRequest:
    """One command call: positional args in declared order."""

    id: str
    method: str
    params: list[Any] = field(default_factory=list)


@dataclass(slots=True)
class RpcResponse:
    """Response frame; ``result`` is the procedure's raw return value."""

    id: str
    ok: bool
    result: Any = None
    error: RpcError | None = None
