"""JSON-lines framing for the backend RPC channel.

One frame per line in each direction. Requests carry ``id``, ``method`` and
positional ``params``; responses carry the same ``id`` plus either
``ok: true`` with ``result`` or ``ok: false`` with ``error``.
"""

from __future__ import annotations

import json
from typing import Any

from miru.bridge.errors import BridgeTransportError

from .protocol import RpcError, RpcRequest, RpcResponse

FRAME_ENCODING = "utf-8"


def _as_row(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def encode_request_frame(request: RpcRequest) -> bytes:
    """Encode a request as one newline-terminated line.

    Raises TypeError or ValueError when params are not JSON-serializable.
    """
    body = json.dumps(
        {"id": request.id, "method": request.method, "params": request.params},
        ensure_ascii=False,
        separators=(",", ":"),
    )
    return (body + "\n").encode(FRAME_ENCODING)


def decode_response_frame(raw: bytes) -> RpcResponse | None:
    """Decode one stdout line; None for a blank line.

    Raises ValueError when the line is not a JSON object.
    """
    text = raw.decode(FRAME_ENCODING, errors="replace").strip()
    if not text:
        return None
    row = json.loads(text)
    if not isinstance(row, dict):
        raise ValueError(f"response frame must be a JSON object, got {type(row).__name__}")
    return response_from_row(row)


def rpc_error_from(payload: Any) -> RpcError:
    row = _as_row(payload)
    data = row.get("data")
    return RpcError(
        code=str(row.get("code") or "RPC_ERROR"),
        message=str(row.get("message") or "rpc failed"),
        data=data if isinstance(data, dict) else None,
    )


def response_from_row(row: Any, *, fallback_id: str = "unknown") -> RpcResponse:
    row = _as_row(row)
    req_id = str(row.get("id") or fallback_id)
    if row.get("ok"):
        return RpcResponse(id=req_id, ok=True, result=row.get("result"))
    return RpcResponse(id=req_id, ok=False, error=rpc_error_from(row.get("error")))


def connection_lost(req_id: str, reason: str) -> RpcResponse:
    """Synthetic response used to release a waiter when the channel dies."""
    return RpcResponse(id=req_id, ok=False, error=RpcError(code="CONNECTION_LOST", message=reason))


def to_transport_error(command: str, response: RpcResponse) -> BridgeTransportError:
    """Error raised to the bridge for an ``ok: false`` response."""
    err = response.error or RpcError(code="RPC_ERROR", message=f"{command} failed")
    return BridgeTransportError(command, err.message, data={"code": err.code, **(err.data or {})})
