"""Backend transports for the command bridge."""

from .contracts import BackendTransport
from .local import InProcessBackend
from .protocol import RpcError, RpcRequest, RpcResponse
from .stdio_client import StdioBackendClient

__all__ = [
    "BackendTransport",
    "InProcessBackend",
    "RpcError",
    "RpcRequest",
    "RpcResponse",
    "StdioBackendClient",
]
