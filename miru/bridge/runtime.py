"""Wire the bridge to a transport chosen by configuration."""

from __future__ import annotations

from miru.backend.contracts import BackendTransport
from miru.backend.local import InProcessBackend
from miru.backend.stdio_client import StdioBackendClient
from miru.commands.registry import get_command_schema
from miru.config.schema import Config

from .dispatch import CommandBridge


def create_transport(config: Config) -> BackendTransport:
    backend = config.backend
    if backend.transport == "local":
        return InProcessBackend()
    return StdioBackendClient(
        backend.command,
        cwd=backend.cwd,
        env=backend.env,
        shutdown_timeout_s=backend.shutdown_timeout_s,
    )


def create_bridge(config: Config, *, backend: BackendTransport | None = None) -> CommandBridge:
    """Build a bridge over the process-wide command registry."""
    return CommandBridge(
        get_command_schema(),
        backend if backend is not None else create_transport(config),
        check_results=config.bridge.check_results,
    )
