"""Run bridge calls from synchronous CLI commands."""

from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, TypeVar

import typer
from rich.console import Console
from rich.markup import escape

from miru.bridge.dispatch import CommandBridge
from miru.bridge.errors import BridgeError, SchemaMismatchError
from miru.bridge.runtime import create_bridge
from miru.config.access import get_config

T = TypeVar("T")

EXIT_BACKEND_FAILURE = 1
EXIT_SCHEMA_MISMATCH = 2


def render_detail(detail: Any) -> str:
    if detail is None:
        return "(no detail)"
    if isinstance(detail, str):
        return detail
    return json.dumps(detail, ensure_ascii=False, default=str)


def run_with_bridge(console: Console, fn: Callable[[CommandBridge], Awaitable[T]]) -> T:
    """Build a bridge from config, run fn on it, close the transport, map errors to exit codes."""

    async def _run() -> T:
        bridge = create_bridge(get_config())
        try:
            return await fn(bridge)
        finally:
            close = getattr(bridge.backend, "close", None)
            if close is not None:
                await close()

    try:
        return asyncio.run(_run())
    except SchemaMismatchError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(EXIT_SCHEMA_MISMATCH) from exc
    except BridgeError as exc:
        console.print(f"[red]{exc.command} failed:[/red] {escape(render_detail(exc.detail))}")
        raise typer.Exit(EXIT_BACKEND_FAILURE) from exc
