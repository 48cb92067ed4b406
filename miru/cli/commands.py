"""CLI commands for miru.

Single entry point: registers top-level commands (commands, call, version) and
the collections and anime command groups.
"""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from miru import __logo__, __version__
from miru.bridge.dispatch import CommandBridge
from miru.bridge.schema import type_label
from miru.cli.command_groups.anime_command import register_anime_commands
from miru.cli.command_groups.collections_command import register_collections_commands
from miru.cli.shared.bridge_utils import run_with_bridge
from miru.cli.shared.logging_utils import configure_cli_logging
from miru.commands.registry import get_command_schema
from miru.config.access import get_config

app = typer.Typer(
    name="miru",
    help=f"{__logo__} miru - personal anime collections",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print debug logs to stderr"),
) -> None:
    """miru - personal anime collections."""
    configure_cli_logging("cli", get_config().logging, verbose=verbose)


@app.command()
def version() -> None:
    """Show the miru version."""
    console.print(f"{__logo__} miru v{__version__}")


@app.command("commands")
def list_commands() -> None:
    """List the backend commands the bridge can dispatch."""
    table = Table(title="Backend Commands")
    table.add_column("Command", style="cyan")
    table.add_column("Arguments")
    table.add_column("Returns")
    table.add_column("Description", style="dim")
    for signature in get_command_schema().values():
        params = ", ".join(
            f"{param.name}: {type_label(param.annotation)}" + ("" if param.required else "?")
            for param in signature.params
        )
        table.add_row(signature.name, params or "-", type_label(signature.returns), signature.description)
    console.print(table)


def _parse_call_args(raw: str | None) -> tuple[list[Any], dict[str, Any]]:
    if not raw:
        return [], {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as exc:
        console.print(f"[red]--args is not valid JSON: {exc}[/red]")
        raise typer.Exit(2) from exc
    if isinstance(value, list):
        return value, {}
    if isinstance(value, dict):
        return [], value
    console.print("[red]--args must be a JSON array (positional) or object (by parameter name)[/red]")
    raise typer.Exit(2)


@app.command("call")
def call_command(
    command: str = typer.Argument(..., help="Backend command name, e.g. getAllCollections"),
    args: str = typer.Option(None, "--args", "-a", help="JSON array of arguments or object keyed by parameter"),
) -> None:
    """Dispatch any registered command and print its payload as JSON."""
    positional, named = _parse_call_args(args)

    async def _run(bridge: CommandBridge) -> Any:
        return await bridge.call(command, *positional, **named)

    payload = run_with_bridge(console, _run)
    console.print_json(json.dumps(payload, ensure_ascii=False, default=str))


register_collections_commands(app, console)
register_anime_commands(app, console)


if __name__ == "__main__":
    app()
