"""Collections command group."""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from miru.bridge.dispatch import CommandBridge
from miru.cli.shared.bridge_utils import run_with_bridge
from miru.config.access import get_config
from miru.features.collection.api import CollectionApi


def _collections_table(rows: list[dict[str, Any]]) -> Table:
    table = Table(title="Collections")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Anime", justify="right")
    table.add_column("Updated")
    for row in rows:
        count = row.get("animeCount")
        if count is None:
            count = len(row.get("animeIds") or [])
        table.add_row(
            str(row.get("id", "")), escape(str(row.get("name", ""))), str(count), str(row.get("updatedAt", ""))
        )
    return table


def register_collections_commands(app: typer.Typer, console: Console) -> None:
    collections_app = typer.Typer(help="Manage collections")
    app.add_typer(collections_app, name="collections")

    @collections_app.command("list")
    def collections_list() -> None:
        """List all collections."""

        async def _run(bridge: CommandBridge) -> list[dict[str, Any]]:
            return await CollectionApi(bridge).get_all()

        rows = run_with_bridge(console, _run)
        if not rows:
            console.print("No collections yet.")
            return
        console.print(_collections_table(rows))

    @collections_app.command("show")
    def collections_show(collection_id: str = typer.Argument(..., help="Collection ID")) -> None:
        """Show one collection and its anime."""

        async def _run(bridge: CommandBridge) -> tuple[dict[str, Any] | None, list[dict[str, Any]]]:
            api = CollectionApi(bridge)
            collection = await api.get(collection_id)
            if collection is None:
                return None, []
            return collection, await api.get_anime(collection_id)

        collection, anime = run_with_bridge(console, _run)
        if collection is None:
            console.print(f"[yellow]Collection not found: {collection_id}[/yellow]")
            raise typer.Exit(1)
        console.print(f"[bold]{escape(str(collection.get('name', '')))}[/bold] ({collection.get('id', '')})")
        if collection.get("description"):
            console.print(escape(collection["description"]))
        display = get_config().display
        for row in anime:
            title = display.preferred_title(row.get("title") or {})
            console.print(f"- {escape(title)} [dim]{row.get('id', '')}[/dim]")

    @collections_app.command("create")
    def collections_create(
        name: str = typer.Argument(..., help="Collection name"),
        description: str = typer.Option(None, "--description", "-d", help="Optional description"),
    ) -> None:
        """Create a collection."""

        async def _run(bridge: CommandBridge) -> dict[str, Any]:
            return await CollectionApi(bridge).create(name, description)

        created = run_with_bridge(console, _run)
        label = escape(str(created.get("name", name)))
        console.print(f"[green]✓[/green] Created collection {label} ({created.get('id', '')})")

    @collections_app.command("delete")
    def collections_delete(collection_id: str = typer.Argument(..., help="Collection ID")) -> None:
        """Delete a collection."""

        async def _run(bridge: CommandBridge) -> None:
            await CollectionApi(bridge).delete(collection_id)

        run_with_bridge(console, _run)
        console.print(f"[green]✓[/green] Deleted collection {collection_id}")
