"""Anime command group."""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from miru.bridge.dispatch import CommandBridge
from miru.cli.shared.bridge_utils import run_with_bridge
from miru.config.access import get_config
from miru.features.anime.api import AnimeApi


def register_anime_commands(app: typer.Typer, console: Console) -> None:
    anime_app = typer.Typer(help="Browse the anime catalog")
    app.add_typer(anime_app, name="anime")

    @anime_app.command("search")
    def anime_search(
        query: str = typer.Argument(..., help="Search text"),
        external: bool = typer.Option(False, "--external", help="Search external providers instead of the catalog"),
        limit: int = typer.Option(None, "--limit", "-n", help="Max results for external search"),
    ) -> None:
        """Search anime by title."""

        async def _run(bridge: CommandBridge) -> list[dict[str, Any]]:
            api = AnimeApi(bridge)
            if external:
                return await api.search_external(query, limit)
            return await api.search(query)

        rows = run_with_bridge(console, _run)
        if not rows:
            console.print("No matches.")
            return
        display = get_config().display
        table = Table(title=f"Results for {query!r}")
        table.add_column("ID", style="cyan")
        table.add_column("Title")
        table.add_column("Score", justify="right")
        for row in rows:
            score = row.get("score")
            table.add_row(
                str(row.get("id", "")),
                escape(display.preferred_title(row.get("title") or {})),
                "-" if score is None else f"{score:.1f}",
            )
        console.print(table)
