#!/usr/bin/env python3
"""
Main CLI entry point for cmdpal
"""

import typer
from rich.console import Console
from rich.table import Table

from cmdpal import __version__
from cmdpal.services.kv_store import JsonFileStore, MemoryStore
from cmdpal.ui.command_palette.palette_ranking import group_by_category, rank
from cmdpal.ui.command_palette.palette_recent import RecencyLedger
from cmdpal.ui.command_palette.palette_scoring import command_score
from cmdpal.utils.logging_utils import setup_logging

console = Console()

app = typer.Typer(
    name="cmdpal",
    help="cmdpal - keyboard-driven command palette engine",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    cmdpal - keyboard-driven command palette engine

    [bold]Examples:[/bold]

    Try the palette:
        [cyan]cmdpal demo[/cyan]

    See how a query ranks:
        [cyan]cmdpal rank prm[/cyan]
    """
    setup_logging(verbose)


@app.command()
def version():
    """Show cmdpal version"""
    typer.echo(f"cmdpal version {__version__}")


@app.command()
def demo():
    """Run the interactive palette demo (Ctrl+K)."""
    from cmdpal.ui.demo_app import PaletteDemoApp

    PaletteDemoApp().run()


@app.command()
def recent(
    clear: bool = typer.Option(False, "--clear", help="Forget all recent commands"),
):
    """Show the recently used commands, most recent first."""
    ledger = RecencyLedger(JsonFileStore())

    if clear:
        ledger.clear()
        console.print("[green]✓ Recent commands cleared[/green]")
        return

    ids = ledger.list()
    if not ids:
        console.print("[yellow]No recent commands[/yellow]")
        return

    table = Table(title="Recent commands")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Command ID", style="cyan")
    for position, command_id in enumerate(ids, 1):
        table.add_row(str(position), command_id)
    console.print(table)


@app.command(name="rank")
def rank_command(
    query: str = typer.Argument("", help="Query to rank the demo commands against"),
    use_recent: bool = typer.Option(
        False, "--recent", help="Bias an empty query with your saved recent commands"
    ),
):
    """Rank the demo root commands for QUERY and show the scores."""
    from cmdpal.ui.demo_data import build_presenter

    store = JsonFileStore() if use_recent else MemoryStore()
    presenter = build_presenter(navigate=lambda route: None, store=store)
    recent_ids = presenter.ledger.list()
    ranked = rank(presenter.corpus.build(query), query, recent_ids)

    if not ranked:
        console.print(f"[yellow]No commands match '{query}'[/yellow]")
        raise typer.Exit(1)

    table = Table(title=f"Ranking for '{query}'" if query else "Default ranking")
    table.add_column("Group", style="magenta")
    table.add_column("ID", style="cyan")
    table.add_column("Label")
    table.add_column("Score", justify="right")
    for category, nodes in group_by_category(ranked, query, recent_ids):
        for node in nodes:
            score = f"{command_score(node, query):.1f}" if query else "-"
            table.add_row(category, node.id, node.label, score)
    console.print(table)


if __name__ == "__main__":
    app()
