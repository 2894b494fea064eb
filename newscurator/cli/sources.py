"""Sources management commands."""

import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..ingestion import strategy_name

console = Console()
sources_app = typer.Typer(help="Inspect configured sources")


@sources_app.command("list")
def sources_list() -> None:
    """List configured sources per category, in priority order."""
    config = Config()

    try:
        catalog = config.load_sources()
    except FileNotFoundError:
        console.print("[red]Sources file not found. Run 'newscurator init' first.[/red]")
        raise typer.Exit(1)

    if not len(catalog):
        console.print("[yellow]No sources configured.[/yellow]")
        return

    table = Table(title="Configured Sources")
    table.add_column("Category", style="magenta")
    table.add_column("#", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Priority", style="green")
    table.add_column("Strategy", style="yellow")
    table.add_column("Filter")
    table.add_column("URL", style="blue")

    for category_name, _, sources in catalog:
        for rank, source in enumerate(sources):
            table.add_row(
                category_name if rank == 0 else "",
                str(rank + 1),
                source.name,
                f"{1.0 / (1 + rank):.2f}",
                strategy_name(source),
                source.category_filter or "",
                source.feed or source.url,
            )
        table.add_section()

    console.print(table)
