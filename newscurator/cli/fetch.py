"""Fetch command implementation."""

from typing import Optional

import psycopg
import typer
from rich.console import Console

from ..config import Config
from ..db import ArticleStorage, validate_connection
from ..pipeline import NewsFetcher, SourceNotFoundError, print_scan_summary

console = Console()


def build_fetcher(config: Config) -> NewsFetcher:
    """Wire a fetcher to the configured store, sources and cache."""
    return NewsFetcher(
        store=ArticleStorage(config.get_db_config()),
        load_catalog=config.load_sources,
        cache_path=config.cache_path,
        scraping=config.config.scraping,
    )


def fetch_command(
    source: Optional[str] = typer.Option(
        None,
        "--source",
        "-s",
        help="Only scan the source with this name",
    ),
) -> None:
    """Scan configured sources and store new articles."""
    try:
        config = Config()

        console.print("[dim]Checking database connection...[/dim]")
        if not validate_connection(config.get_db_config()):
            console.print("[red]Database connection failed![/red]")
            raise typer.Exit(1)

        fetcher = build_fetcher(config)

        if source:
            result = fetcher.fetch_single_source_sync(source)
            if result.error:
                console.print(f"[red]{result.source_name}: {result.error}[/red]")
                raise typer.Exit(1)
            console.print(
                f"[green]News fetched successfully for {result.source_name}: "
                f"{result.new_articles} new articles[/green]"
            )
        else:
            scan = fetcher.fetch_all_news_sync()
            print_scan_summary(scan)

    except SourceNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Scan interrupted by user[/yellow]")
        raise typer.Exit(1)
    except (FileNotFoundError, ValueError, psycopg.Error) as e:
        console.print(f"[red]Scan failed: {e}[/red]")
        raise typer.Exit(1)
