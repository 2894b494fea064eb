"""News command implementation."""

from typing import List, Optional

import pendulum
import psycopg
import typer
from rich.console import Console
from rich.table import Table

from ..config import Config
from ..db import ArticleStorage, validate_connection
from ..models import Category, NewsItem
from ..ranking import NewsReader

console = Console()


def _print_articles(title: str, articles: List[NewsItem]) -> None:
    table = Table(title=f"{title} ({len(articles)})", show_lines=False)
    table.add_column("Published", style="yellow", no_wrap=True)
    table.add_column("Source", style="cyan")
    table.add_column("Title", style="bold")
    table.add_column("URL", style="blue")

    for article in articles:
        published = pendulum.instance(article.published_at)
        table.add_row(
            published.format("YYYY-MM-DD HH:mm"),
            article.source,
            article.title,
            article.url,
        )
    console.print(table)


def news_command(
    category: Optional[str] = typer.Option(
        None,
        "--category",
        "-c",
        help="tech, research or business (default: all three)",
    ),
    limit: int = typer.Option(10, "--limit", "-n", min=1, max=100, help="Articles per category"),
) -> None:
    """Show curated news."""
    try:
        config = Config()
        db_config = config.get_db_config()
        if not validate_connection(db_config):
            console.print("[red]Database connection failed![/red]")
            raise typer.Exit(1)
        reader = NewsReader(ArticleStorage(db_config), config.load_sources)

        if category:
            resolved = Category.from_slug(category)
            if resolved is None:
                console.print(f"[red]Invalid category: {category}[/red]")
                raise typer.Exit(1)
            _print_articles(resolved.display_name, reader.get_news_by_category(resolved, limit))
        else:
            news = reader.get_all_news()
            _print_articles(Category.TECH_PRODUCT.display_name, news.tech_news)
            _print_articles(Category.RESEARCH_SCIENCE.display_name, news.research_news)
            _print_articles(Category.BUSINESS_SOCIETY.display_name, news.business_news)

        last_refresh = reader.last_refresh()
        if last_refresh is None:
            console.print("[dim]Last refresh: never[/dim]")
        else:
            console.print(
                f"[dim]Last refresh: {pendulum.instance(last_refresh).diff_for_humans()}[/dim]"
            )
    except (FileNotFoundError, ValueError, psycopg.Error) as e:
        console.print(f"[red]Failed to get news: {e}[/red]")
        raise typer.Exit(1)
