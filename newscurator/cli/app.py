"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .fetch import fetch_command
from .init import init_command
from .news import news_command
from .sources import sources_app

app = typer.Typer(
    name="newscurator",
    help="News Curator - scan news sources and show curated, source-diverse headlines",
    no_args_is_help=True,
)

app.command("init")(init_command)
app.command("fetch")(fetch_command)
app.command("news")(news_command)
app.add_typer(sources_app, name="sources", help="Inspect configured sources")


if __name__ == "__main__":
    app()
