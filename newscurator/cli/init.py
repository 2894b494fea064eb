"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import Config, ConfigModel, SourceCatalog, SourceConfig, save_config, save_sources
from ..config.loader import DEFAULT_CONFIG_DIR
from ..db import init_database, validate_connection
from ..models import Category

console = Console()


def create_default_sources() -> SourceCatalog:
    """Default sources per category, most trusted first."""
    return SourceCatalog(
        {
            Category.TECH_PRODUCT.display_name: [
                SourceConfig(
                    name="OpenAI",
                    url="https://openai.com/news/",
                    feed="https://openai.com/news/rss.xml",
                ),
                SourceConfig(name="Anthropic", url="https://www.anthropic.com/news"),
                SourceConfig(name="Google DeepMind", url="https://deepmind.google/discover/blog/"),
                SourceConfig(
                    name="The Verge AI",
                    url="https://www.theverge.com/ai-artificial-intelligence",
                    feed="https://www.theverge.com/rss/index.xml",
                    category_filter="AI",
                ),
                SourceConfig(
                    name="TechCrunch AI",
                    url="https://techcrunch.com/category/artificial-intelligence/",
                    feed="https://techcrunch.com/category/artificial-intelligence/feed/",
                ),
            ],
            Category.RESEARCH_SCIENCE.display_name: [
                SourceConfig(
                    name="arXiv cs.AI",
                    url="https://arxiv.org/list/cs.AI/recent",
                    feed="https://rss.arxiv.org/rss/cs.AI",
                ),
                SourceConfig(
                    name="MIT News - AI",
                    url="https://news.mit.edu/topic/artificial-intelligence2",
                    feed="https://news.mit.edu/rss/topic/artificial-intelligence2",
                ),
                SourceConfig(
                    name="Hugging Face Blog",
                    url="https://huggingface.co/blog",
                    feed="https://huggingface.co/blog/feed.xml",
                ),
            ],
            Category.BUSINESS_SOCIETY.display_name: [
                SourceConfig(
                    name="MIT Technology Review",
                    url="https://www.technologyreview.com/",
                    feed="https://www.technologyreview.com/feed/",
                ),
                SourceConfig(
                    name="Harvard Business Review",
                    url="https://hbr.org/topic/subject/technology-and-analytics",
                ),
                SourceConfig(
                    name="McKinsey QuantumBlack",
                    url="https://www.mckinsey.com/capabilities/quantumblack/our-insights",
                ),
            ],
        }
    )


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_DIR,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    workspace: Path = typer.Option(
        Path.home() / "NewsCurator",
        "--workspace",
        "-w",
        help="Workspace root directory (scrape cache lives here)",
    ),
    db_host: str = typer.Option("localhost", "--db-host", help="Postgres host"),
    db_port: int = typer.Option(5432, "--db-port", help="Postgres port"),
    db_name: str = typer.Option("newscurator", "--db-name", help="Database name"),
    db_user: str = typer.Option("newscurator", "--db-user", help="Database user"),
    seed_sources: bool = typer.Option(
        True,
        "--seed-sources/--no-seed-sources",
        help="Seed default sources for the three categories",
    ),
) -> None:
    """Initialize configuration, workspace and database schema."""
    console.print(Panel.fit("News Curator - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    sources_path = config_dir / "sources.yaml"

    config = ConfigModel(
        workspace_root=str(workspace),
        postgres={
            "host": db_host,
            "port": db_port,
            "database": db_name,
            "user": db_user,
            "password_env": "NEWSCURATOR_DB_PASSWORD",
        },
    )

    save_config(config, config_path)
    console.print(f"Created config: {config_path}")

    if seed_sources:
        catalog = create_default_sources()
        save_sources(catalog, sources_path)
        console.print(f"Created sources: {sources_path} (seeded with {len(catalog)} sources)")
    else:
        save_sources(
            SourceCatalog({category.display_name: [] for category in Category}),
            sources_path,
        )
        console.print(f"Created sources: {sources_path} (empty)")

    workspace.mkdir(parents=True, exist_ok=True)
    console.print(f"Created workspace: {workspace}")

    console.print("\n[bold]Testing database connection...[/bold]")
    db_config = Config(config_path).get_db_config()

    if not validate_connection(db_config):
        console.print(
            "[red]Database connection failed![/red]\n"
            "Please ensure Postgres is running and credentials are correct.\n"
            "Set the password via environment variable: "
            "[bold]export NEWSCURATOR_DB_PASSWORD=your_password[/bold]"
        )
        raise typer.Exit(1)

    console.print("[bold]Initializing database schema...[/bold]")
    try:
        init_database(db_config)
    except Exception as e:
        console.print(f"[red]Failed to initialize database: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        Panel(
            f"[green]News Curator initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Sources: {sources_path}\n"
            f"Workspace: {workspace}\n\n"
            f"Next steps:\n"
            f"1. Install the browser: [bold]playwright install chromium[/bold]\n"
            f"2. Run a scan: [bold]newscurator fetch[/bold]\n"
            f"3. Read the news: [bold]newscurator news[/bold]",
            style="green",
        )
    )
