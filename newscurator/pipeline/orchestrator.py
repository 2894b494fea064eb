"""Scan orchestration: sources -> extraction -> dedup -> insert."""

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

import pendulum
from rich.console import Console
from rich.table import Table

from ..config import ScrapingConfig, SourceCatalog, SourceConfig
from ..db.repository import ArticleRepository
from ..ingestion import (
    BrowserSession,
    CompleteScanResult,
    ExtractionRegistry,
    FetchCache,
    NormalizedArticle,
    RSSFetcher,
    ScanResult,
    WebScraper,
)
from ..models import Category

console = Console()


class SourceNotFoundError(LookupError):
    """No category lists a source with the requested name."""

    def __init__(self, source_name: str) -> None:
        super().__init__(f'Source "{source_name}" not found')
        self.source_name = source_name


class ScanContext:
    """
    Resources owned by exactly one scan: the fetch cache and the browser.

    :meth:`open` loads the cache from disk; :meth:`close` writes it back,
    shuts the browser down and drops the in-memory cache.
    """

    def __init__(self, cache: FetchCache, browser: BrowserSession, registry: ExtractionRegistry) -> None:
        self.cache = cache
        self.browser = browser
        self.registry = registry

    def open(self) -> None:
        self.cache.load()

    async def close(self) -> None:
        try:
            self.cache.save()
        finally:
            await self.browser.close()
            self.cache.clear()


class NewsFetcher:
    """Runs full and single-source scans against an article store."""

    def __init__(
        self,
        store: ArticleRepository,
        load_catalog: Callable[[], SourceCatalog],
        cache_path: Path,
        scraping: Optional[ScrapingConfig] = None,
        browser_launcher: Optional[Callable[[], Awaitable[Any]]] = None,
        rss_fetcher: Optional[RSSFetcher] = None,
    ) -> None:
        """
        Initialize the fetcher.

        Args:
            store: Article store used for dedup and inserts
            load_catalog: Returns the source catalog; called once per scan
            cache_path: JSON file backing the scrape cache
            scraping: Timeouts, pacing and cache lifetime
            browser_launcher: Replacement for launching Chromium
            rss_fetcher: Replacement RSS fetcher
        """
        self.store = store
        self.load_catalog = load_catalog
        self.cache_path = cache_path
        self.scraping = scraping or ScrapingConfig()
        self.browser_launcher = browser_launcher
        self.rss_fetcher = rss_fetcher or RSSFetcher(
            timeout=self.scraping.rss_timeout,
            max_items=self.scraping.rss_max_items,
        )

    def new_context(self) -> ScanContext:
        """Fresh cache and browser for one scan."""
        cache = FetchCache(self.cache_path, ttl=self.scraping.cache_ttl_hours * 3600)
        browser = BrowserSession(
            request_delay=self.scraping.request_delay,
            headless=self.scraping.headless,
            launcher=self.browser_launcher,
        )
        scraper = WebScraper(
            browser,
            navigation_timeout=self.scraping.navigation_timeout,
            repair_timeout=self.scraping.repair_timeout,
        )
        registry = ExtractionRegistry(self.rss_fetcher, scraper, cache)
        return ScanContext(cache, browser, registry)

    def store_new_articles(self, articles: List[NormalizedArticle]) -> int:
        """Insert articles whose URL is not stored yet; returns the insert count."""
        inserted = 0
        for article in articles:
            if self.store.find_article_by_url(article.url) is None:
                self.store.insert_article(article)
                inserted += 1
        return inserted

    async def process_source(
        self,
        context: ScanContext,
        source: SourceConfig,
        category_name: str,
        category: Category,
    ) -> ScanResult:
        """Fetch and store one source; any failure is recorded, not raised."""
        result = ScanResult(source_name=source.name, category=category_name)
        try:
            articles = await context.registry.fetch(source, category)
            result.new_articles = self.store_new_articles(articles)
            if result.new_articles:
                console.print(f"[green]  {result.new_articles} new from {source.name}[/green]")
        except Exception as e:
            result.error = str(e) or type(e).__name__
            console.print(f"[red]Error fetching {source.name}: {result.error}[/red]")
        return result

    async def fetch_all_news(self) -> CompleteScanResult:
        """Scan every source of every category, in configured order."""
        scan = CompleteScanResult(scan_started_at=pendulum.now("UTC"))
        context = self.new_context()
        try:
            context.open()
            catalog = self.load_catalog()

            for category_name, category, sources in catalog:
                for source in sources:
                    scan.add(await self.process_source(context, source, category_name, category))

            scan.scan_completed_at = pendulum.now("UTC")
            self.store.set_last_refresh(scan.scan_completed_at)
            console.print(
                f"[bold]News fetching completed:[/bold] {scan.total_new_articles} new articles "
                f"from {scan.processed_sources} sources"
            )
            return scan
        finally:
            await context.close()

    async def fetch_single_source(self, source_name: str) -> ScanResult:
        """Scan one source found by name; raises SourceNotFoundError if absent."""
        context = self.new_context()
        try:
            context.open()
            catalog = self.load_catalog()

            match = catalog.find(source_name)
            if match is None:
                raise SourceNotFoundError(source_name)
            category_name, source = match

            result = await self.process_source(
                context, source, category_name, catalog.category_for(category_name)
            )
            console.print(f"[bold]News fetching completed for {source_name}[/bold]")
            return result
        finally:
            await context.close()

    def fetch_all_news_sync(self) -> CompleteScanResult:
        """Synchronous wrapper for fetch_all_news."""
        return asyncio.run(self.fetch_all_news())

    def fetch_single_source_sync(self, source_name: str) -> ScanResult:
        """Synchronous wrapper for fetch_single_source."""
        return asyncio.run(self.fetch_single_source(source_name))


def print_scan_summary(scan: CompleteScanResult) -> None:
    """Print per-category scan results."""
    table = Table(title="Scan Results")
    table.add_column("Category", style="magenta")
    table.add_column("Source", style="cyan")
    table.add_column("New", style="green", justify="right")
    table.add_column("Error", style="red")

    grouped: Dict[str, List[ScanResult]] = {}
    for result in scan.results:
        grouped.setdefault(result.category, []).append(result)

    for category_name, results in grouped.items():
        for index, result in enumerate(results):
            table.add_row(
                category_name if index == 0 else "",
                result.source_name,
                "-" if result.error else str(result.new_articles),
                result.error or "",
            )
        table.add_section()

    console.print(table)

    duration = ""
    if scan.scan_completed_at is not None:
        seconds = (scan.scan_completed_at - scan.scan_started_at).total_seconds()
        duration = f" in {seconds:.1f}s"
    console.print(
        f"  Sources processed: {scan.processed_sources}{duration}\n"
        f"  New articles: [green]{scan.total_new_articles}[/green]\n"
        f"  Failed sources: [red]{len(scan.failed)}[/red]"
    )
