"""Extraction strategy selection for a configured source."""

from typing import List

from rich.console import Console

from ..config import SourceConfig
from ..models import Category
from .cache import FetchCache
from .models import NormalizedArticle
from .normalize import normalize_article
from .rss_fetcher import RSSFetcher
from .scraper import WebScraper
from .site_configs import site_config_for

console = Console()


class SourceFetchError(Exception):
    """A source could not be read; the message ends up in its scan result."""


def strategy_name(source: SourceConfig) -> str:
    """``rss``, a named site strategy, or ``generic``."""
    if source.is_rss:
        return "rss"
    return site_config_for(source.url).name


class ExtractionRegistry:
    """Route each source to the RSS reader or the (cached) web scraper."""

    def __init__(self, rss_fetcher: RSSFetcher, scraper: WebScraper, cache: FetchCache) -> None:
        self.rss_fetcher = rss_fetcher
        self.scraper = scraper
        self.cache = cache

    async def fetch(self, source: SourceConfig, category: Category) -> List[NormalizedArticle]:
        """Produce normalized articles for a source or raise."""
        if source.is_rss:
            return await self._fetch_rss(source, category)
        return await self._fetch_scraped(source, category)

    async def _fetch_rss(self, source: SourceConfig, category: Category) -> List[NormalizedArticle]:
        console.print(f"Fetching RSS news from [cyan]{source.name}[/cyan]...")
        result = await self.rss_fetcher.fetch_feed(source)
        if not result.success:
            raise SourceFetchError(result.error or "RSS fetch failed")

        articles = []
        for item in result.items:
            normalized = normalize_article(item, category)
            if normalized is not None:
                articles.append(normalized)
        return articles

    async def _fetch_scraped(self, source: SourceConfig, category: Category) -> List[NormalizedArticle]:
        cached = self.cache.get(source.url)
        if cached is not None:
            console.print(f"[green]Using cached data for {source.name}[/green]")
            return cached

        console.print(f"Scraping web content from [cyan]{source.name}[/cyan]...")
        articles = await self.scraper.scrape(source, category)
        self.cache.put(source.url, articles)
        console.print(f"[green]Scraped {len(articles)} articles from {source.name}[/green]")
        return articles
