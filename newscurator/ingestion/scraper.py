"""Browser-based scraping of listing pages."""

from typing import List

from rich.console import Console

from ..config import SourceConfig
from ..models import Category
from .browser import BrowserSession
from .extractors import extract_articles
from .models import NormalizedArticle, RawArticle
from .normalize import normalize_article
from .site_configs import SiteConfig, site_config_for
from .title_repair import repair_title_if_generic

console = Console()


class WebScraper:
    """Scrape a source's listing page with its site strategy."""

    def __init__(
        self,
        browser: BrowserSession,
        navigation_timeout: float = 30.0,
        repair_timeout: float = 15.0,
    ) -> None:
        self.browser = browser
        self.navigation_timeout = navigation_timeout
        self.repair_timeout = repair_timeout

    async def extract_listing(self, url: str, source_name: str, config: SiteConfig) -> List[RawArticle]:
        """Render the listing page and extract raw articles from it."""

        async def read_listing(page) -> List[RawArticle]:
            await page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout * 1000)
            if config.settle_delay:
                await page.wait_for_timeout(config.settle_delay * 1000)
            html = await page.content()
            return extract_articles(html, page.url or url, config, source_name)

        return await self.browser.with_page(read_listing)

    async def scrape(self, source: SourceConfig, category: Category) -> List[NormalizedArticle]:
        """
        Scrape one source. Errors propagate to the caller.

        Title repair runs as separate queued page visits after the listing
        page is done, never inside it.
        """
        config = site_config_for(source.url)
        console.print(f"[dim]Scraping {source.name} with '{config.name}' strategy[/dim]")

        raw_articles = await self.extract_listing(source.url, source.name, config)

        if config.repair_titles:
            repaired = []
            for article in raw_articles:
                repaired.append(
                    await repair_title_if_generic(
                        article, self.browser, config, timeout=self.repair_timeout
                    )
                )
            raw_articles = repaired

        articles = []
        for raw in raw_articles:
            normalized = normalize_article(raw, category)
            if normalized is not None:
                articles.append(normalized)
        return articles
