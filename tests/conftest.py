"""Shared fixtures: an in-memory article store and a scriptable fake browser."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from newscurator.config import SourceCatalog, SourceConfig
from newscurator.db.repository import ArticleRepository
from newscurator.ingestion.models import NormalizedArticle
from newscurator.models import Category, NewsItem

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class InMemoryArticleStore(ArticleRepository):
    """Article store backed by a dict keyed by URL."""

    def __init__(self) -> None:
        self.items: Dict[str, NewsItem] = {}
        self.last_refresh: Optional[datetime] = None
        self.insert_calls = 0

    def find_article_by_url(self, url: str) -> Optional[NewsItem]:
        return self.items.get(url)

    def insert_article(self, article: NormalizedArticle) -> NewsItem:
        self.insert_calls += 1
        item = NewsItem(id=len(self.items) + 1, **article.model_dump())
        self.items.setdefault(article.url, item)
        return self.items[article.url]

    def list_articles_by_category(self, category: Category, limit: int) -> List[NewsItem]:
        matching = [item for item in self.items.values() if item.category == category]
        matching.sort(key=lambda item: item.published_at, reverse=True)
        return matching[:limit]

    def get_last_refresh(self) -> Optional[datetime]:
        return self.last_refresh

    def set_last_refresh(self, timestamp: datetime) -> None:
        self.last_refresh = timestamp


class FakePage:
    """Stands in for a Playwright page; serves HTML per URL."""

    def __init__(self, pages: Dict[str, str], failures: Dict[str, Exception]) -> None:
        self._pages = pages
        self._failures = failures
        self.url = ""
        self.goto_calls: List[tuple] = []
        self.waits: List[float] = []
        self.closed = False

    async def goto(self, url: str, wait_until: str = "load", timeout: float = 30000) -> None:
        self.goto_calls.append((url, wait_until, timeout))
        if url in self._failures:
            raise self._failures[url]
        self.url = url

    async def wait_for_timeout(self, timeout: float) -> None:
        self.waits.append(timeout)

    async def content(self) -> str:
        return self._pages.get(self.url, "<html><body></body></html>")

    async def close(self) -> None:
        self.closed = True


class FakeBrowserHandle:
    """Stands in for a launched Chromium; records opened pages."""

    def __init__(
        self,
        pages: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ) -> None:
        self.pages = pages or {}
        self.failures = failures or {}
        self.opened_pages: List[FakePage] = []
        self.closed = False

    async def new_page(self) -> FakePage:
        page = FakePage(self.pages, self.failures)
        self.opened_pages.append(page)
        return page

    async def close(self) -> None:
        self.closed = True


class FakeLauncher:
    """Counts launches and hands out a single FakeBrowserHandle."""

    def __init__(self, handle: FakeBrowserHandle) -> None:
        self.handle = handle
        self.launches = 0

    async def __call__(self) -> FakeBrowserHandle:
        self.launches += 1
        return self.handle


@pytest.fixture
def store() -> InMemoryArticleStore:
    return InMemoryArticleStore()


@pytest.fixture
def catalog() -> SourceCatalog:
    return SourceCatalog(
        {
            "Tech & Product News": [
                SourceConfig(name="Alpha", url="https://alpha.example/news"),
                SourceConfig(name="Beta", url="https://beta.example/news"),
                SourceConfig(name="Gamma", url="https://gamma.example/news"),
                SourceConfig(name="Delta", url="https://delta.example/news"),
                SourceConfig(name="Epsilon", url="https://epsilon.example/news"),
            ],
            "Research & Science": [
                SourceConfig(name="Lab", url="https://lab.example/blog"),
            ],
        }
    )


def make_item(
    title: str = "A headline",
    source: str = "Alpha",
    hours_old: float = 1.0,
    category: Category = Category.TECH_PRODUCT,
    url: Optional[str] = None,
) -> NewsItem:
    """Build a stored article published ``hours_old`` hours before NOW."""
    return NewsItem(
        title=title,
        summary="",
        url=url or f"https://{source.lower()}.example/{title.replace(' ', '-').lower()}",
        published_at=NOW - timedelta(hours=hours_old),
        category=category,
        source=source,
    )
