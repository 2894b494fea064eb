"""RSS feed fetcher."""

import calendar
from datetime import datetime, timezone
from typing import Any, List, Optional

import feedparser
import httpx
from bs4 import BeautifulSoup
from rich.console import Console

from ..config import SourceConfig
from .categories import category_labels, matches_category_filter
from .models import FeedResult, RawArticle

console = Console()


def _plain_text(html: str) -> str:
    """Strip markup from a feed summary/content field."""
    if not html:
        return ""
    if "<" not in html:
        return html
    return BeautifulSoup(html, "html.parser").get_text(" ")


def _entry_published(entry: Any) -> Optional[datetime]:
    """feedparser's structured timestamps are UTC time tuples."""
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
            except (OverflowError, ValueError):
                continue
    return None


def _entry_summary(entry: Any) -> str:
    snippet = _plain_text(entry.get("summary") or "")
    if snippet.strip():
        return snippet
    for content in entry.get("content") or []:
        value = _plain_text(content.get("value") or "")
        if value.strip():
            return value
    return entry.get("title") or ""


class RSSFetcher:
    """Fetch and parse RSS feeds."""

    def __init__(self, timeout: float = 30.0, max_items: int = 15) -> None:
        """Initialize RSS fetcher."""
        self.timeout = timeout
        self.max_items = max_items

    def parse_entries(self, feed_text: str, source: SourceConfig) -> List[RawArticle]:
        """
        Turn feed XML into raw articles.

        Only the first ``max_items`` entries are considered. Entries without
        a title, link or publication date are dropped, and when the source
        has a category filter an entry must carry a matching tag.
        """
        feed = feedparser.parse(feed_text)
        if feed.bozo and not feed.entries:
            raise ValueError(f"Invalid RSS feed: {feed.bozo_exception}")

        items = []
        for entry in feed.entries[: self.max_items]:
            title = entry.get("title")
            link = entry.get("link")
            published_raw = entry.get("published") or entry.get("updated")
            if not title or not link or not published_raw:
                continue

            if source.category_filter:
                tags = entry.get("tags") or []
                if not matches_category_filter(tags, source.category_filter):
                    console.print(
                        f"[dim]  Skipping '{title}' - no '{source.category_filter}' "
                        f"in {category_labels(tags)}[/dim]"
                    )
                    continue
                console.print(
                    f"[dim]  Including '{title}' - matches '{source.category_filter}'[/dim]"
                )

            items.append(
                RawArticle(
                    title=title,
                    url=link,
                    published_at_raw=published_raw,
                    published_at=_entry_published(entry),
                    summary_raw=_entry_summary(entry),
                    source_name=source.name,
                )
            )
        return items

    async def fetch_feed(self, source: SourceConfig) -> FeedResult:
        """Fetch and parse a single RSS feed."""
        feed_url = source.feed or source.url
        try:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(feed_url)
                response.raise_for_status()

            items = self.parse_entries(response.text, source)
            return FeedResult(
                source_name=source.name,
                source_url=feed_url,
                success=True,
                items=items,
                item_count=len(items),
            )

        except httpx.HTTPError as e:
            return FeedResult(
                source_name=source.name,
                source_url=feed_url,
                success=False,
                error=f"HTTP error: {e}",
            )
        except ValueError as e:
            return FeedResult(
                source_name=source.name,
                source_url=feed_url,
                success=False,
                error=str(e),
            )
