"""Source extraction: RSS feeds and browser-scraped listing pages."""

from .browser import BrowserSession
from .cache import FetchCache
from .models import (
    CacheEntry,
    CompleteScanResult,
    FeedResult,
    NormalizedArticle,
    RawArticle,
    ScanResult,
)
from .rss_fetcher import RSSFetcher
from .scraper import WebScraper
from .strategies import ExtractionRegistry, SourceFetchError, strategy_name

__all__ = [
    "BrowserSession",
    "CacheEntry",
    "CompleteScanResult",
    "ExtractionRegistry",
    "FeedResult",
    "FetchCache",
    "NormalizedArticle",
    "RSSFetcher",
    "RawArticle",
    "ScanResult",
    "SourceFetchError",
    "WebScraper",
    "strategy_name",
]
