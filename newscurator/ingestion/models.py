"""Data models for ingestion."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import Category


class RawArticle(BaseModel):
    """Article as extracted from a feed entry or a listing page."""

    title: str = Field(..., description="Article title, uncleaned")
    url: str = Field(..., description="Absolute article URL")
    published_at_raw: Optional[str] = Field(None, description="Date text as found in the source")
    published_at: Optional[datetime] = Field(
        None, description="Structured timestamp when the source provides one"
    )
    summary_raw: str = Field("", description="Summary text, uncleaned")
    source_name: str = Field(..., description="Source name")


class NormalizedArticle(BaseModel):
    """Cleaned article ready to be stored."""

    title: str = Field(..., description="Whitespace-collapsed title")
    summary: str = Field("", description="Excerpt of at most 100 characters")
    url: str = Field(..., description="Absolute article URL")
    published_at: datetime = Field(..., description="Best-effort publication timestamp")
    category: Category = Field(..., description="Topical category")
    source: str = Field(..., description="Source name")


class FeedResult(BaseModel):
    """Result of fetching an RSS feed."""

    source_name: str = Field(..., description="Source name")
    source_url: str = Field(..., description="RSS feed URL")
    success: bool = Field(..., description="Whether fetch was successful")
    items: List[RawArticle] = Field(default_factory=list, description="Accepted feed items")
    error: Optional[str] = Field(None, description="Error message if failed")
    item_count: int = Field(0, description="Number of items accepted")


class CacheEntry(BaseModel):
    """Scrape result cached under a source listing URL."""

    articles: List[NormalizedArticle] = Field(default_factory=list)
    timestamp: float = Field(..., description="Write time, seconds since the epoch")


class ScanResult(BaseModel):
    """Outcome of processing one source during a scan."""

    source_name: str = Field(..., description="Source name")
    category: str = Field(..., description="Category name as configured")
    new_articles: int = Field(0, description="Articles inserted by this scan")
    error: Optional[str] = Field(None, description="Failure message, if the source failed")


class CompleteScanResult(BaseModel):
    """Telemetry for a full or single-source scan."""

    results: List[ScanResult] = Field(default_factory=list)
    total_new_articles: int = Field(0)
    processed_sources: int = Field(0)
    scan_started_at: datetime = Field(...)
    scan_completed_at: Optional[datetime] = Field(None)

    def add(self, result: ScanResult) -> None:
        """Record one source outcome."""
        self.results.append(result)
        self.processed_sources += 1
        self.total_new_articles += result.new_articles

    @property
    def failed(self) -> List[ScanResult]:
        return [r for r in self.results if r.error]
