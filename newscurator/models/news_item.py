"""Persisted news item record."""

from datetime import datetime

from pydantic import Field

from .base import DBModel
from .category import Category


class NewsItem(DBModel):
    """A stored article, keyed by its URL."""

    title: str = Field(..., description="Cleaned article title")
    summary: str = Field("", description="Truncated excerpt")
    url: str = Field(..., description="Absolute article URL (dedup key)")
    published_at: datetime = Field(..., description="Publication timestamp")
    category: Category = Field(..., description="Topical category")
    source: str = Field(..., description="Configured source name")
