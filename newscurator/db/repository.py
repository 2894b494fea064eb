"""Article store contract used by fetching and curation."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..ingestion.models import NormalizedArticle
from ..models import Category, NewsItem


class ArticleRepository(ABC):
    """What the curator needs from persistent storage."""

    @abstractmethod
    def find_article_by_url(self, url: str) -> Optional[NewsItem]:
        """Existing record with exactly this URL, if any."""

    @abstractmethod
    def insert_article(self, article: NormalizedArticle) -> NewsItem:
        """Store a new article and return the stored record."""

    @abstractmethod
    def list_articles_by_category(self, category: Category, limit: int) -> List[NewsItem]:
        """Most recent articles of a category, newest ``published_at`` first."""

    @abstractmethod
    def get_last_refresh(self) -> Optional[datetime]:
        """When the last full scan completed."""

    @abstractmethod
    def set_last_refresh(self, timestamp: datetime) -> None:
        """Record the completion time of a full scan."""
