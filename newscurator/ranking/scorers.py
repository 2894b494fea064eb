"""Individual scoring components for curation."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

import pendulum

from ..config import SourceCatalog
from ..models import Category, NewsItem


class BaseScorer(ABC):
    """Base class for scoring components."""

    @abstractmethod
    def score(self, article: NewsItem, category: Category) -> float:
        """
        Score an article from 0.0 to 1.0.

        Args:
            article: Stored article
            category: Category being curated

        Returns:
            Score between 0.0 and 1.0
        """


class FreshnessScorer(BaseScorer):
    """Step-function decay on article age."""

    # (max age in hours, score), checked in order
    STEPS = ((24, 1.0), (48, 0.7), (168, 0.4))
    STALE_SCORE = 0.1

    def __init__(self, now: Optional[datetime] = None) -> None:
        """
        Initialize freshness scorer.

        Args:
            now: Reference time; defaults to the current UTC time
        """
        self.now = now

    def age_hours(self, published_at: datetime) -> float:
        # Naive timestamps are taken as UTC.
        now = pendulum.instance(self.now) if self.now else pendulum.now("UTC")
        return (now - pendulum.instance(published_at)).total_seconds() / 3600

    def score(self, article: NewsItem, category: Category) -> float:
        """Score based on publication date."""
        age = self.age_hours(article.published_at)
        for max_age, step_score in self.STEPS:
            if age <= max_age:
                return step_score
        return self.STALE_SCORE


class SourcePriorityScorer(BaseScorer):
    """1 / (1 + rank) of the source in its category list."""

    UNKNOWN_SOURCE_SCORE = 0.1

    def __init__(self, catalog: SourceCatalog) -> None:
        self.catalog = catalog

    def score(self, article: NewsItem, category: Category) -> float:
        """Score based on configured source order."""
        rank = self.catalog.priority_rank(article.source, category)
        if rank is None:
            return self.UNKNOWN_SOURCE_SCORE
        return 1.0 / (1 + rank)
