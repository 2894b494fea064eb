"""Source-diverse selection of the best articles per category."""

import math
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from ..config import SourceCatalog
from ..models import Category, NewsItem
from .scorers import FreshnessScorer, SourcePriorityScorer

FRESHNESS_WEIGHT = 0.6
PRIORITY_WEIGHT = 0.4

# Sources above this priority (top ~4 of a category) may contribute two articles.
HIGH_PRIORITY_THRESHOLD = 0.2
HIGH_PRIORITY_CAP = 2
DEFAULT_SOURCE_CAP = 1

# Share of max_count filled before the per-source cap applies.
QUOTA_FILL_RATIO = 0.8


class ScoredArticle(BaseModel):
    """Article with its curation scores; never leaves the curator."""

    article: NewsItem
    total_score: float = Field(..., ge=0.0, le=1.0)
    freshness_score: float = Field(..., ge=0.0, le=1.0)
    priority_score: float = Field(..., ge=0.0, le=1.0)

    @property
    def source_cap(self) -> int:
        if self.priority_score > HIGH_PRIORITY_THRESHOLD:
            return HIGH_PRIORITY_CAP
        return DEFAULT_SOURCE_CAP


class ArticleCurator:
    """Score and select articles for one category."""

    def __init__(
        self,
        catalog: SourceCatalog,
        freshness_scorer: Optional[FreshnessScorer] = None,
    ) -> None:
        """
        Initialize curator.

        Args:
            catalog: Source catalog; list order gives source priority
            freshness_scorer: Override for a fixed reference time
        """
        self.catalog = catalog
        self.freshness_scorer = freshness_scorer or FreshnessScorer()
        self.priority_scorer = SourcePriorityScorer(catalog)

    def score_article(self, article: NewsItem, category: Category) -> ScoredArticle:
        """Score a single article."""
        freshness = self.freshness_scorer.score(article, category)
        priority = self.priority_scorer.score(article, category)
        return ScoredArticle(
            article=article,
            total_score=FRESHNESS_WEIGHT * freshness + PRIORITY_WEIGHT * priority,
            freshness_score=freshness,
            priority_score=priority,
        )

    def rank(self, articles: List[NewsItem], category: Category) -> List[ScoredArticle]:
        """All candidates by score, highest first; ties keep input order."""
        scored = [self.score_article(article, category) for article in articles]
        # list.sort is stable
        scored.sort(key=lambda s: s.total_score, reverse=True)
        return scored

    def curate(self, articles: List[NewsItem], category: Category, max_count: int) -> List[NewsItem]:
        """
        Select up to ``max_count`` articles, spreading them across sources.

        Walking the ranked list, the first ``floor(0.8 * max_count)`` picks
        are taken regardless of source; after that a source may contribute at
        most 2 articles if it is high priority, otherwise 1. If the caps leave
        the result short, the remaining slots are filled from the skipped
        candidates in score order.
        """
        if max_count <= 0:
            return []

        quota_floor = math.floor(max_count * QUOTA_FILL_RATIO)
        per_source: Dict[str, int] = {}
        selected: List[ScoredArticle] = []
        skipped: List[ScoredArticle] = []

        for candidate in self.rank(articles, category):
            if len(selected) >= max_count:
                break
            source = candidate.article.source
            count = per_source.get(source, 0)
            if count < candidate.source_cap or len(selected) < quota_floor:
                selected.append(candidate)
                per_source[source] = count + 1
            else:
                skipped.append(candidate)

        for candidate in skipped:
            if len(selected) >= max_count:
                break
            selected.append(candidate)

        return [s.article for s in selected]
