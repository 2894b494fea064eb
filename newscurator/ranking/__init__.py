"""Article scoring and curation."""

from .curator import ArticleCurator, ScoredArticle
from .news import ALL_NEWS_LIMITS, AllNews, NewsReader
from .scorers import FreshnessScorer, SourcePriorityScorer

__all__ = [
    "ALL_NEWS_LIMITS",
    "AllNews",
    "ArticleCurator",
    "FreshnessScorer",
    "NewsReader",
    "ScoredArticle",
    "SourcePriorityScorer",
]
