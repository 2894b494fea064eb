"""Read path: curated news per category."""

from datetime import datetime
from typing import Callable, List, Optional

from pydantic import BaseModel, Field

from ..config import SourceCatalog
from ..db.repository import ArticleRepository
from ..models import Category, NewsItem
from .curator import ArticleCurator

# Candidates fetched per requested article.
CANDIDATE_MULTIPLIER = 3

# Fixed per-category caps for the combined view.
ALL_NEWS_LIMITS = {
    Category.TECH_PRODUCT: 15,
    Category.RESEARCH_SCIENCE: 12,
    Category.BUSINESS_SOCIETY: 12,
}


class AllNews(BaseModel):
    """Curated articles for every category."""

    tech_news: List[NewsItem] = Field(default_factory=list)
    research_news: List[NewsItem] = Field(default_factory=list)
    business_news: List[NewsItem] = Field(default_factory=list)


class NewsReader:
    """Serve curated article lists from the store."""

    def __init__(
        self,
        store: ArticleRepository,
        load_catalog: Callable[[], SourceCatalog],
        curator_factory: Callable[[SourceCatalog], ArticleCurator] = ArticleCurator,
    ) -> None:
        self.store = store
        self.load_catalog = load_catalog
        self.curator_factory = curator_factory

    def _curator(self) -> ArticleCurator:
        return self.curator_factory(self.load_catalog())

    def get_news_by_category(
        self,
        category: Category,
        limit: int = 10,
        curator: Optional[ArticleCurator] = None,
    ) -> List[NewsItem]:
        """Curate from the ``3 * limit`` most recent articles of a category."""
        candidates = self.store.list_articles_by_category(category, limit * CANDIDATE_MULTIPLIER)
        return (curator or self._curator()).curate(candidates, category, limit)

    def get_all_news(self) -> AllNews:
        """Curated lists for all three categories (15/12/12)."""
        curator = self._curator()
        return AllNews(
            tech_news=self.get_news_by_category(
                Category.TECH_PRODUCT, ALL_NEWS_LIMITS[Category.TECH_PRODUCT], curator
            ),
            research_news=self.get_news_by_category(
                Category.RESEARCH_SCIENCE, ALL_NEWS_LIMITS[Category.RESEARCH_SCIENCE], curator
            ),
            business_news=self.get_news_by_category(
                Category.BUSINESS_SOCIETY, ALL_NEWS_LIMITS[Category.BUSINESS_SOCIETY], curator
            ),
        )

    def last_refresh(self) -> Optional[datetime]:
        return self.store.get_last_refresh()
