"""Article storage on PostgreSQL."""

from datetime import datetime
from typing import Any, Dict, List, Optional

import pendulum

from ..ingestion.models import NormalizedArticle
from ..models import Category, NewsItem
from .connection import get_connection
from .repository import ArticleRepository

LAST_REFRESH_KEY = "last_news_refresh"


class ArticleStorage(ArticleRepository):
    """Handle article storage, keyed by URL."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        """Initialize article storage."""
        self.db_config = db_config

    def find_article_by_url(self, url: str) -> Optional[NewsItem]:
        with get_connection(self.db_config) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT id, title, summary, url, published_at, category, source, created_at
                    FROM news_items
                    WHERE url = %s
                    LIMIT 1
                    """,
                    (url,),
                )
                row = cur.fetchone()
        return NewsItem(**row) if row else None

    def insert_article(self, article: NormalizedArticle) -> NewsItem:
        """
        Insert an article.

        A concurrent insert of the same URL is absorbed by the unique
        constraint; the existing row is returned in that case.
        """
        with get_connection(self.db_config) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO news_items (title, summary, url, published_at, category, source)
                    VALUES (%s, %s, %s, %s, %s, %s)
                    ON CONFLICT (url) DO NOTHING
                    RETURNING id, title, summary, url, published_at, category, source, created_at
                    """,
                    (
                        article.title,
                        article.summary,
                        article.url,
                        article.published_at,
                        article.category.value,
                        article.source,
                    ),
                )
                row = cur.fetchone()
                if row is None:
                    cur.execute(
                        """
                        SELECT id, title, summary, url, published_at, category, source, created_at
                        FROM news_items WHERE url = %s
                        """,
                        (article.url,),
                    )
                    row = cur.fetchone()
            conn.commit()
        return NewsItem(**row)

    def list_articles_by_category(self, category: Category, limit: int) -> List[NewsItem]:
        with get_connection(self.db_config) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    SELECT id, title, summary, url, published_at, category, source, created_at
                    FROM news_items
                    WHERE category = %s
                    ORDER BY published_at DESC
                    LIMIT %s
                    """,
                    (category.value, limit),
                )
                rows = cur.fetchall()
        return [NewsItem(**row) for row in rows]

    def get_last_refresh(self) -> Optional[datetime]:
        with get_connection(self.db_config) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    "SELECT value FROM app_metadata WHERE key = %s",
                    (LAST_REFRESH_KEY,),
                )
                row = cur.fetchone()
        if not row:
            return None
        return pendulum.parse(row["value"])

    def set_last_refresh(self, timestamp: datetime) -> None:
        with get_connection(self.db_config) as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO app_metadata (key, value)
                    VALUES (%s, %s)
                    ON CONFLICT (key) DO UPDATE SET
                        value = EXCLUDED.value,
                        updated_at = CURRENT_TIMESTAMP
                    """,
                    (LAST_REFRESH_KEY, timestamp.isoformat()),
                )
            conn.commit()
