"""Data models for the news curator."""

from .base import DBModel
from .category import Category
from .news_item import NewsItem

__all__ = ["Category", "DBModel", "NewsItem"]
