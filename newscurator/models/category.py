"""Topical categories partitioning sources and curated output."""

from enum import Enum
from typing import Optional


class Category(str, Enum):
    """Fixed topical buckets."""

    TECH_PRODUCT = "TECH_PRODUCT"
    RESEARCH_SCIENCE = "RESEARCH_SCIENCE"
    BUSINESS_SOCIETY = "BUSINESS_SOCIETY"

    @property
    def display_name(self) -> str:
        """Name used as the category key in sources.yaml."""
        return _DISPLAY_NAMES[self]

    @classmethod
    def from_display_name(cls, name: str) -> Optional["Category"]:
        """Resolve a sources.yaml category key, or None if unknown."""
        for category, display in _DISPLAY_NAMES.items():
            if display == name:
                return category
        return None

    @classmethod
    def from_slug(cls, slug: str) -> Optional["Category"]:
        """Resolve a short URL/CLI slug such as ``tech`` or ``research-science``."""
        return _SLUGS.get(slug.strip().lower())


_DISPLAY_NAMES = {
    Category.TECH_PRODUCT: "Tech & Product News",
    Category.RESEARCH_SCIENCE: "Research & Science",
    Category.BUSINESS_SOCIETY: "Business & Society",
}

_SLUGS = {
    "tech": Category.TECH_PRODUCT,
    "tech-product": Category.TECH_PRODUCT,
    "research": Category.RESEARCH_SCIENCE,
    "research-science": Category.RESEARCH_SCIENCE,
    "business": Category.BUSINESS_SOCIETY,
    "business-society": Category.BUSINESS_SOCIETY,
}
