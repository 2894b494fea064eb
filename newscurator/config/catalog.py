"""Ordered, per-category source catalog."""

from typing import Dict, Iterator, List, Optional, Tuple

from rich.console import Console

from ..models import Category
from .models import SourceConfig

console = Console()


class SourceCatalog:
    """
    Category name -> ordered source list, as written in sources.yaml.

    List order is source priority (most trusted first) and is never re-sorted.
    """

    def __init__(self, categories: Optional[Dict[str, List[SourceConfig]]] = None) -> None:
        self._categories: Dict[str, List[SourceConfig]] = dict(categories or {})

    def __iter__(self) -> Iterator[Tuple[str, Category, List[SourceConfig]]]:
        for name, sources in self._categories.items():
            yield name, self.category_for(name), sources

    def __len__(self) -> int:
        return sum(len(sources) for sources in self._categories.values())

    @property
    def category_names(self) -> List[str]:
        return list(self._categories)

    def as_dict(self) -> Dict[str, List[SourceConfig]]:
        return {name: list(sources) for name, sources in self._categories.items()}

    @staticmethod
    def category_for(name: str) -> Category:
        """Map a sources.yaml key to its category; unknown keys fall back to tech."""
        category = Category.from_display_name(name)
        if category is None:
            console.print(
                f"[yellow]Unknown category '{name}', treating it as "
                f"{Category.TECH_PRODUCT.display_name}[/yellow]"
            )
            return Category.TECH_PRODUCT
        return category

    def sources_for(self, category: Category) -> List[SourceConfig]:
        """Configured sources of a category in priority order."""
        return list(self._categories.get(category.display_name, []))

    def find(self, source_name: str) -> Optional[Tuple[str, SourceConfig]]:
        """Linear scan over all categories for a source by exact name."""
        for category_name, sources in self._categories.items():
            for source in sources:
                if source.name == source_name:
                    return category_name, source
        return None

    def priority_rank(self, source_name: str, category: Category) -> Optional[int]:
        """Zero-based position of a source in its category list, or None."""
        for index, source in enumerate(self.sources_for(category)):
            if source.name == source_name:
                return index
        return None
