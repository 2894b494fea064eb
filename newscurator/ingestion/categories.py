"""Feed category tags and category-filter matching.

Feeds encode entry categories in several shapes depending on the format and
the parser path they went through:

* a plain string: ``"AI"``
* a mapping with a text node: ``{"_": "AI"}`` or ``{"text": "AI"}``
* a mapping with a ``term`` attribute: ``{"term": "AI", "scheme": ...}``
* a mapping with nested attributes: ``{"$": {"term": "AI"}}``

:func:`category_label` reduces any of them to a single label (or ``None``),
so filtering never has to care which shape it was handed.
"""

from collections.abc import Mapping
from typing import Any, Iterable, List, Optional


def category_label(tag: Any) -> Optional[str]:
    """Return the label of a category tag, or None for unknown shapes."""
    if isinstance(tag, str):
        label = tag.strip()
        return label or None

    if isinstance(tag, Mapping):
        for key in ("_", "text", "term"):
            value = tag.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
        nested = tag.get("$")
        if isinstance(nested, Mapping):
            value = nested.get("term")
            if isinstance(value, str) and value.strip():
                return value.strip()

    return None


def category_labels(tags: Optional[Iterable[Any]]) -> List[str]:
    """Labels of every recognisable tag, in feed order."""
    labels = []
    for tag in tags or []:
        label = category_label(tag)
        if label is not None:
            labels.append(label)
    return labels


def matches_category_filter(tags: Optional[Iterable[Any]], category_filter: str) -> bool:
    """Whether any tag equals the filter, ignoring case."""
    wanted = category_filter.strip().lower()
    return any(label.lower() == wanted for label in category_labels(tags))
