"""Text cleanup, truncation and best-effort date parsing."""

import re
from datetime import datetime
from typing import Optional, Sequence

import pendulum

from ..models import Category
from .models import NormalizedArticle, RawArticle

SUMMARY_MAX_LENGTH = 100

_WHITESPACE = re.compile(r"\s+")
_DATE_PREFIX = re.compile(r"^(Posted|Published|Updated)\s+", re.IGNORECASE)
_DATE_PUNCTUATION = re.compile(r"[,.]")

# (pattern, strptime formats), tried in order; the first match that parses wins.
DATE_PATTERNS = [
    (re.compile(r"\d{4}-\d{2}-\d{2}"), ("%Y-%m-%d",)),
    (re.compile(r"[A-Za-z]+\.?\s+\d{1,2},?\s+\d{4}"), ("%B %d %Y", "%b %d %Y")),
    (re.compile(r"\d{1,2}\s+[A-Za-z]+\.?\s+\d{4}"), ("%d %B %Y", "%d %b %Y")),
    (re.compile(r"\d{1,2}/\d{1,2}/\d{4}"), ("%m/%d/%Y",)),
]


def clean_text(text: Optional[str]) -> str:
    """Collapse newlines, tabs and runs of spaces into single spaces."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def truncate_text(text: str, max_length: int = SUMMARY_MAX_LENGTH) -> str:
    """Cut text to max_length, ending in '...' when anything was dropped."""
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."


def _parse_with_formats(text: str, formats: Sequence[str]) -> Optional[datetime]:
    text = clean_text(_DATE_PUNCTUATION.sub(" ", text))
    for fmt in formats:
        try:
            return pendulum.instance(datetime.strptime(text, fmt), tz="UTC")
        except ValueError:
            continue
    return None


def _parse_any(text: str) -> Optional[datetime]:
    try:
        parsed = pendulum.parse(text, strict=False)
    except (ValueError, OverflowError, TypeError):
        return None
    if not isinstance(parsed, datetime):
        return None
    return pendulum.instance(parsed).in_timezone("UTC")


def parse_date(date_str: Optional[str], now: Optional[datetime] = None) -> datetime:
    """
    Parse a scraped date string.

    Tries ISO ``YYYY-MM-DD``, ``Month DD, YYYY``, ``DD Month YYYY`` and
    ``MM/DD/YYYY`` substrings, then the whole string. Never raises: an
    unparseable value yields the current time.
    """
    fallback = now or pendulum.now("UTC")
    if not date_str:
        return fallback

    cleaned = _DATE_PREFIX.sub("", date_str.strip()).strip()
    for pattern, formats in DATE_PATTERNS:
        match = pattern.search(cleaned)
        if match:
            parsed = _parse_with_formats(match.group(0), formats)
            if parsed is not None:
                return parsed

    if cleaned:
        parsed = _parse_any(cleaned)
        if parsed is not None:
            return parsed
    return fallback


def looks_like_date(text: str) -> bool:
    """Whether text contains an ISO or ``Month DD, YYYY`` date."""
    return any(pattern.search(text) for pattern, _ in DATE_PATTERNS[:2])


def normalize_article(raw: RawArticle, category: Category) -> Optional[NormalizedArticle]:
    """Clean a raw article; returns None when title or URL ends up empty."""
    title = clean_text(raw.title)
    url = (raw.url or "").strip()
    if not title or not url:
        return None

    if raw.published_at is not None:
        published_at = pendulum.instance(raw.published_at).in_timezone("UTC")
    else:
        published_at = parse_date(raw.published_at_raw)

    return NormalizedArticle(
        title=title,
        summary=truncate_text(clean_text(raw.summary_raw)),
        url=url,
        published_at=published_at,
        category=category,
        source=raw.source_name,
    )
