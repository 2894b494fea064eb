"""Tests for text cleanup, truncation and date parsing."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from newscurator.ingestion.models import RawArticle
from newscurator.ingestion.normalize import (
    clean_text,
    looks_like_date,
    normalize_article,
    parse_date,
    truncate_text,
)
from newscurator.models import Category
from tests.conftest import NOW


class TestCleanText:
    def test_collapses_whitespace(self) -> None:
        assert clean_text("  Hello\n\tworld   again ") == "Hello world again"

    def test_empty_values(self) -> None:
        assert clean_text("") == ""
        assert clean_text(None) == ""


class TestTruncateText:
    def test_short_text_unchanged(self) -> None:
        assert truncate_text("short", 100) == "short"

    def test_exact_length_unchanged(self) -> None:
        text = "x" * 100
        assert truncate_text(text) == text

    def test_long_text_cut_with_ellipsis(self) -> None:
        result = truncate_text("y" * 150)
        assert len(result) == 100
        assert result.endswith("...")
        assert result[:97] == "y" * 97


class TestParseDate:
    @pytest.mark.parametrize(
        "text",
        [
            "2024-03-05",
            "Published 2024-03-05",
            "March 5, 2024",
            "Mar 5, 2024",
            "5 March 2024",
            "03/05/2024",
            "Updated March 5, 2024",
        ],
    )
    def test_known_formats(self, text: str) -> None:
        parsed = parse_date(text, now=NOW)
        assert (parsed.year, parsed.month, parsed.day) == (2024, 3, 5)

    def test_iso_inside_longer_text(self) -> None:
        parsed = parse_date("Posted on 2023-12-31T10:00:00Z by staff", now=NOW)
        assert (parsed.year, parsed.month, parsed.day) == (2023, 12, 31)

    def test_unparseable_falls_back_to_now(self) -> None:
        assert parse_date("unknown", now=NOW) == NOW

    def test_empty_falls_back_to_now(self) -> None:
        assert parse_date("", now=NOW) == NOW
        assert parse_date(None, now=NOW) == NOW

    def test_never_raises_on_garbage(self) -> None:
        assert parse_date("13/45/2024", now=NOW) == NOW


class TestLooksLikeDate:
    def test_detects_dates(self) -> None:
        assert looks_like_date("2024-01-02")
        assert looks_like_date("Jan 2, 2024")

    def test_ignores_plain_text(self) -> None:
        assert not looks_like_date("Announcements")


class TestNormalizeArticle:
    def _raw(self, **overrides) -> RawArticle:
        data = {
            "title": "  Claude\n  ships   ",
            "url": "https://example.com/a",
            "published_at_raw": "2024-03-05",
            "summary_raw": "word " * 40,
            "source_name": "Example",
        }
        data.update(overrides)
        return RawArticle(**data)

    def test_cleans_fields(self) -> None:
        article = normalize_article(self._raw(), Category.TECH_PRODUCT)
        assert article is not None
        assert article.title == "Claude ships"
        assert len(article.summary) == 100
        assert article.summary.endswith("...")
        assert article.category == Category.TECH_PRODUCT
        assert article.source == "Example"
        assert article.published_at.date().isoformat() == "2024-03-05"

    def test_structured_timestamp_wins(self) -> None:
        stamp = datetime(2022, 1, 1, 8, 30, tzinfo=timezone.utc)
        article = normalize_article(
            self._raw(published_at=stamp, published_at_raw="garbage"), Category.TECH_PRODUCT
        )
        assert article is not None
        assert article.published_at == stamp

    def test_empty_title_rejected(self) -> None:
        assert normalize_article(self._raw(title=" \n "), Category.TECH_PRODUCT) is None

    def test_empty_url_rejected(self) -> None:
        assert normalize_article(self._raw(url=""), Category.TECH_PRODUCT) is None
