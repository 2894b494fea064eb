"""Tests for configuration and source catalog loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from newscurator.cli.init import create_default_sources
from newscurator.config import (
    Config,
    ConfigModel,
    SourceCatalog,
    load_config,
    load_sources,
    save_config,
    save_sources,
)
from newscurator.db.connection import build_conninfo
from newscurator.models import Category

SOURCES_YAML = """\
Tech & Product News:
  - name: OpenAI
    url: https://openai.com/news/
    feed: https://openai.com/news/rss.xml
  - name: The Verge AI
    url: https://www.theverge.com/ai-artificial-intelligence
    feed: https://www.theverge.com/rss/index.xml
    categoryFilter: AI
  - name: Anthropic
    url: https://www.anthropic.com/news
  - url: https://missing-name.example/
Research & Science:
  - name: arXiv
    url: https://arxiv.org/list/cs.AI/recent
Gadgets:
  - name: Gizmo
    url: https://gizmo.example/
"""


@pytest.fixture
def sources_path(tmp_path: Path) -> Path:
    path = tmp_path / "sources.yaml"
    path.write_text(SOURCES_YAML, encoding="utf-8")
    return path


class TestLoadSources:
    def test_order_preserved(self, sources_path: Path) -> None:
        catalog = load_sources(sources_path)
        assert catalog.category_names == ["Tech & Product News", "Research & Science", "Gadgets"]
        tech = catalog.sources_for(Category.TECH_PRODUCT)
        assert [s.name for s in tech] == ["OpenAI", "The Verge AI", "Anthropic"]

    def test_category_filter_alias(self, sources_path: Path) -> None:
        catalog = load_sources(sources_path)
        _, verge = catalog.find("The Verge AI")
        assert verge.category_filter == "AI"
        assert verge.is_rss

    def test_scraped_source(self, sources_path: Path) -> None:
        _, anthropic = load_sources(sources_path).find("Anthropic")
        assert not anthropic.is_rss

    def test_unknown_category_treated_as_tech(self, sources_path: Path) -> None:
        catalog = load_sources(sources_path)
        categories = {name: category for name, category, _ in catalog}
        assert categories["Gadgets"] == Category.TECH_PRODUCT

    def test_find_and_rank(self, sources_path: Path) -> None:
        catalog = load_sources(sources_path)
        assert catalog.find("arXiv")[0] == "Research & Science"
        assert catalog.find("nope") is None
        assert catalog.priority_rank("Anthropic", Category.TECH_PRODUCT) == 2
        assert catalog.priority_rank("arXiv", Category.TECH_PRODUCT) is None

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_sources(tmp_path / "absent.yaml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "sources.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_sources(path)

    def test_save_round_trip_keeps_alias(self, tmp_path: Path) -> None:
        path = tmp_path / "sources.yaml"
        save_sources(create_default_sources(), path)

        text = path.read_text(encoding="utf-8")
        assert "categoryFilter: AI" in text
        reloaded = load_sources(path)
        assert reloaded.category_names == [c.display_name for c in Category]
        assert reloaded.sources_for(Category.TECH_PRODUCT)[0].name == "OpenAI"


class TestConfig:
    def test_defaults(self) -> None:
        config = ConfigModel()
        assert config.cache_file == "cache/scraper-cache.json"
        assert config.scraping.request_delay == 1.0
        assert config.scraping.cache_ttl_hours == 1.0
        assert config.scraping.rss_max_items == 15

    def test_paths_and_password_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_path = tmp_path / "config.yaml"
        save_config(
            ConfigModel(
                workspace_root=str(tmp_path / "ws"),
                postgres={"password_env": "TEST_NEWS_DB_PASSWORD"},
            ),
            config_path,
        )
        monkeypatch.setenv("TEST_NEWS_DB_PASSWORD", "s3cret")

        config = Config(config_path)
        assert config.sources_path == tmp_path / "sources.yaml"
        assert config.cache_path == tmp_path / "ws" / "cache" / "scraper-cache.json"
        assert config.get_db_config()["password"] == "s3cret"

    def test_conninfo_uses_resolved_password_only(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TEST_NEWS_DB_PASSWORD", "from-env")
        unresolved = {"host": "db", "password_env": "TEST_NEWS_DB_PASSWORD"}
        assert "from-env" not in build_conninfo(unresolved)
        assert "from-env" in build_conninfo({**unresolved, "password": "from-env"})

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("scraping: [unclosed", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(path)

    def test_empty_catalog(self) -> None:
        assert len(SourceCatalog()) == 0


class TestCategory:
    def test_slugs(self) -> None:
        assert Category.from_slug("tech") == Category.TECH_PRODUCT
        assert Category.from_slug("Research-Science") == Category.RESEARCH_SCIENCE
        assert Category.from_slug("business") == Category.BUSINESS_SOCIETY
        assert Category.from_slug("sports") is None

    def test_display_names(self) -> None:
        assert Category.from_display_name("Business & Society") == Category.BUSINESS_SOCIETY
        assert Category.from_display_name("Other") is None
