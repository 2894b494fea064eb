"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("newscurator", description="Database name")
    user: str = Field("newscurator", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class ScrapingConfig(BaseModel):
    """Fetch, browser and cache tuning."""

    request_delay: float = Field(1.0, description="Seconds between queued page operations", ge=0.0)
    navigation_timeout: float = Field(30.0, description="Listing page navigation timeout (s)", gt=0)
    repair_timeout: float = Field(15.0, description="Title repair navigation timeout (s)", gt=0)
    cache_ttl_hours: float = Field(1.0, description="Scrape cache lifetime in hours", gt=0)
    rss_timeout: float = Field(30.0, description="RSS HTTP timeout (s)", gt=0)
    rss_max_items: int = Field(15, description="Entries read from the head of each feed", ge=1)
    headless: bool = Field(True, description="Run the browser headless")


class ConfigModel(BaseModel):
    """Main configuration model."""

    workspace_root: str = Field("~/NewsCurator", description="Root directory for runtime files")
    cache_file: str = Field(
        "cache/scraper-cache.json",
        description="Scrape cache path, relative to the workspace root",
    )
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    scraping: ScrapingConfig = Field(default_factory=ScrapingConfig)


class SourceConfig(BaseModel):
    """A single source entry from sources.yaml."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Source name")
    url: str = Field(..., description="Listing page URL")
    feed: Optional[str] = Field(None, description="RSS feed URL; selects the RSS path when set")
    category_filter: Optional[str] = Field(
        None,
        alias="categoryFilter",
        description="RSS category tag an entry must carry to be accepted",
    )

    @property
    def is_rss(self) -> bool:
        """Whether this source is read from a feed rather than scraped."""
        return bool(self.feed)
