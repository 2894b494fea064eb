"""Per-site scraping strategies.

A listing URL is matched against ``SITE_CONFIGS`` by host substring; the
first key contained in the URL selects that site's selectors. Unmatched
URLs use ``GENERIC_CONFIG``. Adding a site means adding an entry here.
"""

from typing import FrozenSet, List, Optional

from pydantic import BaseModel, Field

IPHONE_USER_AGENT = (
    "Mozilla/5.0 (iPhone; CPU iPhone OS 17_1 like Mac OS X) "
    "AppleWebKit/605.1.15 (KHTML, like Gecko) Version/17.1 Mobile/15E148 Safari/604.1"
)
MOBILE_VIEWPORT = {"width": 375, "height": 667}


class SelectorSet(BaseModel):
    """CSS selectors per field, in priority order."""

    container: List[str]
    title: List[str]
    link: List[str] = Field(default_factory=lambda: ["a"])
    date: List[str]
    summary: List[str]


class SiteConfig(BaseModel):
    """How to scrape one site's listing page."""

    name: str = Field(..., description="Strategy name, for logs")
    selectors: SelectorSet
    base_url: Optional[str] = Field(None, description="Prefix for relative links")
    max_articles: int = Field(10, ge=1)
    max_candidates: int = Field(10, ge=1, description="Containers inspected per selector")
    settle_delay: float = Field(0.0, description="Extra wait after network idle (s)")
    scan_text_for_date: bool = Field(False, description="Search container text for a date")
    repair_titles: bool = Field(False, description="Revisit articles whose title is a placeholder")
    generic_titles: FrozenSet[str] = Field(default_factory=frozenset)
    min_title_length: int = Field(5)
    title_suffix: Optional[str] = Field(None, description="Site name stripped from page titles")


SITE_CONFIGS = {
    "openai.com": SiteConfig(
        name="openai",
        selectors=SelectorSet(
            container=[".post-preview", "article", ".blog-post"],
            title=["h2", "h3", ".title"],
            date=["time", ".date", ".published"],
            summary=["p", ".excerpt"],
        ),
        base_url="https://openai.com",
    ),
    "anthropic.com": SiteConfig(
        name="anthropic",
        selectors=SelectorSet(
            container=[
                'a[href*="/news/"]',
                '[data-testid*="news"]',
                '[data-testid*="card"]',
                ".news-card",
                "article",
                ".card",
                '[class*="news"]',
            ],
            title=["h3", "h2", "h4", ".title"],
            date=["time", ".date", ".published", "[datetime]"],
            summary=["p", ".excerpt", ".description", ".summary"],
        ),
        base_url="https://www.anthropic.com",
        max_candidates=15,
        settle_delay=3.0,
        scan_text_for_date=True,
        repair_titles=True,
        generic_titles=frozenset({"News", "Newsroom", "No results found."}),
        title_suffix="Anthropic",
    ),
    "deepmind": SiteConfig(
        name="deepmind",
        selectors=SelectorSet(
            container=["article", ".blog-card", ".post"],
            title=["h2", "h3", "h1"],
            date=["time", ".date"],
            summary=["p", ".excerpt"],
        ),
        base_url="https://deepmind.google",
    ),
    "hbr.org": SiteConfig(
        name="hbr",
        selectors=SelectorSet(
            container=[".stream-item", ".stream-article", ".article-item"],
            title=["h2", "h3", ".title"],
            date=[".date-published", "time"],
            summary=["p", ".excerpt"],
        ),
    ),
    "mckinsey.com": SiteConfig(
        name="mckinsey",
        selectors=SelectorSet(
            container=[".insights-card", ".insight-card", ".content-card"],
            title=["h2", "h3", ".title"],
            date=[".date", "time"],
            summary=["p", ".excerpt"],
        ),
    ),
}

GENERIC_CONFIG = SiteConfig(
    name="generic",
    selectors=SelectorSet(
        container=[
            "article",
            ".post",
            ".blog-post",
            ".news-item",
            ".entry",
            ".card",
            ".item",
            '[class*="article"]',
            '[class*="post"]',
        ],
        title=["h1", "h2", "h3", "h4", ".title", '[class*="title"]'],
        date=["time", ".date", ".published", "[datetime]"],
        summary=["p", ".excerpt", ".summary", ".description"],
    ),
    max_candidates=15,
)


def site_config_for(url: str) -> SiteConfig:
    """Pick the scraping strategy for a listing URL."""
    for key, config in SITE_CONFIGS.items():
        if key in url:
            return config
    return GENERIC_CONFIG
