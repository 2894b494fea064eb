"""Recover real headlines for articles scraped with placeholder titles.

Some listing pages render navigation labels ("Newsroom") where a headline is
expected. For those articles the article page itself is opened and the title
re-derived from its H1, ``og:title`` or ``<title>``, in that order.
"""

import re
from typing import Optional, Tuple

from bs4 import BeautifulSoup
from rich.console import Console

from .browser import BrowserSession
from .models import RawArticle
from .normalize import clean_text
from .site_configs import SiteConfig

console = Console()

HEADLINE_SELECTORS = ["h1", ".article-title", '[class*="title"]', '[data-testid*="title"]']


def is_generic_title(title: str, config: SiteConfig) -> bool:
    """Placeholder labels and very short strings are not headlines."""
    title = clean_text(title)
    return title in config.generic_titles or len(title) < config.min_title_length


def _strip_suffix(title: str, suffix: Optional[str]) -> str:
    if not suffix:
        return title.strip()
    pattern = re.compile(r"\s*[|\\\-–]\s*" + re.escape(suffix) + r"\s*$", re.IGNORECASE)
    return pattern.sub("", title).strip()


def _meta_content(soup: BeautifulSoup, prop: str) -> str:
    tag = soup.find("meta", attrs={"property": prop})
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def derive_title_from_html(html: str, config: SiteConfig) -> Tuple[str, str]:
    """
    Pick the best headline and description from an article page.

    Returns ``("", description)`` when no candidate is long enough.
    """
    soup = BeautifulSoup(html, "html.parser")
    description = _meta_content(soup, "og:description")

    for selector in HEADLINE_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        text = clean_text(el.get_text(" ", strip=True))
        if (
            len(text) > config.min_title_length
            and text not in config.generic_titles
            and "Skip to" not in text
        ):
            return text, description

    og_title = _strip_suffix(_meta_content(soup, "og:title"), config.title_suffix)
    if len(og_title) > config.min_title_length:
        return clean_text(og_title), description

    if soup.title is not None and soup.title.string:
        doc_title = _strip_suffix(soup.title.string, config.title_suffix)
        if len(doc_title) > config.min_title_length:
            return clean_text(doc_title), description

    return "", description


async def repair_title_if_generic(
    article: RawArticle,
    browser: BrowserSession,
    config: SiteConfig,
    timeout: float = 15.0,
) -> RawArticle:
    """
    Replace a placeholder title with the one on the article page.

    The page visit goes through the browser queue like any other page
    operation. Failures keep the original article unchanged.
    """
    if not is_generic_title(article.title, config):
        return article

    async def read_article_page(page) -> str:
        await page.goto(article.url, wait_until="domcontentloaded", timeout=timeout * 1000)
        return await page.content()

    try:
        html = await browser.with_page(read_article_page)
    except Exception as e:
        console.print(f"[yellow]Failed to fetch title for {article.url}: {e}[/yellow]")
        return article

    title, description = derive_title_from_html(html, config)
    updates = {}
    if title:
        updates["title"] = title
    if description and not clean_text(article.summary_raw):
        updates["summary_raw"] = description
    return article.model_copy(update=updates) if updates else article
