"""Selector-driven article extraction from a rendered listing page.

The browser renders the page; everything here works on the resulting HTML
snapshot so it can be exercised against fixture pages.
"""

from typing import Callable, Iterable, List, Optional, Sequence, TypeVar
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from .models import RawArticle
from .normalize import clean_text, looks_like_date
from .site_configs import SiteConfig

T = TypeVar("T")


def first_match(extractors: Iterable[Callable[[], Optional[T]]]) -> Optional[T]:
    """Evaluate extractors in order and return the first non-empty result."""
    for extractor in extractors:
        value = extractor()
        if value:
            return value
    return None


def _select(node: Tag, selector: str) -> Optional[Tag]:
    return node.select_one(selector)


def _text(el: Optional[Tag]) -> str:
    return el.get_text(" ", strip=True) if el is not None else ""


def _closest_link(el: Optional[Tag]) -> Optional[Tag]:
    if el is None:
        return None
    if el.name == "a" and el.get("href"):
        return el
    return el.find_parent("a", href=True)


def _with_text(el: Optional[Tag]) -> Optional[Tag]:
    return el if _text(el) else None


def _href(el: Optional[Tag]) -> Optional[str]:
    if el is None:
        return None
    return (el.get("href") or "").strip() or None


def _find_title(container: Tag, selectors: Sequence[str]) -> Optional[Tag]:
    return first_match(
        (lambda sel=sel: _with_text(_select(container, sel))) for sel in selectors
    )


def _find_link(container: Tag, title_el: Optional[Tag], selectors: Sequence[str]) -> Optional[str]:
    # Sub-selectors first, then the container or title sitting inside a link.
    extractors = [lambda sel=sel: _href(_select(container, sel)) for sel in selectors]
    extractors += [
        lambda: _href(container) if container.name == "a" else None,
        lambda: _href(_closest_link(title_el)),
        lambda: _href(container.find_parent("a", href=True)),
    ]
    return first_match(extractors)


def _find_date(container: Tag, selectors: Sequence[str], scan_text: bool) -> str:
    def from_selector(sel: str) -> Optional[str]:
        el = _select(container, sel)
        if el is None:
            return None
        return _text(el) or (el.get("datetime") or "").strip() or None

    def from_text() -> Optional[str]:
        if not scan_text:
            return None
        for text in container.stripped_strings:
            if looks_like_date(text):
                return text
        return None

    found = first_match(
        [lambda sel=sel: from_selector(sel) for sel in selectors] + [from_text]
    )
    return found or ""


def _find_summary(container: Tag, selectors: Sequence[str]) -> str:
    found = first_match((lambda sel=sel: _text(_select(container, sel))) for sel in selectors)
    return found or ""


def resolve_url(href: str, page_url: str, site_base_url: Optional[str] = None) -> str:
    """Make href absolute using the site's base URL, or the page URL."""
    if href.startswith(("http://", "https://")):
        return href
    return urljoin(site_base_url or page_url, href)


def extract_articles(
    html: str,
    page_url: str,
    config: SiteConfig,
    source_name: str,
) -> List[RawArticle]:
    """
    Extract raw articles from a listing page.

    Container selectors are tried in priority order and the first one that
    yields any article wins. Within a container each field takes the first
    sub-selector that matches. Articles need both a title and a link;
    duplicate URLs on the page are dropped.
    """
    soup = BeautifulSoup(html, "html.parser")
    selectors = config.selectors

    for container_selector in selectors.container:
        results: List[RawArticle] = []
        seen = set()

        for index, container in enumerate(soup.select(container_selector)):
            if index >= config.max_candidates or len(results) >= config.max_articles:
                break

            title_el = _find_title(container, selectors.title)
            if title_el is None:
                continue
            href = _find_link(container, title_el, selectors.link)
            if not href:
                continue

            url = resolve_url(href, page_url, config.base_url)
            if url in seen:
                continue
            seen.add(url)

            results.append(
                RawArticle(
                    title=clean_text(_text(title_el)),
                    url=url,
                    published_at_raw=_find_date(container, selectors.date, config.scan_text_for_date),
                    summary_raw=_find_summary(container, selectors.summary),
                    source_name=source_name,
                )
            )

        if results:
            return results

    return []
