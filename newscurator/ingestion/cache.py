"""Scrape result cache keyed by source listing URL."""

import json
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional

from pydantic import ValidationError
from rich.console import Console

from .models import CacheEntry, NormalizedArticle

console = Console()

DEFAULT_TTL_SECONDS = 60 * 60


class FetchCache:
    """
    In-memory map of listing URL -> scraped articles, persisted as one JSON file.

    Entries expire ``ttl`` seconds after they were written; expiry is checked
    on read. The file is read and written whole, so an interrupted scan can
    only lose its own additions.
    """

    def __init__(
        self,
        path: Path,
        ttl: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = path
        self.ttl = ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, url: str) -> Optional[List[NormalizedArticle]]:
        """Cached articles for url, or None if absent or expired."""
        entry = self._entries.get(url)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl:
            return None
        return list(entry.articles)

    def put(self, url: str, articles: List[NormalizedArticle]) -> None:
        self._entries[url] = CacheEntry(articles=list(articles), timestamp=self._clock())

    def clear(self) -> None:
        self._entries = {}

    def load(self) -> None:
        """Replace the in-memory map with the file contents; problems mean empty."""
        self._entries = {}
        if not self.path.exists():
            return

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            console.print(f"[yellow]Ignoring unreadable scrape cache {self.path}: {e}[/yellow]")
            return

        if not isinstance(data, dict):
            console.print(f"[yellow]Ignoring malformed scrape cache {self.path}[/yellow]")
            return

        for url, raw_entry in data.items():
            try:
                self._entries[url] = CacheEntry.model_validate(raw_entry)
            except ValidationError:
                console.print(f"[dim]Dropping invalid cache entry for {url}[/dim]")

    def save(self) -> None:
        """Write the whole map back to disk; failures are reported, not raised."""
        data = {url: entry.model_dump(mode="json") for url, entry in self._entries.items()}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
            tmp_path.replace(self.path)
        except OSError as e:
            console.print(f"[red]Error saving scrape cache: {e}[/red]")
