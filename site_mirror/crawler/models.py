"""
Data models for the SiteMirror crawler.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(slots=True, frozen=True)
class PageData:
    """Holds a page URL and its raw body, either fetched or read from disk."""

    url: str
    content: bytes
    from_cache: bool = False


@dataclass(slots=True)
class PageResult:
    """Outcome of processing a single URL."""

    url: str
    local_path: Path
    from_cache: bool
    written: bool
    links_found: int = 0
    links_queued: int = 0
    links_skipped: int = 0


@dataclass(slots=True)
class CrawlStats:
    """Totals accumulated over one crawl run."""

    pages: int = 0
    fetched: int = 0
    from_cache: int = 0
    written: int = 0
    links_skipped: int = 0
    pages_skipped: int = 0
    rounds: int = 0
    elapsed: float = 0.0

    def record(self, result: PageResult) -> None:
        self.pages += 1
        if result.from_cache:
            self.from_cache += 1
        else:
            self.fetched += 1
        if result.written:
            self.written += 1
        self.links_skipped += result.links_skipped
