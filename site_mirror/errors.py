"""
Error types raised by the SiteMirror crawler.

Only :class:`MalformedUrl` is recovered locally (the offending link is
skipped); every other :class:`MirrorError` aborts the crawl at the next
round barrier.
"""
from __future__ import annotations

from typing import Optional

__all__ = (
    "MirrorError",
    "MalformedUrl",
    "ParseError",
    "TransportError",
    "FilesystemError",
    "CrawlCancelled",
    "MissingFrontierItem",
)


class MirrorError(Exception):
    """Base class for crawl failures, optionally bound to the URL being processed."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        self.message = message
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} ({self.url})"
        return self.message


class MalformedUrl(MirrorError, ValueError):
    """A link or URL could not be parsed or mapped to a local path."""


class ParseError(MirrorError):
    """A page body was rejected by the HTML parser."""


class TransportError(MirrorError):
    """The HTTP request could not be built, sent or read."""


class FilesystemError(MirrorError):
    """Reading, writing or creating directories in the output tree failed."""


class CrawlCancelled(MirrorError):
    """The crawl was cancelled before the frontier drained."""


class MissingFrontierItem(LookupError):
    """Raised by :meth:`Frontier.pop` when nothing is queued right now."""
