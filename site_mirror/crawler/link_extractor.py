"""
Link extraction and URL normalization utilities for SiteMirror.
"""
from __future__ import annotations

from typing import List
from urllib.parse import urldefrag, urljoin

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from site_mirror.errors import MalformedUrl, ParseError

__all__ = ("extract_links", "defrag", "resolve")


def extract_links(content: bytes) -> List[str]:
    """
    Return the raw ``href`` of every ``<a>`` element in document order.

    Duplicates, empty and relative values are kept as-is; filtering is up to
    the caller.
    """
    try:
        soup = BeautifulSoup(content, "html.parser")
    except ParserRejectedMarkup as exc:
        raise ParseError(f"cannot parse page: {exc}") from exc
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if isinstance(href_val, str):
            links.append(href_val)
    return links


def defrag(url: str) -> str:
    """Strip the fragment from *url*."""
    try:
        return urldefrag(url).url
    except ValueError as exc:
        raise MalformedUrl(f"malformed url: {exc}", url) from exc


def resolve(base: str, ref: str) -> str:
    """Resolve *ref* against *base* using RFC 3986 reference resolution."""
    try:
        return urljoin(base, ref)
    except ValueError as exc:
        raise MalformedUrl(f"cannot resolve against {base!r}: {exc}", ref) from exc
