"""
Mapping of crawled URLs onto files below the output directory.

The mapping is a pure function of (url, seed, out_root): the part of the URL
after the seed becomes a relative path, the seed itself becomes
``index.html``, and any query string is kept in the file name with ``/``
escaped so that it cannot introduce extra directories.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Union
from urllib.parse import parse_qs

from site_mirror.errors import MalformedUrl

__all__ = ("INDEX_FILE", "url_to_path")

INDEX_FILE = "index.html"
# longest file name most filesystems accept, in bytes
NAME_MAX = 255


def _escape_slash(value: str) -> str:
    return value.replace("/", "%2F")


def _canonical_query(query: str, url: str) -> str:
    """Rebuild a query string with sorted keys and slash-free keys and values."""
    params = parse_qs(query, keep_blank_values=True)
    if any("\x00" in key or any("\x00" in v for v in values) for key, values in params.items()):
        raise MalformedUrl("NUL byte in URL query", url)
    pairs: List[str] = []
    for key in sorted(params):
        values = params[key]
        name = _escape_slash(key)
        # valueless keys (``?flag``) keep their bare form
        if values == [""]:
            pairs.append(name)
            continue
        pairs.extend(f"{name}={_escape_slash(v)}" for v in values)
    return "&".join(pairs)


def _segments(raw_path: str, url: str) -> List[str]:
    segments: List[str] = []
    for seg in raw_path.split("/"):
        if seg in ("", "."):
            continue
        if "\x00" in seg:
            raise MalformedUrl("NUL byte in URL path", url)
        if seg == "..":
            if not segments:
                raise MalformedUrl("URL path escapes the output directory", url)
            segments.pop()
            continue
        segments.append(seg)
    if not segments or raw_path.endswith("/"):
        segments.append(INDEX_FILE)
    return segments


def url_to_path(url: str, seed: str, out_root: Union[str, Path]) -> Path:
    """
    Return the local file that stores *url* when mirroring from *seed*.

    >>> url_to_path("https://example.com/foo", "https://example.com", "out")
    PosixPath('out/foo')

    Raises MalformedUrl if *url* is not below *seed* or its path cannot be
    represented inside *out_root*.
    """
    root = Path(out_root)
    # exactly one trailing slash
    start = seed.removesuffix("/") + "/"
    if not url.startswith(start[:-1]):
        raise MalformedUrl(f"URL is outside the seed {seed!r}", url)

    residual = url[len(start) - 1:] if len(url) > len(start) else ""
    if not residual:
        return root / INDEX_FILE
    if not residual.startswith("/"):
        raise MalformedUrl(f"URL does not continue the seed path {seed!r}", url)

    residual = residual.partition("#")[0]
    raw_path, _, query = residual.partition("?")
    segments = _segments(raw_path, url)

    canonical = _canonical_query(query, url) if query else ""
    if canonical:
        segments[-1] = f"{segments[-1]}?{canonical}"
    if any(len(seg.encode("utf-8", "surrogateescape")) > NAME_MAX for seg in segments):
        raise MalformedUrl("URL maps to a file name that is too long", url)
    return root.joinpath(*segments)
