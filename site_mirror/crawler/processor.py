"""
Processing of a single crawled URL: map, fetch or read, extract, enqueue, persist.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from site_mirror.crawler.fetcher import Fetcher
from site_mirror.crawler.link_extractor import defrag, extract_links, resolve
from site_mirror.crawler.models import PageResult
from site_mirror.crawler.paths import url_to_path
from site_mirror.crawler.state import Frontier, VisitedSet
from site_mirror.crawler.store import PageStore
from site_mirror.errors import MalformedUrl
from site_mirror.logger import logger

__all__ = ("PageProcessor",)


class PageProcessor:
    """Runs the per-URL pipeline against shared visited/frontier state."""

    def __init__(
        self,
        seed: str,
        out_root: Union[str, Path],
        fetcher: Fetcher,
        store: PageStore,
        visited: VisitedSet,
        frontier: Frontier,
    ) -> None:
        self.seed = seed
        self.out_root = Path(out_root)
        self.fetcher = fetcher
        self.store = store
        self.visited = visited
        self.frontier = frontier

    async def process(self, url: str) -> Optional[PageResult]:
        """
        Mirror *url* and queue the in-scope links it contains.

        Returns None when the URL has no local path and is skipped. Transport,
        parse and filesystem errors propagate to the caller.
        """
        try:
            local_path = url_to_path(url, self.seed, self.out_root)
        except MalformedUrl as exc:
            logger.warning("skipping %s: %s", url, exc.message)
            return None

        page = await self.store.fetch_or_read(url, local_path, self.fetcher)
        result = PageResult(url=url, local_path=local_path, from_cache=page.from_cache, written=False)

        for raw in extract_links(page.content):
            result.links_found += 1
            link = self._canonical(raw)
            if link is None:
                result.links_skipped += 1
                continue
            if not self.visited.has(link) and link.startswith(self.seed):
                self.frontier.push(link)
                result.links_queued += 1
            # out-of-scope links are recorded too, so they are evaluated once
            self.visited.add(link)

        result.written = await self.store.write(page.content, local_path)
        return result

    def _canonical(self, raw: str) -> Optional[str]:
        try:
            defragged = defrag(raw)
        except MalformedUrl:
            logger.warning("malformed url: %r", raw)
            return None
        try:
            # links are resolved against the seed, not the page they came from
            return resolve(self.seed, defragged)
        except MalformedUrl:
            logger.warning("error joining url: %r", raw)
            return None
