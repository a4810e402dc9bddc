from __future__ import annotations

import asyncio
import logging
import time
from typing import List, Optional

from aiohttp import ClientSession, ClientTimeout

from site_mirror.config import MirrorConfig
from site_mirror.crawler.fetcher import Fetcher
from site_mirror.crawler.models import CrawlStats
from site_mirror.crawler.processor import PageProcessor
from site_mirror.crawler.state import Frontier, VisitedSet
from site_mirror.crawler.store import PageStore
from site_mirror.errors import CrawlCancelled, MissingFrontierItem

__all__ = ("CrawlEngine",)


class CrawlEngine:
    """
    Round-based mirroring crawler with a bounded number of concurrent pages.

    Each round drains the frontier, running at most ``max_parallelism`` page
    tasks at a time, then waits for all of them. Pages discovered during a
    round are handled by the next one; the crawl ends when a round leaves the
    frontier empty or when any page fails.
    """

    def __init__(self, config: MirrorConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.seed: str = config.seed_url
        self.concurrency: int = config.max_parallelism
        self.visited = VisitedSet()
        self.frontier = Frontier()
        self.store = PageStore()
        self.session = session
        self.fetcher: Optional[Fetcher] = None
        self.logger = logging.getLogger("SiteMirror")
        self._owns_session = session is None
        self._run_task: Optional[asyncio.Task] = None
        self._cancel_requested = False
        self._first_error: Optional[BaseException] = None

    async def __aenter__(self) -> CrawlEngine:
        if self.session is None:
            self.session = ClientSession(timeout=ClientTimeout(total=self.config.request_timeout))
        self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session and not self.session.closed:
            await self.session.close()

    async def run(self) -> CrawlStats:
        if self.fetcher is None:
            raise RuntimeError("Session not initialized")
        self._run_task = asyncio.current_task()
        self._cancel_requested = False
        self._first_error = None
        self.visited = VisitedSet()
        self.frontier = Frontier()
        processor = PageProcessor(
            self.seed, self.config.output_dir, self.fetcher, self.store, self.visited, self.frontier
        )
        slots = asyncio.Semaphore(self.concurrency)
        stats = CrawlStats()

        self.logger.info("Starting crawl: %s -> %s", self.seed, self.config.output_dir)
        start = time.monotonic()
        self.visited.add(self.seed)
        self.frontier.push(self.seed)
        try:
            while True:
                stats.rounds += 1
                await self._drain_round(processor, slots, stats)
                if self._first_error is not None:
                    raise self._first_error
                if len(self.frontier) == 0:
                    break
        except asyncio.CancelledError:
            if not self._cancel_requested:
                raise
            asyncio.current_task().uncancel()
            self.logger.warning("Crawl cancelled after %d pages", stats.pages)
            raise CrawlCancelled("crawl cancelled", self.seed) from None
        finally:
            self._run_task = None

        stats.elapsed = time.monotonic() - start
        self.logger.info(
            "Finished: %d pages in %.2f s (%d fetched, %d from disk, %d written)",
            stats.pages, stats.elapsed, stats.fetched, stats.from_cache, stats.written,
        )
        return stats

    def cancel(self) -> None:
        """Stop a running crawl; :meth:`run` then raises CrawlCancelled."""
        if self._run_task is not None and not self._run_task.done():
            self._cancel_requested = True
            self._run_task.cancel()

    async def _drain_round(self, processor: PageProcessor, slots: asyncio.Semaphore, stats: CrawlStats) -> None:
        tasks: List[asyncio.Task] = []
        try:
            while self._first_error is None:
                try:
                    url = self.frontier.pop()
                except MissingFrontierItem:
                    break
                await slots.acquire()
                if self._first_error is not None:
                    slots.release()
                    break
                tasks.append(asyncio.create_task(self._dispatch(processor, url, slots, stats)))
            self.logger.debug("Round %d: dispatched %d pages", stats.rounds, len(tasks))
            await asyncio.gather(*tasks)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _dispatch(self, processor: PageProcessor, url: str, slots: asyncio.Semaphore, stats: CrawlStats) -> None:
        try:
            result = await processor.process(url)
        except Exception as exc:
            if self._first_error is None:
                self._first_error = exc
                self.logger.error("Failed %s: %s", url, exc)
            else:
                self.logger.debug("Discarding later failure for %s: %s", url, exc)
            return
        finally:
            slots.release()
        if result is None:
            stats.pages_skipped += 1
        else:
            stats.record(result)
