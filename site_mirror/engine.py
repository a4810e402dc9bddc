"""
Entry point coroutine used by the CLI to run one crawl.
"""
from __future__ import annotations

from site_mirror.config import MirrorConfig
from site_mirror.crawler.crawler import CrawlEngine
from site_mirror.crawler.models import CrawlStats


async def start_crawl(cfg: MirrorConfig) -> CrawlStats:
    """
    Mirror ``cfg.seed_url`` into ``cfg.output_dir`` and return the run totals.

    Parameters
    ----------
    cfg : MirrorConfig
        Validated crawl configuration.
    """
    async with CrawlEngine(cfg) as engine:
        return await engine.run()

__all__ = ["start_crawl"]
