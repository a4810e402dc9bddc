"""Crawler components: path mapping, shared state, page store and the crawl engine."""
from site_mirror.crawler.crawler import CrawlEngine
from site_mirror.crawler.models import CrawlStats, PageData, PageResult
from site_mirror.crawler.paths import url_to_path
from site_mirror.crawler.state import Frontier, VisitedSet

__all__ = ["CrawlEngine", "CrawlStats", "PageData", "PageResult", "url_to_path", "Frontier", "VisitedSet"]
