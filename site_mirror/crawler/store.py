"""
On-disk page store.

Files already present under the output directory act as a cache: they are
read instead of fetched and are never overwritten, which makes an interrupted
crawl resumable by running it again.
"""
from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path

from site_mirror.crawler.fetcher import Fetcher
from site_mirror.crawler.models import PageData
from site_mirror.errors import FilesystemError
from site_mirror.logger import logger

__all__ = ("PageStore",)


class PageStore:
    """Read-through cache of page bodies keyed by their local path."""

    async def fetch_or_read(self, url: str, local_path: Path, fetcher: Fetcher) -> PageData:
        """Return the cached file at *local_path* if present, otherwise GET *url*."""
        try:
            cached = await asyncio.to_thread(local_path.is_file)
            content = await asyncio.to_thread(local_path.read_bytes) if cached else b""
        except (OSError, ValueError) as exc:
            raise FilesystemError(f"cannot read {local_path}: {exc}", url) from exc
        if cached:
            logger.info("read %s from disk", url)
            return PageData(url, content, from_cache=True)

        content = await fetcher.get(url)
        logger.info("read %s remotely", url)
        return PageData(url, content)

    async def write(self, content: bytes, local_path: Path) -> bool:
        """
        Store *content* at *local_path* unless a file is already there.

        Returns True when the file was created. The body is written to a
        temporary sibling and renamed into place, so readers never see a
        partial file.
        """
        return await asyncio.to_thread(self._write_sync, content, local_path)

    @staticmethod
    def _write_sync(content: bytes, local_path: Path) -> bool:
        try:
            if local_path.is_file():
                return False
            local_path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=local_path.parent, prefix=".tmp-")
            try:
                with os.fdopen(fd, "wb") as fh:
                    fh.write(content)
                os.chmod(tmp_name, 0o644)
                os.replace(tmp_name, local_path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, ValueError) as exc:
            raise FilesystemError(f"cannot write {local_path}: {exc}") from exc
        logger.debug("wrote %d bytes to %s", len(content), local_path)
        return True
