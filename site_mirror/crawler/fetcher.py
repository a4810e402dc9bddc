"""
Fetcher module: plain HTTP GET over a shared aiohttp session.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from site_mirror.errors import TransportError
from site_mirror.logger import logger


class Fetcher:
    """Performs GET requests and returns the full response body."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def get(self, url: str) -> bytes:
        """
        Fetch *url* and return its body regardless of the HTTP status.

        Raises TransportError when the request cannot be built or sent, or
        when reading the body fails.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                body = await resp.read()
                if resp.status >= 400:
                    logger.debug("HTTP %s for %s", resp.status, url)
                return body
        except asyncio.TimeoutError as exc:
            raise TransportError("request timed out", url) from exc
        except (ClientError, ValueError) as exc:
            raise TransportError(f"request failed: {exc}", url) from exc
