"""
Shared crawl state: the visited set and the frontier queue.

Both containers are touched by every concurrently running page task. Each
public method is one atomic operation under an internal lock; callers never
lock around several calls, so a "not visited, then push" sequence may at worst
enqueue a URL twice.
"""
from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Set

from site_mirror.errors import MissingFrontierItem

__all__ = ("VisitedSet", "Frontier")


class VisitedSet:
    """Thread-safe set of canonical URLs seen during a run."""

    def __init__(self) -> None:
        self._urls: Set[str] = set()
        self._lock = threading.Lock()

    def has(self, url: str) -> bool:
        with self._lock:
            return url in self._urls

    def add(self, url: str) -> None:
        with self._lock:
            self._urls.add(url)

    def __contains__(self, url: object) -> bool:
        return isinstance(url, str) and self.has(url)

    def __len__(self) -> int:
        with self._lock:
            return len(self._urls)


class Frontier:
    """Thread-safe FIFO of URLs waiting to be processed."""

    def __init__(self) -> None:
        self._queue: Deque[str] = deque()
        self._lock = threading.Lock()

    def push(self, url: str) -> None:
        with self._lock:
            self._queue.append(url)

    def pop(self) -> str:
        """Return the oldest queued URL, or raise MissingFrontierItem without blocking."""
        with self._lock:
            if not self._queue:
                raise MissingFrontierItem("frontier is empty")
            return self._queue.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._queue)
