"""Per-file blame cache that coalesces concurrent builds.

Each normalized file path maps to one asyncio task producing its
:class:`Blame`. The task is stored before it finishes, so every caller that
asks for the same path while a build is running awaits that same task.
Entries live until :meth:`BlameCache.invalidate` removes them (the host
calls it when a document is closed or saved); there is no expiry.
"""

from __future__ import annotations

import asyncio
import threading
from typing import Awaitable, Callable, Optional

from ..logging_config import get_logger
from .models import Blame

logger = get_logger(__name__)

BlameLoader = Callable[[str], Awaitable[Blame]]
PathNormalizer = Callable[[str], str]


class BlameCache:
    """Coalescing, explicitly invalidated cache of blame builds.

    Usage:
        cache = BlameCache(loader, normalize=lambda p: normalize_path(p, repo))
        blame = await cache.get("src/app.py")
        cache.invalidate("src/app.py")  # next get() rebuilds
    """

    def __init__(self, loader: BlameLoader, normalize: Optional[PathNormalizer] = None):
        """
        Args:
            loader: Coroutine function building the blame of a normalized path
            normalize: Maps any spelling of a path to its cache key
        """
        self._loader = loader
        self._normalize = normalize or (lambda path: path)
        self._lock = threading.Lock()
        self._entries: dict[str, asyncio.Task[Blame]] = {}

    async def get(self, path: str) -> Blame:
        """Return the blame for ``path``, building it at most once."""
        key = self._normalize(path)

        with self._lock:
            task = self._entries.get(key)
            if task is None:
                task = asyncio.get_running_loop().create_task(self._loader(key))
                task.add_done_callback(lambda t: self._on_done(key, t))
                self._entries[key] = task
                logger.debug("Blame cache miss: %s", key)
            else:
                logger.debug("Blame cache hit: %s", key)

        # A cancelled caller must not cancel a build others may be awaiting
        return await asyncio.shield(task)

    def invalidate(self, path: str) -> bool:
        """Drop the entry for ``path``. Returns True if one was present.

        A build already running keeps running, but its result is only
        delivered to callers that were already waiting on it.
        """
        key = self._normalize(path)
        with self._lock:
            removed = self._entries.pop(key, None)
        if removed is not None:
            logger.debug("Blame cache invalidated: %s", key)
        return removed is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, path: str) -> bool:
        key = self._normalize(path)
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _on_done(self, key: str, task: asyncio.Task[Blame]) -> None:
        if not task.cancelled() and task.exception() is None:
            return

        with self._lock:
            # Only evict our own task; a rebuild after invalidation may own the key now
            if self._entries.get(key) is task:
                del self._entries[key]

        if task.cancelled():
            logger.debug("Blame build cancelled: %s", key)
        else:
            logger.warning("Blame build failed for %s: %s", key, task.exception())
