from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class PageCache:
    """Rendered HTML of server pages, keyed by URL path.

    Actions report the paths they touched; the web layer evicts them here so
    the next GET renders fresh data.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._pages: dict[str, str] = {}
        self._lock = threading.Lock()

    def get(self, path: str) -> Optional[str]:
        if not self.enabled:
            return None
        with self._lock:
            return self._pages.get(path)

    def put(self, path: str, html: str) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._pages[path] = html

    def invalidate(self, path: str) -> bool:
        with self._lock:
            return self._pages.pop(path, None) is not None

    def invalidate_many(self, paths: Iterable[str]) -> int:
        evicted = 0
        for p in paths:
            if self.invalidate(p):
                evicted += 1
        if evicted:
            logger.debug("Evicted %d cached page(s)", evicted)
        return evicted

    def clear(self) -> None:
        with self._lock:
            self._pages.clear()

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._pages
