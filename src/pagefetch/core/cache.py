"""In-process response cache with lazy max-age expiry."""

import logging
import re
import threading
import time
from dataclasses import dataclass
from typing import Callable

from .protocols import Response

logger = logging.getLogger(__name__)

MAX_AGE = re.compile(r"max-age\s*=\s*([^,\s]*)", re.IGNORECASE)


@dataclass
class CacheEntry:
    expires_at: float
    response: Response

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


class ResponseCache:
    """Unbounded URL-keyed response store; stale entries are dropped on lookup."""

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Response | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                logger.debug("Cache miss for %s", key)
                return None
            if not entry.is_fresh(self._clock()):
                logger.debug("Evicting stale cache entry for %s", key)
                del self._entries[key]
                return None
            logger.debug("Cache hit for %s", key)
            return entry.response

    def put(self, key: str, response: Response, ttl: float):
        with self._lock:
            self._entries[key] = CacheEntry(expires_at=self._clock() + ttl, response=response)
        logger.debug("Cached %s for %ss", key, ttl)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries


def is_cacheable(response: Response) -> bool:
    """A 200 response whose cache-control carries a max-age directive."""
    return response.status == 200 and "max-age" in response.headers.get("cache-control", "").lower()


def parse_max_age(cache_control: str) -> int | None:
    """Return the max-age seconds, or None when the value is not an integer."""
    match = MAX_AGE.search(cache_control)
    if match is None or not match.group(1).isdecimal():
        logger.warning("Max age in cache directive %r is not valid", cache_control)
        return None
    return int(match.group(1))


def store(cache, key: str, response: Response) -> bool:
    """Cache response under key if it is cacheable; returns whether it was stored."""
    if not is_cacheable(response):
        return False
    max_age = parse_max_age(response.headers["cache-control"])
    if max_age is None:
        return False
    cache.put(key, response, max_age)
    return True


default_cache = ResponseCache()
