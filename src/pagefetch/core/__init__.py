"""Core fetch engine components."""

from .cache import ResponseCache
from .fetcher import HttpFetcher
from .protocols import Cache, Fetcher, Response
from .url import TargetURL, resolve

__all__ = ["Cache", "Fetcher", "Response", "HttpFetcher", "ResponseCache", "TargetURL", "resolve"]
