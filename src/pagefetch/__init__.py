"""Single-URL fetch engine speaking raw HTTP/1.1."""

from .core import HttpFetcher, Response
from .errors import FetchError

__version__ = "0.1.0"

__all__ = ["FetchError", "HttpFetcher", "Response", "__version__"]
