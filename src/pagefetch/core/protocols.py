"""Protocol definitions for fetch components."""

from dataclasses import dataclass, field
from typing import Protocol


@dataclass
class Response:
    """Structured result of a fetch, handed to the renderer.

    File and data URLs produce a response with no protocol, status or headers.
    """

    protocol: str | None = None
    status: int | None = None
    reason: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    view_source: bool = False
    keep_alive: bool = False
    url: str = ""

    @property
    def text(self) -> str:
        """Decode body as UTF-8."""
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_redirect(self) -> bool:
        return self.status is not None and 300 <= self.status < 400

    def __str__(self) -> str:
        lines = [
            f"Protocol: {self.protocol}",
            f"Status: {self.status} {self.reason}",
            "Headers:",
        ]
        lines.extend(f"\t{key}: {value}" for key, value in self.headers.items())
        lines.append(f"Content:\n{self.text}")
        return "\n".join(lines)


class Fetcher(Protocol):
    """Protocol for URL fetchers."""

    async def fetch(self, url: str) -> Response:
        """Fetch a URL and return the response."""
        ...


class Cache(Protocol):
    """Protocol for response caches keyed by request URL."""

    def get(self, key: str) -> Response | None:
        """Return a fresh cached response, evicting it if stale."""
        ...

    def put(self, key: str, response: Response, ttl: float) -> None:
        """Store response for ttl seconds."""
        ...
