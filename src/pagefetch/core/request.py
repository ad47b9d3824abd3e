"""HTTP/1.1 request serialization."""

from dataclasses import dataclass, field

import httpx

from .url import TargetURL

HTTP_VERSION = "HTTP/1.1"
DEFAULT_USER_AGENT = "pagefetch/0.1"


@dataclass
class Request:
    """A GET request for one hop."""

    path: str
    headers: httpx.Headers = field(default_factory=httpx.Headers)
    method: str = field(default="GET", init=False)

    def __post_init__(self):
        raw = httpx.Headers(self.headers).raw
        self.headers = httpx.Headers([(key.strip(), value.strip()) for key, value in raw])

    def serialize(self) -> bytes:
        lines = [f"{self.method} {self.path} {HTTP_VERSION}\r\n".encode("ascii")]
        for key, value in self.headers.raw:
            lines.append(key + b": " + value + b"\r\n")
        lines.append(b"\r\n")
        return b"".join(lines)


def build_request(
    target: TargetURL,
    keep_alive: bool,
    user_agent: str = DEFAULT_USER_AGENT,
    accept_gzip: bool = True,
) -> Request:
    """Build the request for target with the session's connection policy."""
    headers = {
        "Host": target.authority,
        "User-Agent": user_agent,
        "Connection": "keep-alive" if keep_alive else "close",
    }
    if accept_gzip:
        headers["Accept-Encoding"] = "gzip"
    return Request(path=target.request_target, headers=httpx.Headers(headers))
