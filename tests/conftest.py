"""Shared fixtures: an in-memory transport standing in for real sockets."""

import asyncio
from collections import defaultdict, deque

import pytest

from pagefetch.core import HttpFetcher, ResponseCache
from pagefetch.core.connection import Connection
from pagefetch.errors import ConnectError


def make_reader(data: bytes) -> asyncio.StreamReader:
    """Stream reader pre-filled with data and closed."""
    reader = asyncio.StreamReader()
    reader.feed_data(data)
    reader.feed_eof()
    return reader


def http_response(
    status: int = 200,
    reason: str = "OK",
    headers: dict | None = None,
    body: bytes = b"",
    content_length: bool = True,
) -> bytes:
    lines = [f"HTTP/1.1 {status} {reason}"]
    headers = dict(headers or {})
    if content_length:
        headers.setdefault("Content-Length", str(len(body)))
    lines.extend(f"{key}: {value}" for key, value in headers.items())
    return ("\r\n".join(lines) + "\r\n\r\n").encode("latin-1") + body


class FakeWriter:
    def __init__(self):
        self.data = bytearray()
        self.closed = False

    def write(self, data: bytes):
        self.data.extend(data)

    async def drain(self):
        pass

    def close(self):
        self.closed = True

    def is_closing(self) -> bool:
        return self.closed

    async def wait_closed(self):
        pass

    @property
    def requests(self) -> list[bytes]:
        return [b"GET " + chunk for chunk in bytes(self.data).split(b"GET ")[1:]]


class FakeNetwork:
    """Scripted dialer: each dial to host:port consumes the next queued connection."""

    def __init__(self):
        self._scripts: dict[tuple[str, int], deque[bytes]] = defaultdict(deque)
        self.dials: list[tuple[str, str, int]] = []
        self.connections: list[Connection] = []

    def add_connection(self, host: str, *responses: bytes, port: int = 80):
        self._scripts[(host, port)].append(b"".join(responses))

    async def dial(self, scheme: str, host: str, port: int, timeout: float | None = None) -> Connection:
        self.dials.append((scheme, host, port))
        scripts = self._scripts[(host, port)]
        if not scripts:
            raise ConnectError(f"unable to connect to {host}:{port}")
        connection = Connection(
            scheme=scheme,
            host=host,
            port=port,
            reader=make_reader(scripts.popleft()),
            writer=FakeWriter(),
        )
        self.connections.append(connection)
        return connection

    @property
    def requests(self) -> list[bytes]:
        return [req for conn in self.connections for req in conn.writer.requests]


@pytest.fixture
def network():
    return FakeNetwork()


@pytest.fixture
def response_cache():
    return ResponseCache()


@pytest.fixture
def fetcher(network, response_cache):
    return HttpFetcher(cache=response_cache, dialer=network.dial)
