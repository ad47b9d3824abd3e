"""Transport connections: dialing plain and TLS streams, and per-session reuse."""

import asyncio
import logging
import ssl
from dataclasses import dataclass
from typing import Awaitable, Callable

from ..errors import ConnectError
from .url import TargetURL

logger = logging.getLogger(__name__)


@dataclass
class Connection:
    """An open byte stream to one scheme/host/port."""

    scheme: str
    host: str
    port: int
    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter

    def matches(self, target: TargetURL) -> bool:
        return (self.scheme, self.host, self.port) == (target.scheme, target.host, target.port)

    @property
    def is_closing(self) -> bool:
        return self.writer.is_closing()

    async def send(self, data: bytes):
        try:
            self.writer.write(data)
            await self.writer.drain()
        except OSError as exc:
            raise ConnectError(
                f"connection to {self.host}:{self.port} failed while sending: {exc}"
            ) from exc

    async def close(self):
        self.writer.close()
        try:
            await self.writer.wait_closed()
        except OSError as exc:
            logger.debug("Error while closing connection to %s:%d: %s", self.host, self.port, exc)


Dialer = Callable[..., Awaitable[Connection]]


async def dial(scheme: str, host: str, port: int, timeout: float | None = None) -> Connection:
    """Open a stream to host:port, wrapped in TLS for https."""
    tls = None
    if scheme == "https":
        tls = ssl.create_default_context()

    logger.debug("Dialing %s://%s:%d", scheme, host, port)
    try:
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port, ssl=tls, server_hostname=host if tls else None),
            timeout=timeout,
        )
    except asyncio.TimeoutError as exc:
        raise ConnectError(f"timed out connecting to {host}:{port}") from exc
    except OSError as exc:
        raise ConnectError(f"unable to connect to {host}:{port}: {exc}") from exc

    return Connection(scheme=scheme, host=host, port=port, reader=reader, writer=writer)


class ConnectionManager:
    """Holds at most one open connection for a fetch session."""

    def __init__(self, dialer: Dialer = dial, timeout: float | None = None):
        self._dialer = dialer
        self.timeout = timeout
        self.connection: Connection | None = None
        self.dial_count = 0

    async def connect(self, target: TargetURL, reuse: bool = False) -> Connection:
        """Return a connection for target, reusing the held one only when allowed."""
        current = self.connection
        if reuse and current is not None and current.matches(target) and not current.is_closing:
            logger.debug("Reusing connection to %s:%d", current.host, current.port)
            return current

        await self.release()
        self.connection = await self._dialer(
            target.scheme, target.host, target.port, timeout=self.timeout
        )
        self.dial_count += 1
        return self.connection

    async def release(self):
        """Close the held connection, if any."""
        if self.connection is not None:
            connection, self.connection = self.connection, None
            await connection.close()
