"""HTTP/1.1 response parsing from a buffered stream."""

import asyncio
import re

from ..errors import (
    ConnectError,
    InvalidContentLength,
    InvalidStatus,
    MalformedStatusLine,
    MissingContentLength,
    ProtocolError,
    TransferEncodingUnsupported,
)
from .protocols import Response

HEADER_ENCODING = "iso-8859-1"
DIGITS = re.compile(r"[0-9]+")
BLANK_LINES = ("\r\n", "\n")


async def _read_line(reader: asyncio.StreamReader) -> str:
    try:
        line = await reader.readline()
    except ValueError as exc:
        raise ProtocolError("response line exceeds the stream buffer limit") from exc
    except OSError as exc:
        raise ConnectError(f"connection failed while reading response: {exc}") from exc
    return line.decode(HEADER_ENCODING)


async def read_status_line(reader: asyncio.StreamReader) -> tuple[str, int, str]:
    """Read ``<proto> <code> <reason>`` and return its three parts."""
    line = await _read_line(reader)
    if not line:
        raise MalformedStatusLine("connection closed before a status line was received")

    line = line.rstrip("\r\n")
    protocol, sep, remainder = line.partition(" ")
    if not sep:
        raise MalformedStatusLine(f"malformed status line: {line!r}")

    code, _, reason = remainder.strip().partition(" ")
    if not DIGITS.fullmatch(code):
        raise InvalidStatus(f"status {code!r} is not numeric")
    return protocol, int(code), reason.strip()


async def read_headers(reader: asyncio.StreamReader) -> dict[str, str]:
    """Read header lines up to the blank line; keys are lower-cased, last one wins."""
    headers: dict[str, str] = {}
    while True:
        line = await _read_line(reader)
        if not line:
            raise ProtocolError("connection closed while reading headers")
        if line in BLANK_LINES:
            break
        name, _, value = line.partition(":")
        headers[name.strip().lower()] = value.strip()

    if "transfer-encoding" in headers:
        raise TransferEncodingUnsupported(
            f"unexpected transfer-encoding {headers['transfer-encoding']!r}"
        )
    return headers


async def read_body(
    reader: asyncio.StreamReader, headers: dict[str, str], keep_alive: bool
) -> bytes:
    """Read the body framed by content-length on keep-alive, otherwise until close."""
    if not keep_alive:
        try:
            return await reader.read()
        except OSError as exc:
            raise ConnectError(f"connection failed while reading body: {exc}") from exc

    value = headers.get("content-length")
    if value is None:
        raise MissingContentLength("keep-alive response has no content-length")
    if not DIGITS.fullmatch(value):
        raise InvalidContentLength(f"content-length {value!r} is not valid")

    length = int(value)
    try:
        return await reader.readexactly(length)
    except asyncio.IncompleteReadError as exc:
        raise ProtocolError(
            f"connection closed after {len(exc.partial)} of {length} body bytes"
        ) from exc
    except OSError as exc:
        raise ConnectError(f"connection failed while reading body: {exc}") from exc


async def read_response(reader: asyncio.StreamReader, keep_alive: bool) -> Response:
    """Read one complete response off the stream."""
    protocol, status, reason = await read_status_line(reader)
    headers = await read_headers(reader)
    body = await read_body(reader, headers, keep_alive)
    return Response(
        protocol=protocol,
        status=status,
        reason=reason,
        headers=headers,
        body=body,
        keep_alive=keep_alive,
    )


def keeps_alive(response: Response) -> bool:
    """Whether the server left the connection open for another request."""
    connection = response.headers.get("connection", "").lower()
    if response.protocol == "HTTP/1.0":
        return connection == "keep-alive"
    return connection != "close"
