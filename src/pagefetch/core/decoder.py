"""Content decoding for compressed response bodies."""

import zlib

from ..errors import DecodeError
from .protocols import Response

CHUNK_SIZE = 64 * 1024
GZIP_WBITS = 16 + zlib.MAX_WBITS


def gunzip(data: bytes) -> bytes:
    """Inflate a complete gzip stream; any corruption or truncation fails the whole body."""
    inflater = zlib.decompressobj(GZIP_WBITS)
    chunks = []
    try:
        for start in range(0, len(data), CHUNK_SIZE):
            chunks.append(inflater.decompress(data[start:start + CHUNK_SIZE]))
        chunks.append(inflater.flush())
    except zlib.error as exc:
        raise DecodeError(f"corrupt gzip stream: {exc}") from exc

    if not inflater.eof:
        raise DecodeError("truncated gzip stream")
    return b"".join(chunks)


def decode_content(response: Response) -> Response:
    """Decompress the body in place when content-encoding is exactly gzip."""
    if response.headers.get("content-encoding") == "gzip":
        response.body = gunzip(response.body)
    return response
