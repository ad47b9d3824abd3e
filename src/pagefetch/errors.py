"""Typed failures raised by the fetch engine."""


class FetchError(Exception):
    """Base class for every failure a fetch can end with."""


class MalformedURL(FetchError):
    """The URL string could not be parsed."""


class InvalidViewSource(MalformedURL):
    """A view-source URL does not wrap a usable http(s) URL."""


class UnsupportedScheme(FetchError):
    """No fetch strategy exists for the URL scheme."""

    def __init__(self, scheme: str):
        super().__init__(f"unsupported scheme: {scheme!r}")
        self.scheme = scheme


class ConnectError(FetchError):
    """Dialing the host or completing the TLS handshake failed."""


class LocalFileError(FetchError):
    """A file URL points at something that cannot be read."""


class InvalidDataURL(FetchError):
    """A data URL has no comma separating its media type from its content."""


class ProtocolError(FetchError):
    """The server sent something that is not a well-framed HTTP/1.1 response."""


class MalformedStatusLine(ProtocolError):
    pass


class InvalidStatus(ProtocolError):
    pass


class TransferEncodingUnsupported(ProtocolError):
    pass


class MissingContentLength(ProtocolError):
    pass


class InvalidContentLength(ProtocolError):
    pass


class RedirectError(FetchError):
    """Base class for failures while following 3xx responses."""


class RedirectLoop(RedirectError):
    pass


class MissingLocationHeader(RedirectError):
    pass


class DecodeError(FetchError):
    """The response body could not be decompressed."""
