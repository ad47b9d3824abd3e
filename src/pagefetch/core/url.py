"""URL resolution: raw string to a structured fetch target."""

from dataclasses import dataclass

import httpx

from ..errors import InvalidViewSource, MalformedURL

VIEW_SOURCE = "view-source"
DEFAULT_PORTS = {"http": 80, "https": 443}
NETWORK_SCHEMES = frozenset(DEFAULT_PORTS)
LOCAL_SCHEMES = frozenset({"file", "data"})


@dataclass(frozen=True)
class TargetURL:
    """A resolved URL plus the fetch policy derived from its scheme."""

    scheme: str
    host: str = ""
    port: int | None = None
    path: str = "/"
    query: str = ""
    view_source: bool = False
    keep_alive_eligible: bool = True
    raw: str = ""

    @property
    def authority(self) -> str:
        """Host, bracketed if IPv6, with the port only when it is not the default."""
        host = f"[{self.host}]" if ":" in self.host else self.host
        if self.port is None or self.port == DEFAULT_PORTS.get(self.scheme):
            return host
        return f"{host}:{self.port}"

    @property
    def request_target(self) -> str:
        """Path and query as sent on the request line."""
        if self.query:
            return f"{self.path}?{self.query}"
        return self.path

    @property
    def url(self) -> str:
        if self.scheme in NETWORK_SCHEMES:
            return f"{self.scheme}://{self.authority}{self.request_target}"
        return self.raw

    @property
    def cache_key(self) -> str:
        if self.view_source:
            return f"{VIEW_SOURCE}:{self.url}"
        return self.url

    def __str__(self) -> str:
        return self.cache_key


def resolve(raw_url: str) -> TargetURL:
    """Parse a raw URL string, unwrapping a ``view-source:`` prefix."""
    raw_url = raw_url.lstrip()
    scheme, sep, rest = raw_url.partition(":")
    if scheme.lower() == VIEW_SOURCE:
        if not sep or not rest:
            raise InvalidViewSource(f"view-source URL has no target: {raw_url!r}")
        try:
            inner = _parse(rest)
        except MalformedURL as exc:
            raise InvalidViewSource(f"view-source target is not a valid URL: {rest!r}") from exc
        if inner.scheme not in NETWORK_SCHEMES:
            raise InvalidViewSource(f"view-source only wraps http(s) URLs, got {inner.scheme!r}")
        return TargetURL(
            scheme=inner.scheme,
            host=inner.host,
            port=inner.port,
            path=inner.path,
            query=inner.query,
            view_source=True,
            keep_alive_eligible=inner.keep_alive_eligible,
            raw=inner.raw,
        )
    return _parse(raw_url)


def _parse(raw_url: str) -> TargetURL:
    scheme, sep, rest = raw_url.partition(":")
    scheme = scheme.lower()
    if not sep or not scheme:
        raise MalformedURL(f"URL has no scheme: {raw_url!r}")

    # data URLs carry their payload verbatim; percent-encoding it would alter the body
    if scheme == "data":
        return TargetURL(scheme=scheme, path=rest, keep_alive_eligible=False, raw=raw_url)

    raw_url = raw_url.rstrip()

    try:
        parsed = httpx.URL(raw_url)
    except httpx.InvalidURL as exc:
        raise MalformedURL(f"invalid URL {raw_url!r}: {exc}") from exc

    if scheme in NETWORK_SCHEMES and not parsed.host:
        raise MalformedURL(f"URL has no host: {raw_url!r}")

    raw_path = parsed.raw_path.decode("ascii").partition("?")[0]
    return TargetURL(
        scheme=scheme,
        host=parsed.host,
        port=parsed.port or DEFAULT_PORTS.get(scheme),
        path=parsed.path if scheme == "file" else (raw_path or "/"),
        query=parsed.query.decode("ascii"),
        keep_alive_eligible=scheme not in LOCAL_SCHEMES,
        raw=raw_url,
    )
