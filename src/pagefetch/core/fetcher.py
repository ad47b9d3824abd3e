"""Fetch engine: scheme dispatch, caching, and the HTTP/1.1 redirect pipeline."""

import logging

from .cache import default_cache, store
from .connection import ConnectionManager, Dialer, dial
from .decoder import decode_content
from .protocols import Cache, Response
from .redirect import MAX_REDIRECTS, follow_redirect
from .request import DEFAULT_USER_AGENT, build_request
from .response import read_response
from .schemes import DataHandler, FileHandler, Scheme, SchemeHandler
from .session import FetchSession, RedirectState
from .url import TargetURL, resolve

logger = logging.getLogger(__name__)


class HttpFetcher:
    """Fetches a single URL at a time over raw HTTP/1.1 connections."""

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        max_redirects: int = MAX_REDIRECTS,
        accept_gzip: bool = True,
        connect_timeout: float | None = None,
        cache: Cache | None = None,
        dialer: Dialer = dial,
    ):
        self.user_agent = user_agent
        self.max_redirects = max_redirects
        self.accept_gzip = accept_gzip
        self.connect_timeout = connect_timeout
        self.cache = default_cache if cache is None else cache
        self._dialer = dialer
        network = _NetworkHandler(self)
        self._handlers: dict[Scheme, SchemeHandler] = {
            Scheme.HTTP: network,
            Scheme.HTTPS: network,
            Scheme.FILE: FileHandler(),
            Scheme.DATA: DataHandler(),
        }

    async def fetch(self, url: str) -> Response:
        """Fetch a URL and return the response."""
        return await self.fetch_target(resolve(url))

    async def fetch_target(self, target: TargetURL) -> Response:
        handler = self._handlers[Scheme.of(target)]
        return await handler.fetch(target)

    def new_session(self, target: TargetURL) -> FetchSession:
        return FetchSession(
            target=target,
            connections=ConnectionManager(self._dialer, timeout=self.connect_timeout),
        )

    async def run_session(self, session: FetchSession) -> Response:
        """Drive session through its hops until a non-redirect response arrives."""
        try:
            while True:
                connection = await session.connect()
                request = build_request(
                    session.target,
                    keep_alive=session.keep_alive,
                    user_agent=self.user_agent,
                    accept_gzip=self.accept_gzip,
                )
                await connection.send(request.serialize())
                response = await read_response(connection.reader, keep_alive=session.keep_alive)
                logger.debug(
                    "GET %s -> %s %s", session.target.url, response.status, response.reason
                )
                if not response.is_redirect:
                    break
                follow_redirect(session, response, self.max_redirects)
        except Exception:
            session.state = RedirectState.FAILED
            raise
        finally:
            await session.close()

        session.state = RedirectState.DONE
        response.url = session.target.url
        response.view_source = session.target.view_source
        return response


class _NetworkHandler:
    """The http/https strategy: cache lookup, live fetch, decode, cache store."""

    def __init__(self, fetcher: HttpFetcher):
        self.fetcher = fetcher

    async def fetch(self, target: TargetURL) -> Response:
        key = target.cache_key
        cached = self.fetcher.cache.get(key)
        if cached is not None:
            return cached

        session = self.fetcher.new_session(target)
        response = decode_content(await self.fetcher.run_session(session))
        store(self.fetcher.cache, key, response)
        return response
