"""Redirect resolution: the REDIRECTING transition of a fetch session."""

import logging
from dataclasses import replace

from ..errors import FetchError, MissingLocationHeader, RedirectLoop, UnsupportedScheme
from .protocols import Response
from .response import keeps_alive
from .session import FetchSession, RedirectState
from .url import NETWORK_SCHEMES, TargetURL, resolve

logger = logging.getLogger(__name__)

# Counts the initial request, so at most this many round trips happen per fetch.
MAX_REDIRECTS = 5


def resolve_location(current: TargetURL, location: str) -> TargetURL:
    """Resolve a Location value against the target that produced it."""
    if location.startswith("/"):
        location = f"{current.scheme}://{current.authority}{location}"
    target = resolve(location)
    if target.scheme not in NETWORK_SCHEMES:
        raise UnsupportedScheme(target.scheme)
    return replace(target, view_source=current.view_source)


def is_cross_origin(current: TargetURL, target: TargetURL) -> bool:
    return target.host != current.host


def follow_redirect(
    session: FetchSession, response: Response, max_redirects: int = MAX_REDIRECTS
) -> TargetURL:
    """Advance session to the target named by a 3xx response."""
    session.state = RedirectState.REDIRECTING
    session.redirect_count += 1
    if session.redirect_count >= max_redirects:
        session.state = RedirectState.FAILED
        raise RedirectLoop(f"redirect limit of {max_redirects} requests exceeded")

    location = response.headers.get("location")
    if location is None:
        session.state = RedirectState.FAILED
        raise MissingLocationHeader(f"{response.status} response has no location header")

    try:
        target = resolve_location(session.target, location)
    except FetchError:
        session.state = RedirectState.FAILED
        raise

    cross_origin = is_cross_origin(session.target, target)
    session.reuse_connection = (
        not cross_origin and session.keep_alive and keeps_alive(response)
    )
    session.keep_alive = not cross_origin and target.keep_alive_eligible
    logger.debug(
        "Redirect %d: %s -> %s (%s, reuse=%s)",
        session.redirect_count,
        session.target.url,
        target.url,
        "cross-origin" if cross_origin else "same-origin",
        session.reuse_connection,
    )
    session.target = target
    session.state = RedirectState.FETCHING
    return target
