"""Fetch-scoped mutable state threaded through every hop."""

from dataclasses import dataclass, field
from enum import Enum

from .connection import Connection, ConnectionManager
from .url import TargetURL


class RedirectState(str, Enum):
    FETCHING = "fetching"
    REDIRECTING = "redirecting"
    DONE = "done"
    FAILED = "failed"


@dataclass
class FetchSession:
    """State for one top-level fetch and the redirect hops it triggers."""

    target: TargetURL
    connections: ConnectionManager = field(default_factory=ConnectionManager)
    redirect_count: int = 0
    keep_alive: bool = True
    reuse_connection: bool = False
    state: RedirectState = RedirectState.FETCHING

    def __post_init__(self):
        self.keep_alive = self.keep_alive and self.target.keep_alive_eligible

    @property
    def connection(self) -> Connection | None:
        return self.connections.connection

    async def connect(self) -> Connection:
        return await self.connections.connect(self.target, reuse=self.reuse_connection)

    async def close(self):
        await self.connections.release()
