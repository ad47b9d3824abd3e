"""Tests for dialing and per-session connection reuse."""

import asyncio
import ssl

import pytest

from conftest import FakeWriter, make_reader
from pagefetch.core.connection import ConnectionManager, dial
from pagefetch.core.url import resolve
from pagefetch.errors import ConnectError


class TestDial:
    async def test_plain_http(self, monkeypatch):
        """http dials a plain stream."""
        calls = []

        async def fake_open_connection(host, port, **kwargs):
            calls.append((host, port, kwargs))
            return make_reader(b""), FakeWriter()

        monkeypatch.setattr(asyncio, "open_connection", fake_open_connection)
        connection = await dial("http", "example.org", 80)

        assert connection.host == "example.org"
        assert calls[0][:2] == ("example.org", 80)
        assert calls[0][2]["ssl"] is None

    async def test_https_uses_tls_with_server_name(self, monkeypatch):
        """https wraps the stream in TLS validated for the host."""
        calls = []

        async def fake_open_connection(host, port, **kwargs):
            calls.append(kwargs)
            return make_reader(b""), FakeWriter()

        monkeypatch.setattr(asyncio, "open_connection", fake_open_connection)
        await dial("https", "example.org", 443)

        assert isinstance(calls[0]["ssl"], ssl.SSLContext)
        assert calls[0]["ssl"].verify_mode == ssl.CERT_REQUIRED
        assert calls[0]["server_hostname"] == "example.org"

    async def test_failure_raises_connect_error(self, monkeypatch):
        """OS-level failures surface as ConnectError."""
        async def refuse(host, port, **kwargs):
            raise ConnectionRefusedError("refused")

        monkeypatch.setattr(asyncio, "open_connection", refuse)
        with pytest.raises(ConnectError) as exc_info:
            await dial("http", "example.org", 80)
        assert isinstance(exc_info.value.__cause__, ConnectionRefusedError)

    async def test_timeout(self, monkeypatch):
        """A dial exceeding its timeout fails with ConnectError."""
        async def hang(host, port, **kwargs):
            await asyncio.sleep(10)

        monkeypatch.setattr(asyncio, "open_connection", hang)
        with pytest.raises(ConnectError):
            await dial("http", "example.org", 80, timeout=0.01)


class TestConnectionManager:
    async def test_reuses_matching_connection(self, network):
        """A reusable connection to the same origin is handed out again."""
        network.add_connection("example.org", b"")
        manager = ConnectionManager(network.dial)
        target = resolve("http://example.org/")

        first = await manager.connect(target)
        second = await manager.connect(resolve("http://example.org/other"), reuse=True)

        assert first is second
        assert manager.dial_count == 1

    async def test_fresh_dial_releases_old(self, network):
        """Without reuse the old connection is closed before dialing."""
        network.add_connection("example.org", b"")
        network.add_connection("example.org", b"")
        manager = ConnectionManager(network.dial)
        target = resolve("http://example.org/")

        first = await manager.connect(target)
        second = await manager.connect(target, reuse=False)

        assert first is not second
        assert first.writer.closed is True
        assert manager.dial_count == 2

    async def test_never_reuses_other_host(self, network):
        """Reuse is refused when the held connection belongs to another host."""
        network.add_connection("example.org", b"")
        network.add_connection("other.org", b"")
        manager = ConnectionManager(network.dial)

        first = await manager.connect(resolve("http://example.org/"))
        second = await manager.connect(resolve("http://other.org/"), reuse=True)

        assert second.host == "other.org"
        assert first.writer.closed is True

    async def test_release(self, network):
        network.add_connection("example.org", b"")
        manager = ConnectionManager(network.dial)
        connection = await manager.connect(resolve("http://example.org/"))

        await manager.release()

        assert manager.connection is None
        assert connection.writer.closed is True
