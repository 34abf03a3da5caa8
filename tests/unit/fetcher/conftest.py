"""Shared fixtures for fetcher tests."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


def _make_response(status: int, body: bytes, headers: dict[str, str] | None) -> MagicMock:
    """Mock aiohttp.ClientResponse yielding *body* in a single chunk."""
    resp = MagicMock()
    resp.status = status
    resp.headers = headers or {}
    resp.content = MagicMock()
    resp.content.read = AsyncMock(side_effect=[body, b""] if body else [b""])
    return resp


class MockHttp:
    """Handles on the patched aiohttp objects used by PinnedFetcher."""

    def __init__(self, client_session: MagicMock, tcp_connector: MagicMock) -> None:
        self.client_session = client_session
        self.tcp_connector = tcp_connector

        self.response_context = MagicMock()
        self.response_context.__aexit__ = AsyncMock(return_value=False)

        self.session = MagicMock()
        self.session.request = MagicMock(return_value=self.response_context)

        session_context = MagicMock()
        session_context.__aenter__ = AsyncMock(return_value=self.session)
        session_context.__aexit__ = AsyncMock(return_value=False)
        client_session.return_value = session_context

        self.respond()

    def respond(
        self,
        status: int = 200,
        body: bytes = b"",
        headers: dict[str, str] | None = None,
    ) -> None:
        """Make every following request return the given response."""

        async def enter(*_: object) -> MagicMock:
            return _make_response(status, body, headers)

        self.response_context.__aenter__ = AsyncMock(side_effect=enter)

    def fail(self, error: BaseException) -> None:
        """Make the next request raise *error* while connecting."""
        self.response_context.__aenter__ = AsyncMock(side_effect=error)


@pytest.fixture
def mock_http() -> Iterator[MockHttp]:
    """Patch ClientSession and TCPConnector; the response defaults to an empty 200."""
    with (
        patch("ssconf.fetcher.fetcher.aiohttp.ClientSession") as client_session,
        patch("ssconf.fetcher.fetcher.aiohttp.TCPConnector") as tcp_connector,
    ):
        yield MockHttp(client_session, tcp_connector)
