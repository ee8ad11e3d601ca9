"""Pytest configuration and fixtures for APT Search tests."""

import asyncio
from typing import Any

import httpx
import pytest

from aptsearch.api.client import SearchAPIClient
from aptsearch.config import Settings
from aptsearch.controller.events import InputEventHub

EMPTY_PAGE = {"results": [], "totalCount": 0}


def make_page(total: int, page: int = 0, size: int = 10, prefix: str = "Result") -> dict[str, Any]:
    """Build a search response body for one page of a ``total``-hit result set."""
    first = page * size
    count = max(0, min(size, total - first))
    return {
        "results": [
            {
                "title": f"{prefix} {first + i + 1}",
                "url": f"http://example.com/{first + i + 1}",
                "snippet": f"snippet <b>{first + i + 1}</b>",
                "score": round(1.0 - (first + i) / 100, 3),
            }
            for i in range(count)
        ],
        "totalCount": total,
    }


class FakeBackend:
    """In-process stand-in for the search backend, served via httpx.MockTransport.

    ``search_replies`` is consumed in order (the last entry repeats). A reply
    is a JSON-serialisable body, an int status code, an exception to raise,
    or a tuple ``(delay_seconds, reply)``.
    """

    def __init__(self):
        self.search_calls: list[dict[str, str]] = []
        self.suggestion_calls: list[str] = []
        self.search_replies: list[Any] = []
        self.suggestion_replies: dict[str, Any] = {}

    async def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/search":
            self.search_calls.append(dict(request.url.params))
            if not self.search_replies:
                reply: Any = EMPTY_PAGE
            elif len(self.search_replies) > 1:
                reply = self.search_replies.pop(0)
            else:
                reply = self.search_replies[0]
            return await self._respond(reply)

        if request.url.path == "/api/suggestions":
            query = request.url.params["q"]
            self.suggestion_calls.append(query)
            return await self._respond(self.suggestion_replies.get(query, []))

        return httpx.Response(404)

    @staticmethod
    async def _respond(reply: Any) -> httpx.Response:
        if isinstance(reply, tuple):
            delay, reply = reply
            await asyncio.sleep(delay)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, int):
            return httpx.Response(reply)
        return httpx.Response(200, json=reply)


@pytest.fixture
def test_settings():
    """Create test settings isolated from the environment."""
    return Settings(
        _env_file=None,
        api_base_url="http://search.test",
        suggestion_debounce_ms=100,
        apt_log_level="DEBUG",
    )


@pytest.fixture
def backend():
    """Create a fake backend with no canned replies."""
    return FakeBackend()


@pytest.fixture
async def http_client(backend: FakeBackend):
    """HTTP client routed to the fake backend."""
    async with httpx.AsyncClient(transport=httpx.MockTransport(backend.handler)) as client:
        yield client


@pytest.fixture
def api_client(test_settings: Settings, http_client: httpx.AsyncClient):
    """Search API client talking to the fake backend."""
    return SearchAPIClient(settings=test_settings, http_client=http_client)


@pytest.fixture
def hub():
    """A private input event hub."""
    return InputEventHub()


@pytest.fixture
def page_factory():
    """Builder for search response bodies."""
    return make_page
