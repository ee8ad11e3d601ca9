"""Async client for the search backend.

This module wraps the two GET endpoints the search interface depends on:
the paginated search endpoint and the autocomplete suggestions endpoint.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from pydantic import ValidationError

from aptsearch.api.models import SearchRequest, SearchResponse
from aptsearch.config import Settings, get_settings
from aptsearch.logging import get_logger

logger = get_logger("aptsearch.api.client")


# =============================================================================
# Exceptions
# =============================================================================


class SearchAPIError(Exception):
    """Base exception for search API errors."""

    pass


class SearchAPIConnectionError(SearchAPIError):
    """Raised when the backend cannot be reached or times out."""

    pass


class SearchAPIStatusError(SearchAPIError):
    """Raised when the backend answers with a non-success status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class SearchAPIResponseError(SearchAPIError):
    """Raised when a success response body has the wrong shape."""

    pass


# =============================================================================
# Search API Client
# =============================================================================


class SearchAPIClient:
    """Async client for the search and suggestions endpoints.

    Attributes:
        search_url: Full URL of the search endpoint
        suggestions_url: Full URL of the suggestions endpoint
        timeout: Request timeout in seconds
    """

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize the search API client.

        Args:
            settings: Settings instance (uses global if not provided)
            http_client: Pre-built HTTP client; the caller keeps ownership
        """
        self.settings = settings or get_settings()
        self.search_url = self.settings.search_url
        self.suggestions_url = self.settings.suggestions_url
        self.timeout = self.settings.request_timeout

        self._client = http_client
        self._owns_client = http_client is None

    @asynccontextmanager
    async def _get_client(self) -> AsyncIterator[httpx.AsyncClient]:
        """Get or create an async HTTP client.

        Transport and status failures raised inside the block are
        translated into the SearchAPIError hierarchy.

        Yields:
            httpx.AsyncClient: The HTTP client instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=httpx.Limits(max_keepalive_connections=5, max_connections=10),
            )

        try:
            yield self._client
        except httpx.TimeoutException as e:
            raise SearchAPIConnectionError(
                f"Request to search backend timed out after {self.timeout}s: {e}"
            ) from e
        except httpx.HTTPStatusError as e:
            raise SearchAPIStatusError(
                f"Search backend returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise SearchAPIConnectionError(
                f"Failed to reach search backend at {self.settings.api_base}: {e}"
            ) from e
        except httpx.InvalidURL as e:
            raise SearchAPIConnectionError(
                f"Invalid search backend URL {self.settings.api_base}: {e}"
            ) from e
        except httpx.HTTPError as e:
            raise SearchAPIError(f"Search backend request failed: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SearchAPIClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise SearchAPIResponseError(f"Response body is not valid JSON: {e}") from e

    # =========================================================================
    # Endpoints
    # =========================================================================

    async def search(self, query: str, page: int = 0, size: int | None = None) -> SearchResponse:
        """Fetch one page of results.

        Args:
            query: Search text (sent URL-encoded)
            page: Zero-based page index
            size: Page size (defaults to settings)

        Returns:
            SearchResponse: Results and total hit count

        Raises:
            ValueError: If the request parameters are invalid
            SearchAPIError: If the call fails
        """
        try:
            request = SearchRequest(query=query, page=page, size=size or self.settings.page_size)
        except ValidationError as e:
            raise ValueError(f"Invalid search request: {e}") from e

        logger.debug("Requesting search page", query=query, page=request.page, size=request.size)

        async with self._get_client() as client:
            response = await client.get(self.search_url, params=request.to_params())
            response.raise_for_status()

        data = self._decode(response)
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise SearchAPIResponseError(
                f"Expected a JSON object from search endpoint, got {type(data).__name__}"
            )

        try:
            result = SearchResponse.model_validate(data)
        except ValidationError as e:
            raise SearchAPIResponseError(f"Malformed search response: {e}") from e

        logger.info(
            f"Found {len(result.results)} results out of {result.total_count} total",
            query=query,
            page=request.page,
        )
        return result

    async def suggestions(self, query: str) -> list[str]:
        """Fetch autocomplete suggestions for a prefix.

        Args:
            query: Text typed so far (sent as ``q``)

        Returns:
            list[str]: Ordered completion strings

        Raises:
            ValueError: If the query is blank
            SearchAPIError: If the call fails
        """
        if not query.strip():
            raise ValueError("Suggestion query must not be blank")

        async with self._get_client() as client:
            response = await client.get(self.suggestions_url, params={"q": query})
            response.raise_for_status()

        data = self._decode(response)
        if not isinstance(data, list):
            raise SearchAPIResponseError(
                f"Expected a JSON array from suggestions endpoint, got {type(data).__name__}"
            )

        suggestions = [str(item) for item in data if item is not None]
        logger.debug("Received suggestions", query=query, count=len(suggestions))
        return suggestions
