"""Search API client and models."""

from aptsearch.api.client import (
    SearchAPIClient,
    SearchAPIConnectionError,
    SearchAPIError,
    SearchAPIResponseError,
    SearchAPIStatusError,
)
from aptsearch.api.models import SearchRequest, SearchResponse, SearchResult

__all__ = [
    # Client
    "SearchAPIClient",
    # Exceptions
    "SearchAPIError",
    "SearchAPIConnectionError",
    "SearchAPIStatusError",
    "SearchAPIResponseError",
    # Models
    "SearchRequest",
    "SearchResponse",
    "SearchResult",
]
