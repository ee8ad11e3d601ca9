"""Search and pagination controller.

Owns the authoritative query, page position, total count and current
result set. A new search (typed or picked from suggestions) always restarts
at page 0; page navigation reuses the held query. At most one request is
outstanding per controller, and a response that is no longer the latest
issued is dropped without touching state.
"""

from collections.abc import Callable

from aptsearch.api.client import SearchAPIClient, SearchAPIError
from aptsearch.api.models import SearchResponse, SearchResult
from aptsearch.config import Settings, get_settings
from aptsearch.controller.state import (
    PaginationState,
    PhaseEvent,
    SearchPhase,
    SearchStateMachine,
)
from aptsearch.controller.view import SearchView
from aptsearch.logging import AsyncTimer, get_logger

logger = get_logger("aptsearch.controller.search")

GENERIC_ERROR_MESSAGE = "Search failed. Please try again."


class SearchController:
    """Coordinates search requests and pagination for one view.

    Attributes:
        query: The held query string
        results: Result set of the last successful request
        pagination: Page position and total hit count
        search_time: Seconds taken by the last successful new search
    """

    def __init__(
        self,
        client: SearchAPIClient,
        settings: Settings | None = None,
        view: SearchView | None = None,
        close_suggestions: Callable[[], None] | None = None,
    ):
        """Initialize the controller.

        Args:
            client: API client used for search requests
            settings: Settings instance (uses global if not provided)
            view: Presentation receiving side effects such as scroll-to-top
            close_suggestions: Called when a new search starts
        """
        self.client = client
        self.settings = settings or get_settings()
        self.view = view
        self.close_suggestions = close_suggestions

        self.query = ""
        self.results: list[SearchResult] = []
        self.pagination = PaginationState(page_size=self.settings.page_size)
        self.search_time: float | None = None

        self._machine = SearchStateMachine()
        self._error: str | None = None
        self._sequence = 0

    # =========================================================================
    # Derived state
    # =========================================================================

    @property
    def phase(self) -> SearchPhase:
        return self._machine.phase

    @property
    def loading(self) -> bool:
        """True exactly while a request is outstanding."""
        return self.phase is SearchPhase.SEARCHING

    @property
    def error(self) -> str | None:
        """Message of the last failed request, until the next attempt."""
        return self._error if self.phase is SearchPhase.ERROR else None

    @property
    def page(self) -> int:
        return self.pagination.page

    @property
    def total_results(self) -> int:
        return self.pagination.total_results

    @property
    def start(self) -> int:
        return self.pagination.start

    @property
    def end(self) -> int:
        return self.pagination.end

    @property
    def can_go_back(self) -> bool:
        return not self.loading and self.pagination.can_go_back

    @property
    def can_go_forward(self) -> bool:
        return not self.loading and self.pagination.can_go_forward

    @property
    def request_count(self) -> int:
        """Number of search requests issued so far."""
        return self._sequence

    # =========================================================================
    # Panel tracking
    # =========================================================================

    def panel_changed(self, visible: bool) -> None:
        """Track the suggestion panel opening or closing."""
        self._machine.fire(PhaseEvent.PANEL_OPENED if visible else PhaseEvent.PANEL_CLOSED)

    # =========================================================================
    # Operations
    # =========================================================================

    async def submit_search(self, query: str) -> bool:
        """Start a new search for ``query`` from the first page.

        Args:
            query: Text to search for

        Returns:
            bool: True if a request was issued
        """
        if not query.strip():
            logger.debug("Ignored empty search submission")
            return False
        if self.loading:
            logger.debug("Ignored search submission while loading", query=query)
            return False

        self.query = query
        self.pagination.page = 0
        if self.close_suggestions is not None:
            self.close_suggestions()

        async with AsyncTimer(f"search '{query}'", logger) as timer:
            response = await self._request(query, 0)

        if response is None:
            return True

        self.results = list(response.results)
        self.pagination.total_results = response.total_count
        self.search_time = timer.elapsed
        logger.info(
            "Search completed",
            query=query,
            total=response.total_count,
            elapsed_s=f"{timer.elapsed:.3f}",
        )
        return True

    async def select_suggestion(self, suggestion: str) -> bool:
        """Run a new search for a picked suggestion.

        Identical to submitting the same text by hand.
        """
        return await self.submit_search(suggestion)

    async def change_page(self, delta: int) -> bool:
        """Move ``delta`` pages from the current one, keeping the query.

        Args:
            delta: Signed page offset (usually -1 or +1)

        Returns:
            bool: True if a request was issued
        """
        new_page = self.pagination.page + delta
        if not self.query.strip() or not self.pagination.accepts(new_page):
            logger.debug("Ignored page change", page=self.pagination.page, delta=delta)
            return False
        if self.loading:
            logger.debug("Ignored page change while loading", delta=delta)
            return False

        response = await self._request(self.query, new_page)
        if response is None:
            return True

        self.results = list(response.results)
        self.pagination.page = new_page
        self.pagination.total_results = response.total_count
        if self.view is not None:
            self.view.scroll_to_top()
        return True

    async def next_page(self) -> bool:
        return await self.change_page(1)

    async def previous_page(self) -> bool:
        return await self.change_page(-1)

    # =========================================================================
    # Request lifecycle
    # =========================================================================

    async def _request(self, query: str, page: int) -> SearchResponse | None:
        """Issue one search request and settle the phase.

        Returns:
            SearchResponse | None: The response, or None when the call failed
            or was superseded by a later request
        """
        self._sequence += 1
        sequence = self._sequence
        self._error = None
        self._machine.fire(PhaseEvent.REQUEST_STARTED)

        try:
            response = await self.client.search(query, page=page, size=self.pagination.page_size)
        except (SearchAPIError, ValueError) as e:
            if sequence != self._sequence:
                logger.debug("Discarded stale search failure", query=query, page=page)
                return None
            logger.error("Error fetching search results", query=query, page=page, error=str(e))
            self._error = GENERIC_ERROR_MESSAGE
            self._machine.fire(PhaseEvent.REQUEST_FAILED)
            return None
        except BaseException:
            # Anything else (cancellation included) must not leave loading stuck.
            if sequence == self._sequence:
                self._error = GENERIC_ERROR_MESSAGE
                self._machine.fire(PhaseEvent.REQUEST_FAILED)
            raise

        if sequence != self._sequence:
            logger.debug("Discarded stale search response", query=query, page=page)
            return None

        self._machine.fire(PhaseEvent.REQUEST_SUCCEEDED)
        return response
