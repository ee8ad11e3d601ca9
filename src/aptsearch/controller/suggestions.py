"""Debounced autocomplete suggestions for the search input."""

import inspect
from collections.abc import Awaitable, Callable

from aptsearch.api.client import SearchAPIClient, SearchAPIError
from aptsearch.config import Settings, get_settings
from aptsearch.controller.debounce import Debouncer
from aptsearch.logging import get_logger

logger = get_logger("aptsearch.controller.suggestions")

SelectHandler = Callable[[str], Awaitable[None] | None]
PanelHandler = Callable[[bool], None]


class SuggestionFetcher:
    """Fetches completion strings once typing has paused.

    The fetcher never owns the query: it receives each edit by value through
    ``on_query_change`` and reports a picked suggestion upward through
    ``on_select``. Failures are logged and leave the current list in place.

    Attributes:
        suggestions: Completion strings from the last successful fetch
        query: Last query value received
        loading: True while a suggestion request is in flight
        show: Whether the panel may be displayed
    """

    def __init__(
        self,
        client: SearchAPIClient,
        settings: Settings | None = None,
        on_select: SelectHandler | None = None,
        on_panel_change: PanelHandler | None = None,
    ):
        """Initialize the fetcher.

        Args:
            client: API client used for suggestion requests
            settings: Settings instance (uses global if not provided)
            on_select: Called with the chosen suggestion
            on_panel_change: Called with the new visibility whenever it flips
        """
        self.client = client
        self.settings = settings or get_settings()
        self.min_length = self.settings.suggestion_min_length
        self.on_select = on_select
        self.on_panel_change = on_panel_change

        self.suggestions: list[str] = []
        self.query = ""
        self.loading = False
        self.show = False

        self._debouncer = Debouncer(self.settings.debounce_seconds, self._fetch)
        self._requests = 0
        self._generation = 0
        self._visible = False

    @property
    def visible(self) -> bool:
        """Whether the suggestion panel should be rendered."""
        return bool(self.query) and bool(self.suggestions) and self.show

    @property
    def request_count(self) -> int:
        """Number of suggestion requests issued so far."""
        return self._requests

    def on_query_change(self, query: str) -> None:
        """Handle an edit of the search input.

        Short queries clear the list at once without any request; longer ones
        (re)start the debounce window.

        Args:
            query: Current input text
        """
        self.query = query
        self.show = True

        if len(query) < self.min_length:
            # Responses still in flight must not repopulate the list.
            self._generation += 1
            self._debouncer.cancel()
            self.suggestions = []
            self.loading = False
        else:
            self._debouncer.call(query)

        self._notify()

    def focus(self) -> None:
        """The search input gained focus."""
        self.show = True
        self._notify()

    def dismiss(self) -> None:
        """Close the panel without touching the list (click outside)."""
        self.show = False
        self._notify()

    def clear(self) -> None:
        """Drop the list and any pending or in-flight fetch for it."""
        self._generation += 1
        self._debouncer.cancel()
        self.suggestions = []
        self.loading = False
        self._notify()

    def commit(self) -> None:
        """A search was committed: close the panel and clear the list."""
        self.show = False
        self.clear()

    async def select(self, suggestion: str) -> None:
        """Pick a suggestion and hand it to the owner.

        Args:
            suggestion: The chosen completion string
        """
        self._debouncer.cancel()
        self.show = False
        self._notify()

        logger.debug("Suggestion selected", suggestion=suggestion)
        if self.on_select is not None:
            outcome = self.on_select(suggestion)
            if inspect.isawaitable(outcome):
                await outcome

    async def select_index(self, index: int) -> str | None:
        """Pick the suggestion at a zero-based position.

        Returns:
            str | None: The selected string, or None if out of range
        """
        if not 0 <= index < len(self.suggestions):
            return None
        suggestion = self.suggestions[index]
        await self.select(suggestion)
        return suggestion

    async def wait_idle(self) -> None:
        """Wait for any pending debounce window and fetch to complete."""
        await self._debouncer.wait()

    async def aclose(self) -> None:
        """Cancel pending and running suggestion work."""
        await self._debouncer.shutdown()
        self.loading = False

    async def _fetch(self, query: str) -> None:
        self._requests += 1
        self._generation += 1
        generation = self._generation
        self.loading = True

        try:
            suggestions = await self.client.suggestions(query)
        except (SearchAPIError, ValueError) as e:
            logger.warning("Error fetching suggestions", query=query, error=str(e))
            return
        finally:
            if generation == self._generation:
                self.loading = False

        if generation != self._generation:
            logger.debug("Discarded stale suggestions", query=query)
            return

        self.suggestions = suggestions
        self._notify()

    def _notify(self) -> None:
        visible = self.visible
        if visible != self._visible:
            self._visible = visible
            if self.on_panel_change is not None:
                self.on_panel_change(visible)
