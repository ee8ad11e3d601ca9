"""One mounted search view: fetcher, controller and click-outside listener."""

from aptsearch.api.client import SearchAPIClient
from aptsearch.config import Settings, get_settings
from aptsearch.controller.events import (
    SEARCH_REGION,
    InputEventHub,
    PointerEvent,
    Subscription,
    get_event_hub,
)
from aptsearch.controller.search import SearchController
from aptsearch.controller.suggestions import SuggestionFetcher
from aptsearch.controller.view import SearchView
from aptsearch.logging import get_logger

logger = get_logger("aptsearch.controller.session")


class SearchSession:
    """Wires a SuggestionFetcher to a SearchController for one view.

    Picking a suggestion runs the same new-search path as submitting typed
    text. While mounted, the session holds exactly one listener on the input
    event hub that closes the suggestion panel on clicks outside the search
    region.

    Usage:
        async with SearchSession(client) as session:
            session.type("cats")
            await session.fetcher.wait_idle()
            await session.submit()
    """

    def __init__(
        self,
        client: SearchAPIClient,
        settings: Settings | None = None,
        view: SearchView | None = None,
        hub: InputEventHub | None = None,
    ):
        """Initialize the session.

        Args:
            client: API client shared by fetcher and controller
            settings: Settings instance (uses global if not provided)
            view: Presentation for the controller's side effects
            hub: Input event hub (uses the process-wide one if not provided)
        """
        self.settings = settings or get_settings()
        self.hub = hub or get_event_hub()
        self.controller = SearchController(client, settings=self.settings, view=view)
        self.fetcher = SuggestionFetcher(
            client,
            settings=self.settings,
            on_select=self.controller.select_suggestion,
            on_panel_change=self.controller.panel_changed,
        )
        self.controller.close_suggestions = self.fetcher.commit

        self.input_text = ""
        self._subscription: Subscription | None = None

    @property
    def mounted(self) -> bool:
        return self._subscription is not None and self._subscription.active

    def mount(self) -> None:
        """Attach the click-outside listener. Mounting twice keeps one listener."""
        self._subscription = self.hub.subscribe(self, self._on_pointer)
        logger.debug("Search view mounted")

    async def unmount(self) -> None:
        """Release the listener and stop pending suggestion work."""
        if self._subscription is not None:
            self._subscription.release()
            self._subscription = None
        await self.fetcher.aclose()
        logger.debug("Search view unmounted")

    async def __aenter__(self) -> "SearchSession":
        self.mount()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.unmount()

    def type(self, text: str) -> None:
        """Replace the contents of the search input."""
        self.input_text = text
        self.fetcher.on_query_change(text)

    async def submit(self, text: str | None = None) -> bool:
        """Submit the search input (or ``text``) as a new search."""
        if text is not None:
            self.input_text = text
        return await self.controller.submit_search(self.input_text)

    async def pick(self, index: int) -> bool:
        """Pick the suggestion at a zero-based position.

        Returns:
            bool: True if a suggestion existed at that position
        """
        if not 0 <= index < len(self.fetcher.suggestions):
            return False
        self.input_text = self.fetcher.suggestions[index]
        await self.fetcher.select_index(index)
        return True

    def _on_pointer(self, event: PointerEvent) -> None:
        if event.region != SEARCH_REGION:
            self.fetcher.dismiss()
