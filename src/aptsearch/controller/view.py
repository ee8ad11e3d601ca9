"""Presentation seam between the controller and whatever draws it."""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from aptsearch.controller.search import SearchController
    from aptsearch.controller.suggestions import SuggestionFetcher


@runtime_checkable
class SearchView(Protocol):
    """Anything able to present search state."""

    def render(self, controller: "SearchController") -> None:
        """Draw results, caption, error banner and pagination controls."""
        ...

    def render_suggestions(self, fetcher: "SuggestionFetcher") -> None:
        """Draw the suggestion panel (or nothing when it is hidden)."""
        ...

    def scroll_to_top(self) -> None:
        """Bring the top of the result list into view."""
        ...
