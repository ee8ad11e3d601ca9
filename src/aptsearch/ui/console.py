"""Rich console presentation for APT Search.

This module provides the SearchConsole class which wraps Rich Console with
search-specific styling and implements the SearchView protocol, so the
controller can drive it without knowing it is a terminal.
"""

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from aptsearch import __version__
from aptsearch.ui.formatters import format_caption, format_pagination, format_result

if TYPE_CHECKING:
    from aptsearch.controller.search import SearchController
    from aptsearch.controller.suggestions import SuggestionFetcher


SEARCH_THEME = Theme({
    # Primary colors
    "search.primary": "cyan",
    "search.header": "cyan bold",
    "search.footer": "dim",

    # Status colors
    "search.success": "green",
    "search.error": "red bold",
    "search.warning": "yellow",
    "search.info": "blue",
    "search.loading": "yellow italic",

    # Result elements
    "search.title": "bold blue",
    "search.url": "green",
    "search.score": "magenta",
    "search.caption": "dim italic",

    # Controls
    "search.control": "cyan",
    "search.disabled": "dim strike",
    "search.suggestion": "white",
})


class SearchConsole:
    """Terminal view of a search session.

    Attributes:
        console: The underlying Rich Console instance
        sanitize: Whether result snippets are sanitized before display
    """

    def __init__(
        self,
        no_color: bool = False,
        verbose: bool = False,
        sanitize: bool = True,
        console: Console | None = None,
    ):
        """Initialize the search console.

        Args:
            no_color: Disable colored output
            verbose: Enable verbose output
            sanitize: Sanitize result snippets before display
            console: Pre-built Rich console (e.g. one recording output)
        """
        self.console = console or Console(
            theme=SEARCH_THEME,
            highlight=False,
            no_color=no_color,
        )
        if console is not None:
            self.console.push_theme(SEARCH_THEME)
        self.verbose = verbose
        self.sanitize = sanitize

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console (passthrough to Rich Console)."""
        self.console.print(*args, **kwargs)

    def welcome(self) -> None:
        """Display the interactive-mode banner."""
        self.console.print(f"APT Search {__version__}", style="search.header")
        self.console.print(
            "Type to search. ?text shows suggestions, a number picks one, "
            "n/p change page, q quits.\n",
            style="search.footer",
        )

    # =========================================================================
    # SearchView
    # =========================================================================

    def render(self, controller: "SearchController") -> None:
        """Draw the current search state.

        Args:
            controller: Controller whose state is displayed
        """
        if controller.error:
            self.console.print(
                Panel(Text(controller.error, style="search.error"), border_style="red")
            )

        if not controller.query:
            return

        if not controller.results:
            if controller.error is None:
                self.console.print(f"No results found for '{controller.query}'", style="search.warning")
            return

        self.console.print(
            format_caption(
                controller.start,
                controller.end,
                controller.total_results,
                controller.search_time,
            ),
            style="search.caption",
        )
        self.console.print()

        for offset, result in enumerate(controller.results):
            self.console.print(format_result(controller.start + offset, result, sanitize=self.sanitize))

        self.console.print(
            format_pagination(
                controller.page,
                controller.pagination.page_count,
                controller.can_go_back,
                controller.can_go_forward,
            )
        )

    def render_suggestions(self, fetcher: "SuggestionFetcher") -> None:
        """Draw the suggestion panel when it is visible.

        Args:
            fetcher: Fetcher whose suggestions are displayed
        """
        if fetcher.loading:
            self.console.print("Loading suggestions...", style="search.loading")
            return
        if not fetcher.visible:
            return

        table = Table(show_header=False, box=None, padding=(0, 1))
        table.add_column(style="search.control", justify="right")
        table.add_column(style="search.suggestion")
        for index, suggestion in enumerate(fetcher.suggestions, start=1):
            table.add_row(str(index), suggestion)
        self.console.print(table)

    def scroll_to_top(self) -> None:
        """Start the new page on a fresh screen section."""
        self.console.rule(style="search.footer")

    # =========================================================================
    # Messages
    # =========================================================================

    def error(self, message: str) -> None:
        """Display an error message."""
        self.console.print(f"✗ Error: {message}", style="search.error")

    def warning(self, message: str) -> None:
        """Display a warning message."""
        self.console.print(f"⚠ Warning: {message}", style="search.warning")

    def info(self, message: str) -> None:
        """Display an informational message."""
        self.console.print(f"ℹ {message}", style="search.info")

    @contextmanager
    def loading(self, message: str = "Searching..."):
        """Context manager for showing a loading spinner.

        Args:
            message: Message to show while loading

        Yields:
            The spinner status object
        """
        with self.console.status(
            f"[search.loading]{message}[/search.loading]",
            spinner="dots",
        ) as status:
            yield status

    def show_config(self, config_dict: dict[str, Any]) -> None:
        """Display configuration settings.

        Args:
            config_dict: Dictionary of configuration settings
        """
        table = Table(title="APT Search Configuration", show_header=True)
        table.add_column("Setting", style="search.primary")
        table.add_column("Value", style="search.info")

        for key, value in config_dict.items():
            table.add_row(key, str(value))

        self.console.print(table)


# Global console instance
_console: SearchConsole | None = None


def get_console(no_color: bool = False, verbose: bool = False, sanitize: bool = True) -> SearchConsole:
    """Get the global search console instance.

    Args:
        no_color: Disable colored output
        verbose: Enable verbose output
        sanitize: Sanitize result snippets before display

    Returns:
        SearchConsole: The global console instance
    """
    global _console
    if _console is None:
        _console = SearchConsole(no_color=no_color, verbose=verbose, sanitize=sanitize)
    return _console
