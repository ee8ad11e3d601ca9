"""Output formatting utilities for APT Search.

This module turns search state into Rich renderables: result entries with
their snippet markup mapped to terminal styles, the "showing X-Y of Z"
caption and the pagination footer.
"""

from bs4 import Comment, NavigableString, Tag
from rich.console import Group
from rich.text import Text

from aptsearch.api.models import SearchResult
from aptsearch.sanitize import parse_fragment, sanitize_snippet

TAG_STYLES = {
    "b": "bold",
    "strong": "bold",
    "em": "italic",
    "i": "italic",
    "u": "underline",
    "mark": "reverse",
}


def truncate_text(
    text: str,
    max_length: int = 500,
    suffix: str = "...",
) -> str:
    """Truncate text to a maximum length.

    Args:
        text: Text to truncate
        max_length: Maximum length
        suffix: Suffix to add when truncated

    Returns:
        str: Truncated text
    """
    if len(text) <= max_length:
        return text

    return text[: max_length - len(suffix)] + suffix


def format_seconds(seconds: float) -> str:
    """Format an elapsed time the way the results caption shows it."""
    return f"{seconds:.2f} seconds"


def format_snippet(snippet: str, sanitize: bool = True) -> Text:
    """Render snippet markup as styled Rich text.

    Args:
        snippet: Snippet markup from the backend
        sanitize: Strip untrusted markup first; when False the caller
            vouches for the snippet

    Returns:
        Text: Styled text with emphasis tags mapped to terminal styles
    """
    markup = sanitize_snippet(snippet) if sanitize else snippet
    text = Text()
    if not markup:
        return text

    def walk(node: Tag, styles: tuple[str, ...]) -> None:
        for child in node.children:
            if isinstance(child, Comment):
                continue
            if isinstance(child, NavigableString):
                text.append(str(child), style=" ".join(styles) or None)
            elif isinstance(child, Tag):
                style = TAG_STYLES.get(child.name)
                walk(child, styles + (style,) if style else styles)

    walk(parse_fragment(markup), ())
    return text


def format_caption(start: int, end: int, total: int, seconds: float | None = None) -> str:
    """Build the "Showing X-Y of Z results" caption.

    Args:
        start: One-based index of the first result shown
        end: One-based index of the last result shown
        total: Total hit count
        seconds: Optional elapsed time of the search

    Returns:
        str: Caption text
    """
    noun = "result" if total == 1 else "results"
    caption = f"Showing {start}-{end} of {total} {noun}"
    if seconds is not None:
        caption += f" ({format_seconds(seconds)})"
    return caption


def format_result(position: int, result: SearchResult, sanitize: bool = True) -> Group:
    """Render one result entry.

    Args:
        position: One-based position in the overall result set
        result: The result record
        sanitize: Whether to sanitize the snippet

    Returns:
        Group: Title line, URL line and snippet
    """
    title = Text(f"{position}. ", style="search.footer")
    title.append(truncate_text(result.title or result.url or "Untitled", 120), style="search.title")
    title.append(f"  {result.score:.3f}", style="search.score")

    url = Text(result.url, style="search.url")
    snippet = format_snippet(result.snippet, sanitize=sanitize)
    return Group(title, url, snippet, Text())


def format_pagination(
    page: int,
    page_count: int,
    can_go_back: bool,
    can_go_forward: bool,
) -> Text:
    """Render the pagination footer with disabled controls dimmed.

    Args:
        page: Zero-based current page
        page_count: Number of pages
        can_go_back: Whether "previous" is enabled
        can_go_forward: Whether "next" is enabled

    Returns:
        Text: Footer line
    """
    footer = Text()
    footer.append("[p] Previous", style="search.control" if can_go_back else "search.disabled")
    footer.append(f"   Page {page + 1} of {max(page_count, 1)}   ", style="search.footer")
    footer.append("[n] Next", style="search.control" if can_go_forward else "search.disabled")
    return footer
