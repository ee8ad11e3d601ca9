"""Snippet sanitization at the rendering trust boundary.

Result snippets arrive from the backend with pre-rendered inline markup
(typically ``<b>`` around matched terms). Only a handful of inline emphasis
tags survive, stripped of attributes; script-like elements are removed with
their content and every other tag is unwrapped to its text.
"""

from bs4 import BeautifulSoup, Comment

ALLOWED_TAGS = frozenset({"b", "strong", "em", "i", "mark", "u"})
DROPPED_TAGS = frozenset({"script", "style", "iframe", "object", "embed", "noscript", "template"})


def parse_fragment(markup: str) -> BeautifulSoup:
    """Parse an HTML fragment and strip the document wrapper lxml adds."""
    soup = BeautifulSoup(markup, "lxml")
    for wrapper in soup.find_all(["html", "body"]):
        wrapper.unwrap()
    return soup


def sanitize_snippet(snippet: str) -> str:
    """Reduce a snippet to safe inline markup.

    Args:
        snippet: Snippet as returned by the backend

    Returns:
        str: Markup containing only ALLOWED_TAGS, without attributes
    """
    if not snippet:
        return ""

    soup = parse_fragment(snippet)

    for comment in soup.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in soup.find_all(list(DROPPED_TAGS)):
        if not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(True):
        if tag.name in ALLOWED_TAGS:
            tag.attrs = {}
        else:
            tag.unwrap()

    return str(soup).strip()


def snippet_text(snippet: str) -> str:
    """Plain text of a snippet with all markup removed."""
    if not snippet:
        return ""
    soup = parse_fragment(sanitize_snippet(snippet))
    return soup.get_text().strip()
