"""CSS-selector-based HTML extraction helpers.

Small wrappers around BeautifulSoup that return ``None`` (or a caller
default) instead of raising when an element or attribute is missing.
Every field scraped from the site is best-effort, so callers never
have to guard ``select_one()`` results themselves.
"""

from __future__ import annotations

from bs4 import BeautifulSoup, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML string into a BeautifulSoup tree (``lxml`` parser)."""
    return BeautifulSoup(html, "lxml")


def _collapsed_text(node: BeautifulSoup | Tag) -> str:
    """All descendant text with whitespace runs folded to single spaces."""
    return " ".join(node.get_text(" ").split())


def extract_text(
    element: BeautifulSoup | Tag,
    selector: str,
    *,
    default: str | None = None,
) -> str | None:
    """Extract text from the first matching child element.

    Whitespace is normalized: leading/trailing whitespace is dropped and
    inner runs (newlines, indentation) become one space.  With
    ``selector=""`` the element's own text is returned.  An element that
    exists but has no text yields ``""``; a missing element yields
    *default*.
    """
    if selector == "":
        return _collapsed_text(element)

    match = element.select_one(selector)
    if match is None:
        return default
    return _collapsed_text(match)


def extract_attr(
    element: BeautifulSoup | Tag,
    selector: str,
    attr: str,
    *,
    default: str | None = None,
) -> str | None:
    """Extract an HTML attribute from the first matching child element.

    With ``selector=""`` the attribute is read from *element* itself.
    """
    target = element if selector == "" else element.select_one(selector)
    if target is None:
        return default
    val = target.get(attr)
    if val is None:
        return default
    if isinstance(val, list):
        return " ".join(val)
    return str(val)
