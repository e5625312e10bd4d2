"""Extract plain text from XHTML content documents."""

from __future__ import annotations

import logging
import warnings

try:
    from bs4 import BeautifulSoup, XMLParsedAsHTMLWarning
    from bs4.element import NavigableString, PreformattedString, Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for EPUB parsing (pip install beautifulsoup4 lxml)."
    ) from exc

logger = logging.getLogger(__name__)

_SKIP_TAGS = frozenset({"script", "style", "title"})


def parse_xhtml(text: str) -> BeautifulSoup:
    """Parse a content document with the lenient HTML parser."""
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        return BeautifulSoup(text, "lxml")


def get_named_anchor(element: Tag) -> str | None:
    """Return the anchor an element defines: ``name`` on ``<a>``, else ``id``."""
    if element.name == "a" and element.get("name"):
        return str(element["name"])
    anchor = element.get("id")
    return str(anchor) if anchor else None


def html_to_text(
    soup: BeautifulSoup,
    start_anchor: str | None = None,
    stop_anchor: str | None = None,
) -> str:
    """Collect the document's text between two anchors.

    Text nodes are visited in document order, stripped, and joined with single
    spaces. Collection starts at the element carrying ``start_anchor`` (or the
    document start) and stops before the element carrying ``stop_anchor`` (or
    at the document end).

    Args:
        soup: Parsed content document.
        start_anchor: Anchor where the text begins; None for the document start.
        stop_anchor: Anchor where the text ends; None for the document end.

    Returns:
        The collected text, or an empty string if ``start_anchor`` is not found.
    """
    parts: list[str] = []
    started = start_anchor is None
    for node in soup.descendants:
        if isinstance(node, Tag):
            anchor = get_named_anchor(node)
            if anchor is None:
                continue
            if not started:
                started = anchor == start_anchor
            elif stop_anchor is not None and anchor == stop_anchor:
                break
            continue
        if not started or not _is_text(node):
            continue
        text = node.strip()
        if text:
            parts.append(text)

    if not started:
        logger.warning("Anchor %r not found in content document", start_anchor)
    return " ".join(parts)


def _is_text(node: object) -> bool:
    if not isinstance(node, NavigableString) or isinstance(node, PreformattedString):
        return False
    parent = node.parent
    return parent is None or parent.name not in _SKIP_TAGS
