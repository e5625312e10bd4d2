"""Turn ebooklib's table of contents into a nav point tree."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Iterator, Sequence
from urllib.parse import unquote

from ebooklib import epub

from epubparse.exceptions import MalformedTocNcxError


@dataclass(eq=False)
class NavPoint:
    """A table of contents entry.

    ``src`` is a manifest item name and may carry a ``#anchor`` suffix.
    Instances compare by identity so they can key per-entry lookups.
    """

    label: str
    src: str
    children: list[NavPoint] = field(default_factory=list)

    @property
    def file(self) -> str:
        return split_src(self.src)[0]


def nav_points_from_toc(toc: object, base_dir: str = "") -> list[NavPoint]:
    """Convert ``EpubBook.toc`` into nav points.

    ebooklib stores a leaf entry as ``Link`` and an entry with children as a
    ``(Section, children)`` pair. An empty navMap is returned as a lone
    ``Link`` without an href.

    Args:
        toc: The book's table of contents as loaded by ebooklib.
        base_dir: Directory of the NCX relative to the package document;
            entry hrefs resolve against it.

    Raises:
        MalformedTocNcxError: If an entry has no content source.
    """
    if isinstance(toc, list):
        entries: Sequence[object] = toc
    elif isinstance(toc, epub.Link) and not toc.href:
        entries = []
    else:
        entries = [toc]

    roots: list[NavPoint] = []
    # (ebooklib entry, sibling list the converted point is appended to)
    pending: list[tuple[object, list[NavPoint]]] = [
        (entry, roots) for entry in reversed(entries)
    ]
    while pending:
        entry, siblings = pending.pop()
        children: Sequence[object] = ()
        if isinstance(entry, tuple):
            entry, children = entry
        nav_point = _nav_point(entry, base_dir)
        siblings.append(nav_point)
        pending.extend((child, nav_point.children) for child in reversed(children))
    return roots


def _nav_point(entry: object, base_dir: str) -> NavPoint:
    href = getattr(entry, "href", None)
    if not href:
        raise MalformedTocNcxError("could not parse NavPoints")
    return NavPoint(
        label=getattr(entry, "title", None) or "",
        src=resolve_href(base_dir, href),
    )


def iter_nav_points(nav_points: list[NavPoint]) -> Iterator[NavPoint]:
    """Yield all nav points in reading (pre-)order."""
    stack = list(reversed(nav_points))
    while stack:
        nav_point = stack.pop()
        yield nav_point
        stack.extend(reversed(nav_point.children))


def resolve_href(base_dir: str, href: str) -> str:
    """Resolve an href against ``base_dir`` into a manifest item name.

    The fragment, if any, is kept and re-attached unchanged.

    >>> resolve_href("text", "ch%201.xhtml#s2")
    'text/ch 1.xhtml#s2'
    """
    path, sep, fragment = href.partition("#")
    path = unquote(path)
    joined = posixpath.join(base_dir, path) if base_dir else path
    resolved = posixpath.normpath(joined) if joined else ""
    if resolved == ".":
        resolved = ""
    return f"{resolved}{sep}{fragment}"


def split_src(src: str) -> tuple[str, str | None]:
    """Split ``path#anchor`` into its file part and optional anchor."""
    path, sep, anchor = src.partition("#")
    return path, (anchor if sep and anchor else None)
