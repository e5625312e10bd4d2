"""Turn EPUB archive bytes into a raw parse tree."""

from __future__ import annotations

import logging
import posixpath

from bs4 import BeautifulSoup
from ebooklib import epub

from epubparse.config import EPUBPARSE_TEXT_SEPARATOR
from epubparse.epub_reader import (
    dc_metadata,
    document_text,
    load_book,
    ncx_item,
    spine_documents,
)
from epubparse.exceptions import MalformedContentOpfError
from epubparse.html_text import html_to_text, parse_xhtml
from epubparse.navigation import NavPoint, iter_nav_points, nav_points_from_toc, split_src
from epubparse.schemas import RawBook, RawChapter
from epubparse.tree import build_bottom_up

logger = logging.getLogger(__name__)


def raw_parse_epub(data: bytes) -> RawBook:
    """Parse an EPUB archive into a RawBook.

    Args:
        data: Complete EPUB archive bytes.

    Returns:
        The raw parse tree: package metadata, preface text and one raw chapter
        per NCX nav point, nested as in the navMap.

    Raises:
        ArchiveParseFailure: If the archive, package document, navigation or
            content documents cannot be read.
    """
    book = load_book(data)
    title = dc_metadata(book, "title")
    if title is None:
        raise MalformedContentOpfError("missing dc:title")
    ncx = ncx_item(book)
    base_dir = posixpath.dirname(ncx.get_name()) if ncx is not None else ""
    nav_points = nav_points_from_toc(book.toc, base_dir)
    spine = spine_documents(book)
    logger.debug(
        "Loaded EPUB %r: %d spine items, %d top-level nav points",
        title,
        len(spine),
        len(nav_points),
    )
    walker = _SpineWalker(spine, nav_points)
    preface, segments = walker.collect_segments()
    return RawBook(
        title=title,
        author=dc_metadata(book, "creator"),
        language=dc_metadata(book, "language"),
        preface_content=EPUBPARSE_TEXT_SEPARATOR.join(preface),
        chapters=_build_raw_chapters(nav_points, segments),
    )


class _SpineWalker:
    """Distributes spine content over the nav point tree."""

    def __init__(self, spine: list[epub.EpubItem], nav_points: list[NavPoint]) -> None:
        self.spine = spine
        self.nav_points = nav_points
        self._items = {item.get_name(): item for item in spine}
        self._soups: dict[str, BeautifulSoup] = {}

    def collect_segments(self) -> tuple[list[str], dict[NavPoint, list[str]]]:
        """Assign each spine source to the preface or to a nav point.

        Spine items before the first item referenced by the table of contents
        are preface. Later unreferenced items continue the last matched nav
        point. A file referenced by several nav points contributes one source
        per nav point, starting at that nav point's anchor.
        """
        flattened = list(iter_nav_points(self.nav_points))
        segments: dict[NavPoint, list[str]] = {nav_point: [] for nav_point in flattened}

        preface_sources: list[str] = []
        ordered: list[tuple[str, NavPoint]] = []
        last_matched: NavPoint | None = None
        for item in self.spine:
            matches = [nav_point for nav_point in flattened if nav_point.file == item.get_name()]
            if matches:
                for nav_point in matches:
                    ordered.append((nav_point.src, nav_point))
                last_matched = matches[-1]
            elif last_matched is None:
                preface_sources.append(item.get_name())
            else:
                ordered.append((item.get_name(), last_matched))

        for index, (src, nav_point) in enumerate(ordered):
            next_src = ordered[index + 1][0] if index + 1 < len(ordered) else None
            segments[nav_point].append(self._source_text(src, next_src))

        preface: list[str] = []
        for index, src in enumerate(preface_sources):
            if index + 1 < len(preface_sources):
                next_src = preface_sources[index + 1]
            else:
                next_src = ordered[0][0] if ordered else None
            preface.append(self._source_text(src, next_src))

        return preface, segments

    def _source_text(self, src: str, next_src: str | None) -> str:
        """Text from ``src`` up to ``next_src`` when both are in the same file.

        Otherwise the text runs to the end of the file of ``src``.
        """
        path, start_anchor = split_src(src)
        stop_anchor = None
        if next_src is not None:
            next_path, next_anchor = split_src(next_src)
            if next_path == path:
                stop_anchor = next_anchor
        return html_to_text(self._soup(path), start_anchor, stop_anchor)

    def _soup(self, path: str) -> BeautifulSoup:
        soup = self._soups.get(path)
        if soup is None:
            soup = parse_xhtml(document_text(self._items[path]))
            self._soups[path] = soup
        return soup


def _build_raw_chapters(
    nav_points: list[NavPoint], segments: dict[NavPoint, list[str]]
) -> list[RawChapter]:
    """Mirror the nav point tree as raw chapters, building children first."""
    return build_bottom_up(
        nav_points,
        lambda nav_point: nav_point.children,
        lambda nav_point, subchapters: RawChapter(
            title=nav_point.label,
            text_segments=segments[nav_point],
            subchapters=subchapters,
        ),
    )
