"""Normalize raw parse trees into the public Book model."""

from __future__ import annotations

from epubparse.schemas import Book, Chapter, RawBook, RawChapter, TextContent
from epubparse.schemas.book import ChapterComponent
from epubparse.tree import build_bottom_up


def normalize_book(raw: RawBook) -> Book:
    """Convert a raw parse tree into a Book.

    Title, author, language and preface are copied verbatim. Every raw chapter
    becomes a Chapter whose components are its non-empty text segments
    followed by its subchapters, both in document order.

    The tree is walked with an explicit work list, so arbitrarily deep inputs
    do not grow the call stack. Each chapter is built from its finished
    children.
    """
    return Book(
        title=raw.title,
        author=raw.author,
        language=raw.language,
        preface_content=raw.preface_content,
        chapters=tuple(normalize_chapters(raw.chapters)),
    )


def normalize_chapters(raw_chapters: list[RawChapter]) -> list[Chapter]:
    """Normalize a sequence of sibling raw chapters, preserving their order."""
    return build_bottom_up(raw_chapters, lambda raw: raw.subchapters, _normalize_chapter)


def _normalize_chapter(raw: RawChapter, subchapters: list[Chapter]) -> Chapter:
    components: list[ChapterComponent] = [
        TextContent(text=segment) for segment in raw.text_segments if segment
    ]
    components.extend(subchapters)
    return Chapter(title=raw.title, components=tuple(components))
