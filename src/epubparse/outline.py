"""Render a Book as a summary and an indented chapter tree."""

from __future__ import annotations

from typing import Iterator

from epubparse.schemas import Book, Chapter


def format_outline(book: Book, *, include_text: bool = False) -> str:
    """Create summary lines followed by the chapter tree.

    Args:
        book: Parsed book.
        include_text: Also print the first line of each chapter's own text.
    """
    summary_lines = [f"Title: {book.title}"]
    if book.author is not None:
        summary_lines.append(f"Author: {book.author}")
    if book.language:
        summary_lines.append(f"Language: {book.language}")
    summary_lines.append(f"Chapters: {count_chapters(book)}")
    summary_lines.append(f"Nesting depth: {book.nesting_depth}")

    tree = _create_chapter_tree(book, include_text=include_text)
    if not tree:
        return "\n".join(summary_lines)
    return "\n".join(summary_lines) + "\n\nChapters:\n" + tree


def count_chapters(book: Book) -> int:
    """Count chapters at every level of the tree."""
    return sum(1 for _ in book.iter_chapters())


def _create_chapter_tree(book: Book, *, include_text: bool) -> str:
    lines: list[str] = []
    for chapter, indent in _walk_with_indent(book.chapters):
        prefix = " " * (indent * 4)
        lines.append(prefix + (chapter.title or "(untitled)"))
        if include_text:
            preview = _first_line(chapter.text)
            if preview:
                lines.append(prefix + "  | " + preview)
    return "\n".join(lines)


def _walk_with_indent(chapters: tuple[Chapter, ...]) -> Iterator[tuple[Chapter, int]]:
    stack = [(chapter, 0) for chapter in reversed(chapters)]
    while stack:
        chapter, indent = stack.pop()
        yield chapter, indent
        stack.extend((child, indent + 1) for child in reversed(chapter.subchapters))


def _first_line(text: str, limit: int = 72) -> str:
    line = text.strip().split("\n", 1)[0]
    if len(line) > limit:
        return line[: limit - 3] + "..."
    return line
