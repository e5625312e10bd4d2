"""Shared schemas for epubparse."""

from epubparse.schemas.book import Book, Chapter, ChapterComponent, TextContent
from epubparse.schemas.outcome import ParseFailure, ParseOutcome, ParseSuccess
from epubparse.schemas.raw import RawBook, RawChapter

__all__ = [
    "Book",
    "Chapter",
    "ChapterComponent",
    "ParseFailure",
    "ParseOutcome",
    "ParseSuccess",
    "RawBook",
    "RawChapter",
]
