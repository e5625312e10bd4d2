"""epubparse: parse EPUB archives into a typed, nested book model."""

from epubparse.exceptions import (
    ArchiveParseFailure,
    EpubparseError,
    InvalidUTF8Error,
    MalformedContainerError,
    MalformedContentOpfError,
    MalformedEpubError,
    MalformedTocNcxError,
    MissingArchiveEntryError,
    ZipArchiveError,
)
from epubparse.normalizer import normalize_book
from epubparse.outline import format_outline
from epubparse.parsing import epub_to_book, parse_document, parse_raw_document
from epubparse.raw_parse import raw_parse_epub
from epubparse.schemas import (
    Book,
    Chapter,
    ParseFailure,
    ParseOutcome,
    ParseSuccess,
    RawBook,
    RawChapter,
    TextContent,
)

__all__ = [
    "ArchiveParseFailure",
    "Book",
    "Chapter",
    "EpubparseError",
    "InvalidUTF8Error",
    "MalformedContainerError",
    "MalformedContentOpfError",
    "MalformedEpubError",
    "MalformedTocNcxError",
    "MissingArchiveEntryError",
    "ParseFailure",
    "ParseOutcome",
    "ParseSuccess",
    "RawBook",
    "RawChapter",
    "TextContent",
    "ZipArchiveError",
    "epub_to_book",
    "format_outline",
    "normalize_book",
    "parse_document",
    "parse_raw_document",
    "raw_parse_epub",
]
