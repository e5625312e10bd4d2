"""Public parsing entry points."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from epubparse.exceptions import ArchiveParseFailure
from epubparse.normalizer import normalize_book
from epubparse.raw_parse import raw_parse_epub
from epubparse.schemas import Book, ParseFailure, ParseOutcome, ParseSuccess, RawBook

logger = logging.getLogger(__name__)

BytesLike = bytes | bytearray | memoryview


def parse_document(data: BytesLike) -> ParseOutcome:
    """Parse EPUB bytes into a book or a failure reason.

    The archive is parsed exactly once. Failures of the archive boundary are
    returned as ParseFailure carrying the diagnostic text; they are never
    raised from here.

    Args:
        data: Complete EPUB archive bytes. Arbitrary or corrupt input is allowed.

    Returns:
        ParseSuccess with the normalized book, or ParseFailure with the reason.
    """
    try:
        raw = raw_parse_epub(bytes(data))
    except ArchiveParseFailure as exc:
        logger.debug("EPUB parse failed: %s", exc)
        return ParseFailure(reason=str(exc))
    return ParseSuccess(book=normalize_book(raw))


def epub_to_book(data: BytesLike) -> Book:
    """Parse EPUB bytes into a Book.

    Raises:
        ArchiveParseFailure: If the archive cannot be parsed.
    """
    return normalize_book(raw_parse_epub(bytes(data)))


def parse_raw_document(raw: RawBook | Mapping[str, Any]) -> Book:
    """Validate an externally produced raw parse tree and normalize it.

    Mappings are validated node by node, so trees of any depth are accepted.

    Raises:
        pydantic.ValidationError: If ``raw`` does not have the raw tree shape.
        ValueError: If the chapter tree contains a cycle.
    """
    if isinstance(raw, Mapping):
        raw = RawBook.from_mapping(raw)
    elif not isinstance(raw, RawBook):
        raw = RawBook.model_validate(raw)
    return normalize_book(raw)
