"""Parse result models."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict

from epubparse.schemas.book import Book


class ParseSuccess(BaseModel):
    """The archive was parsed into a book."""

    model_config = ConfigDict(frozen=True)

    ok: Literal[True] = True
    book: Book


class ParseFailure(BaseModel):
    """The archive could not be parsed.

    Attributes:
        reason: Human-readable diagnostic from the archive boundary.
    """

    model_config = ConfigDict(frozen=True)

    ok: Literal[False] = False
    reason: str


ParseOutcome = Union[ParseSuccess, ParseFailure]
