"""Raw parse tree models produced at the archive boundary."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, Field, model_validator

from epubparse.tree import build_bottom_up


class RawChapter(BaseModel):
    """A table-of-contents node as delivered by the raw parser.

    Attributes:
        title: Navigation label, empty when the source has none.
        text_segments: Text chunks owned directly by this node, in reading order.
        subchapters: Child nodes in document order.
    """

    title: str = ""
    text_segments: list[str] = Field(default_factory=list)
    subchapters: list["RawChapter"] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _accept_flat_text(cls, data: Any) -> Any:
        # External trees carry a single ``text`` string instead of segments.
        if isinstance(data, dict) and "text" in data and "text_segments" not in data:
            data = dict(data)
            text = data.pop("text")
            data["text_segments"] = [text] if text is not None else []
        return data


class RawBook(BaseModel):
    """Root of the raw parse tree."""

    title: str
    author: str | None = None
    language: str | None = None
    preface_content: str = ""
    chapters: list[RawChapter] = Field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RawBook:
        """Validate a loosely typed raw tree of any depth.

        Chapters are validated one at a time, leaves first, each receiving its
        already validated subchapters, so pydantic never descends more than
        one level.

        Raises:
            pydantic.ValidationError: If a node does not have the raw tree shape.
            ValueError: If the chapter tree contains a cycle.
        """
        chapters = data.get("chapters")
        if not isinstance(chapters, (list, tuple)):
            return cls.model_validate(data)
        built = build_bottom_up(chapters, _subchapters_of, _validate_raw_chapter)
        return cls.model_validate({**data, "chapters": built})


def _subchapters_of(node: Any) -> list[Any]:
    if isinstance(node, Mapping):
        subchapters = node.get("subchapters")
        if isinstance(subchapters, (list, tuple)):
            return list(subchapters)
    return []


def _validate_raw_chapter(node: Any, subchapters: list[RawChapter]) -> RawChapter:
    if isinstance(node, Mapping) and isinstance(node.get("subchapters"), (list, tuple)):
        node = {**node, "subchapters": subchapters}
    return RawChapter.model_validate(node)
