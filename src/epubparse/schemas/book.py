"""Book and chapter models."""

from __future__ import annotations

from typing import Annotated, Any, Iterator, Literal, Mapping, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidatorFunctionWrapHandler,
    computed_field,
    model_validator,
)

from epubparse.config import EPUBPARSE_TEXT_SEPARATOR
from epubparse.tree import build_bottom_up


class TextContent(BaseModel):
    """A run of inline text inside a chapter."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["text"] = "text"
    text: str


ChapterComponent = Annotated[
    Union[TextContent, "Chapter"], Field(discriminator="kind")
]


def _pop_nesting_depth(data: Any) -> tuple[Any, Any]:
    """Split the serialized ``nesting_depth`` off validation input."""
    if isinstance(data, dict) and "nesting_depth" in data:
        data = dict(data)
        return data, data.pop("nesting_depth")
    return data, None


def _check_nesting_depth(model: Chapter | Book, claimed: Any) -> None:
    if claimed is not None and claimed != model.nesting_depth:
        raise ValueError(
            f"nesting_depth {claimed!r} does not match the chapter tree depth {model.nesting_depth}"
        )


class Chapter(BaseModel):
    """A node of the table-of-contents tree.

    A chapter owns an ordered sequence of components, each either inline text
    or a nested chapter, so prose and sub-sections keep their document order.

    Equality, hashing and ``repr`` never recurse, so chapters nested
    arbitrarily deep can be compared and printed.

    Attributes:
        title: Chapter heading (may be empty).
        components: Text and nested chapters in document order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["chapter"] = "chapter"
    title: str
    components: tuple[ChapterComponent, ...] = ()

    @model_validator(mode="wrap")
    @classmethod
    def _derived_depth_matches(cls, data: Any, handler: ValidatorFunctionWrapHandler) -> Chapter:
        # Dumped chapters carry nesting_depth; accept it only if it is right.
        data, claimed = _pop_nesting_depth(data)
        chapter = handler(data)
        _check_nesting_depth(chapter, claimed)
        return chapter

    @computed_field  # type: ignore[prop-decorator]
    @property
    def nesting_depth(self) -> int:
        """Depth of the chapter subtree rooted here (1 for a leaf)."""
        deepest = 0
        stack = [(self, 1)]
        while stack:
            chapter, depth = stack.pop()
            deepest = max(deepest, depth)
            stack.extend((child, depth + 1) for child in chapter.subchapters)
        return deepest

    @property
    def subchapters(self) -> tuple["Chapter", ...]:
        return tuple(c for c in self.components if isinstance(c, Chapter))

    @property
    def text(self) -> str:
        """Text components joined into one string."""
        return EPUBPARSE_TEXT_SEPARATOR.join(
            c.text for c in self.components if isinstance(c, TextContent)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Chapter):
            return NotImplemented
        pending = [(self, other)]
        while pending:
            left, right = pending.pop()
            if left is right:
                continue
            if (
                type(left) is not type(right)
                or left.title != right.title
                or len(left.components) != len(right.components)
            ):
                return False
            for mine, theirs in zip(left.components, right.components):
                if isinstance(mine, Chapter) and isinstance(theirs, Chapter):
                    pending.append((mine, theirs))
                elif isinstance(mine, Chapter) or isinstance(theirs, Chapter) or mine != theirs:
                    return False
        return True

    def __hash__(self) -> int:
        return hash((self.title, len(self.components)))

    def __repr_args__(self) -> Iterator[tuple[str, Any]]:
        yield "title", self.title
        yield "component_count", len(self.components)


Chapter.model_rebuild()


def _chapter_children(node: Any) -> list[Any]:
    """Nested chapter mappings among a serialized chapter's components."""
    if not isinstance(node, Mapping):
        return []
    components = node.get("components")
    if not isinstance(components, (list, tuple)):
        return []
    return [c for c in components if _is_chapter_mapping(c)]


def _is_chapter_mapping(component: Any) -> bool:
    return isinstance(component, Mapping) and component.get("kind") == "chapter"


def _validate_chapter(node: Any, subchapters: list[Chapter]) -> Chapter:
    if isinstance(node, Mapping) and isinstance(node.get("components"), (list, tuple)):
        built = iter(subchapters)
        node = {
            **node,
            "components": tuple(
                next(built) if _is_chapter_mapping(c) else c for c in node["components"]
            ),
        }
    return Chapter.model_validate(node)


class Book(BaseModel):
    """Top-level parsed document.

    Attributes:
        title: Book title from the package metadata.
        author: First creator, or None when the package names none.
        language: Declared language, if any.
        preface_content: Text that precedes the first table-of-contents entry.
        chapters: Top-level chapters in document order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str
    author: str | None = None
    language: str | None = None
    preface_content: str = ""
    chapters: tuple[Chapter, ...] = ()

    @model_validator(mode="wrap")
    @classmethod
    def _derived_depth_matches(cls, data: Any, handler: ValidatorFunctionWrapHandler) -> Book:
        data, claimed = _pop_nesting_depth(data)
        book = handler(data)
        _check_nesting_depth(book, claimed)
        return book

    @computed_field  # type: ignore[prop-decorator]
    @property
    def nesting_depth(self) -> int:
        """Maximum chapter nesting depth (0 when there are no chapters)."""
        return max((chapter.nesting_depth for chapter in self.chapters), default=0)

    def iter_chapters(self) -> Iterator[Chapter]:
        """Yield every chapter in document order, parents before children."""
        stack = list(reversed(self.chapters))
        while stack:
            chapter = stack.pop()
            yield chapter
            stack.extend(reversed(chapter.subchapters))

    def to_dict(self) -> dict[str, Any]:
        """Return the same structure as ``model_dump()`` for trees of any depth.

        pydantic's serializer recurses once per nesting level and gives up on
        deep trees; this builds the nested dicts leaves first instead.
        """

        def dump_chapter(chapter: Chapter, children: list[dict[str, Any]]) -> dict[str, Any]:
            built = iter(children)
            components = tuple(
                next(built) if isinstance(c, Chapter) else c.model_dump()
                for c in chapter.components
            )
            return {
                "kind": chapter.kind,
                "title": chapter.title,
                "components": components,
                "nesting_depth": 1 + max((c["nesting_depth"] for c in children), default=0),
            }

        chapters = tuple(
            build_bottom_up(self.chapters, lambda c: list(c.subchapters), dump_chapter)
        )
        return {
            "title": self.title,
            "author": self.author,
            "language": self.language,
            "preface_content": self.preface_content,
            "chapters": chapters,
            "nesting_depth": max((c["nesting_depth"] for c in chapters), default=0),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Book:
        """Validate the output of ``to_dict``/``model_dump`` for trees of any depth.

        Chapters are validated one at a time, leaves first, so pydantic never
        descends more than one level.

        Raises:
            pydantic.ValidationError: If a node does not have the book shape.
            ValueError: If the chapter tree contains a cycle.
        """
        chapters = data.get("chapters")
        if not isinstance(chapters, (list, tuple)):
            return cls.model_validate(data)
        built = build_bottom_up(chapters, _chapter_children, _validate_chapter)
        return cls.model_validate({**data, "chapters": tuple(built)})
