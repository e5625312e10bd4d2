"""Test setup for epubparse."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from epub_factory import Nav, build_epub  # noqa: E402


@pytest.fixture
def make_epub() -> Callable[..., bytes]:
    """Factory fixture building EPUB archives in memory."""
    return build_epub


@pytest.fixture
def nested_epub() -> bytes:
    """EPUB titled "Nested example" whose "Chapter 1" has two nested sections."""
    return build_epub(
        title="Nested example",
        author="Jannes",
        documents={
            "cover.xhtml": "<p>Cover page</p>",
            "title.xhtml": "<h1>Nested example</h1><p>by Jannes</p>",
            "ch1.xhtml": (
                "<h1>Chapter 1</h1><p>Intro to chapter one.</p>"
                '<h2 id="s1">Section 1.1</h2><p>First section.</p>'
                '<h2 id="s2">Section 1.2</h2><p>Second section.</p>'
            ),
            "ch2.xhtml": "<h1>Chapter 2</h1><p>Second chapter text.</p>",
            "ch3.xhtml": "<h1>Chapter 3</h1><p>Third chapter text.</p>",
        },
        nav=[
            Nav("Nested example", "title.xhtml"),
            Nav(
                "Chapter 1",
                "ch1.xhtml",
                [Nav("Section 1.1", "ch1.xhtml#s1"), Nav("Section 1.2", "ch1.xhtml#s2")],
            ),
            Nav("Chapter 2", "ch2.xhtml"),
            Nav("Chapter 3", "ch3.xhtml"),
        ],
    )
