"""Local configuration for epubparse."""

from __future__ import annotations

import os


DEFAULT_TEXT_SEPARATOR = "\n"

CONTAINER_PATH = "META-INF/container.xml"

# Joins text segments in Chapter.text and the book preface.
EPUBPARSE_TEXT_SEPARATOR = os.getenv("EPUBPARSE_TEXT_SEPARATOR", DEFAULT_TEXT_SEPARATOR)
