"""Inspect the chapter structure of an EPUB file."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from epubparse import ParseFailure, format_outline, parse_document


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Print the title, author and chapter tree of an EPUB.")
    parser.add_argument("--file", required=True, help="Local EPUB file path")
    parser.add_argument("--text", action="store_true", help="Show the first line of each chapter's text")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    path = Path(args.file)
    if not path.is_file():
        parser.error(f"EPUB file not found: {path}")

    outcome = parse_document(path.read_bytes())
    if isinstance(outcome, ParseFailure):
        print(f"Failed to parse {path}: {outcome.reason}", file=sys.stderr)
        return 1

    print(format_outline(outcome.book, include_text=args.text))
    return 0


if __name__ == "__main__":
    sys.exit(main())
