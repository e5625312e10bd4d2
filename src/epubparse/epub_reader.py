"""Load EPUB archives with ebooklib and translate its failures."""

from __future__ import annotations

import logging
import re
import zipfile
import zlib
from io import BytesIO

from ebooklib import epub

from epubparse.config import CONTAINER_PATH
from epubparse.exceptions import (
    InvalidUTF8Error,
    MalformedContainerError,
    MalformedContentOpfError,
    MalformedEpubError,
    MalformedTocNcxError,
    MissingArchiveEntryError,
    ZipArchiveError,
)

logger = logging.getLogger(__name__)

# ebooklib error codes raised while opening the ZIP container.
_BAD_ZIP = 0
_LARGE_ZIP = 1
# zipfile reports absent entries as KeyError with this message.
_MISSING_ENTRY = re.compile(r"There is no item named '(?P<name>.*)' in the archive")
_ZIP_READ_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError, NotImplementedError, OSError)


def load_book(data: bytes) -> epub.EpubBook:
    """Read an EPUB archive held in memory.

    ebooklib reads the container, package document, manifest entries, spine
    and NCX eagerly, so every archive-level failure surfaces here.

    Raises:
        ZipArchiveError: If the bytes are not a readable ZIP archive.
        MissingArchiveEntryError: If a manifest entry is absent from the archive.
        MalformedEpubError: If the container, package document or NCX is unusable.
    """
    try:
        book = epub.read_epub(BytesIO(data), options={"ignore_ncx": False})
    except epub.EpubException as exc:
        raise _translate_epub_exception(exc) from exc
    except KeyError as exc:
        raise _translate_missing_entry(exc) from exc
    except _ZIP_READ_ERRORS as exc:
        raise ZipArchiveError() from exc
    except Exception as exc:
        raise MalformedEpubError(
            f"Malformatted EPUB package: {type(exc).__name__}: {exc}"
        ) from exc

    if ncx_item(book) is None:
        raise MalformedContentOpfError("no NCX table of contents in manifest")
    return book


def _translate_epub_exception(exc: epub.EpubException) -> MalformedEpubError | ZipArchiveError:
    if exc.code in (_BAD_ZIP, _LARGE_ZIP):
        return ZipArchiveError()
    message = str(exc.msg)
    if "container" in message:
        return MalformedContainerError()
    if "ncx" in message:
        return MalformedTocNcxError(message.rstrip("."))
    return MalformedEpubError(f"Malformatted EPUB package: {message}")


def _translate_missing_entry(exc: KeyError) -> MalformedEpubError | ZipArchiveError:
    match = _MISSING_ENTRY.match(str(exc.args[0])) if exc.args else None
    if match is None:
        return MalformedEpubError(f"Malformatted EPUB package: missing key {exc}")
    name = match.group("name")
    if name == CONTAINER_PATH:
        return MalformedContainerError()
    return MissingArchiveEntryError(name)


def ncx_item(book: epub.EpubBook) -> epub.EpubNcx | None:
    """Return the NCX manifest item, if the package declares one."""
    return next((item for item in book.get_items() if isinstance(item, epub.EpubNcx)), None)


def dc_metadata(book: epub.EpubBook, name: str) -> str | None:
    """First non-blank Dublin Core value for ``name``, or None."""
    try:
        values = book.get_metadata("DC", name)
    except KeyError:
        # No Dublin Core element at all.
        return None
    for value, _attributes in values:
        if value and value.strip():
            return value.strip()
    return None


def spine_documents(book: epub.EpubBook) -> list[epub.EpubItem]:
    """Return the manifest items referenced by the spine, in reading order.

    Raises:
        MalformedContentOpfError: If a spine entry has no manifest item.
    """
    items: list[epub.EpubItem] = []
    for idref, _linear in book.spine:
        item = book.get_item_with_id(idref)
        if item is None:
            raise MalformedContentOpfError(f"spine item {idref!r} missing from manifest")
        items.append(item)
    return items


def document_text(item: epub.EpubItem) -> str:
    """Decode a content document as UTF-8, dropping a leading BOM.

    ``EpubHtml.get_content`` re-renders the markup, so the archive bytes
    ebooklib stored on the item are decoded instead.

    Raises:
        InvalidUTF8Error: If the document is not valid UTF-8.
    """
    raw = item.content or b""
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise InvalidUTF8Error(item.get_name()) from exc
    logger.debug("Decoded %s (%d bytes)", item.get_name(), len(raw))
    return text
