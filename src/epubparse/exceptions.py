"""Custom exceptions for epubparse."""


class EpubparseError(Exception):
    """Base exception for epubparse operations."""


class ArchiveParseFailure(EpubparseError):
    """The archive could not be turned into a raw parse tree.

    ``str(exc)`` is the diagnostic reported to callers of ``parse_document``.
    """


class ZipArchiveError(ArchiveParseFailure):
    """Error in the underlying ZIP container."""

    def __init__(self, message: str = "Error in underlying Zip archive") -> None:
        super().__init__(message)


class MissingArchiveEntryError(ZipArchiveError):
    """A file referenced by the package is not present in the archive."""

    def __init__(self, path: str) -> None:
        super().__init__(f"File {path} not found in Zip archive")
        self.path = path


class InvalidUTF8Error(ArchiveParseFailure):
    """An archive entry is not valid UTF-8 text."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Invalid UTF8 in {path}")
        self.path = path


class MalformedEpubError(ArchiveParseFailure):
    """The archive is a readable ZIP but not a usable EPUB package."""


class MalformedContainerError(MalformedEpubError):
    """META-INF/container.xml is missing or does not name a package document."""

    def __init__(self, message: str = "Malformatted/missing container.xml file") -> None:
        super().__init__(message)


class MalformedContentOpfError(MalformedEpubError):
    """The OPF package document is missing required parts."""

    def __init__(self, detail: str | None = None) -> None:
        message = "Malformatted content.opf file"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class MalformedTocNcxError(MalformedEpubError):
    """The NCX table of contents cannot be used."""

    def __init__(self, detail: str | None = None) -> None:
        message = "Malformatted toc.ncx file"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
