"""Build small EPUB 2 archives in memory for tests."""

from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from io import BytesIO


XHTML_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
  <head><title>{title}</title></head>
  <body>{body}</body>
</html>
"""

CONTAINER_TEMPLATE = """<?xml version="1.0"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


@dataclass
class Nav:
    """NCX nav point description for the archive builder."""

    label: str | None
    src: str
    children: list["Nav"] = field(default_factory=list)


def render_opf(
    *,
    title: str | None,
    author: str | None,
    language: str | None,
    documents: list[str],
    spine: list[str],
    ncx_href: str | None = "toc.ncx",
) -> str:
    metadata = []
    if title is not None:
        metadata.append(f"<dc:title>{title}</dc:title>")
    if author is not None:
        metadata.append(f"<dc:creator>{author}</dc:creator>")
    if language is not None:
        metadata.append(f"<dc:language>{language}</dc:language>")

    items = [
        f'<item id="{_item_id(name)}" href="{name}" media-type="application/xhtml+xml"/>'
        for name in documents
    ]
    toc_attr = ""
    if ncx_href is not None:
        items.append(f'<item id="ncx" href="{ncx_href}" media-type="application/x-dtbncx+xml"/>')
        toc_attr = ' toc="ncx"'
    itemrefs = [f'<itemref idref="{_item_id(name)}"/>' for name in spine]

    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<package xmlns="http://www.idpf.org/2007/opf" version="2.0" unique-identifier="uid">\n'
        '  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">'
        + "".join(metadata)
        + "</metadata>\n"
        "  <manifest>" + "".join(items) + "</manifest>\n"
        f"  <spine{toc_attr}>" + "".join(itemrefs) + "</spine>\n"
        "</package>\n"
    )


def render_ncx(nav: list[Nav], *, depth: int = 1) -> str:
    counter = iter(range(1, 1_000_000))

    def render(points: list[Nav]) -> str:
        parts = []
        for point in points:
            order = next(counter)
            label = ""
            if point.label is not None:
                label = f"<navLabel><text>{point.label}</text></navLabel>"
            parts.append(
                f'<navPoint id="np{order}" playOrder="{order}">{label}'
                f'<content src="{point.src}"/>{render(point.children)}</navPoint>'
            )
        return "".join(parts)

    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<ncx xmlns="http://www.daisy.org/z3986/2005/ncx/" version="2005-1">\n'
        f'  <head><meta name="dtb:depth" content="{depth}"/></head>\n'
        "  <docTitle><text>toc</text></docTitle>\n"
        f"  <navMap>{render(nav)}</navMap>\n"
        "</ncx>\n"
    )


def build_epub(
    *,
    title: str | None = "Test book",
    author: str | None = "Test Author",
    language: str | None = "en",
    documents: dict[str, str] | None = None,
    spine: list[str] | None = None,
    nav: list[Nav] | None = None,
    opf_dir: str = "OEBPS",
    ncx_href: str | None = "toc.ncx",
    extra_files: dict[str, bytes] | None = None,
    omit: tuple[str, ...] = (),
) -> bytes:
    """Build an EPUB 2 archive in memory.

    ``documents`` maps content file names (relative to ``opf_dir``) to body
    markup. ``extra_files`` are written last and replace generated files with
    the same path. ``omit`` lists archive paths to leave out.
    """
    documents = documents if documents is not None else {"ch1.xhtml": "<p>Hello</p>"}
    spine = spine if spine is not None else list(documents)
    nav = nav if nav is not None else [Nav(name, name) for name in documents]
    prefix = f"{opf_dir}/" if opf_dir else ""
    opf_path = f"{prefix}content.opf"

    files: dict[str, bytes] = {
        "META-INF/container.xml": CONTAINER_TEMPLATE.format(opf_path=opf_path).encode(),
        opf_path: render_opf(
            title=title,
            author=author,
            language=language,
            documents=list(documents),
            spine=spine,
            ncx_href=ncx_href,
        ).encode(),
    }
    if ncx_href is not None:
        files[f"{prefix}{ncx_href}"] = render_ncx(nav).encode()
    for name, body in documents.items():
        files[f"{prefix}{name}"] = XHTML_TEMPLATE.format(title=name, body=body).encode()
    files.update(extra_files or {})

    buffer = BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("mimetype", "application/epub+zip", compress_type=zipfile.ZIP_STORED)
        for path, content in files.items():
            if path in omit:
                continue
            archive.writestr(path, content, compress_type=zipfile.ZIP_DEFLATED)
    return buffer.getvalue()


def _item_id(name: str) -> str:
    return "item-" + "".join(ch if ch.isalnum() else "-" for ch in name)

