"""Shared fixtures: in-memory PDF and EPUB builders."""

import io
import zipfile

import fitz
import pytest

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

PACKAGE_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="3.0" unique-identifier="id">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:title>Test Book</dc:title>
  </metadata>
  <manifest>
{items}
  </manifest>
  <spine>
{itemrefs}
  </spine>
</package>
"""

CHAPTER_XHTML = """<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
<head><title>Chapter</title><style>p {{ margin: 0; }}</style></head>
<body>{body}</body>
</html>
"""


def build_pdf(pages: list[list[tuple[float, str]]], *, fontsize: float = 11) -> bytes:
    """
    Build a PDF where each page is a list of ``(baseline_from_top, text)``.

    Pages are US Letter (612 x 792).
    """
    document = fitz.open()
    for lines in pages:
        page = document.new_page(width=612, height=792)
        for top, text in lines:
            page.insert_text((72, top), text, fontsize=fontsize)
    data = document.tobytes()
    document.close()
    return data


def build_epub(
    chapters: dict[str, str],
    spine: list[str] | None = None,
    *,
    package_path: str = "OEBPS/content.opf",
    include_container: bool = True,
    include_package: bool = True,
    skip_files: tuple[str, ...] = (),
) -> bytes:
    """
    Build an EPUB from ``{file name: body html}``.

    Chapter files live next to the package document. ``spine`` lists file
    names in reading order (defaults to the order of ``chapters``).
    """
    spine = spine if spine is not None else list(chapters)
    ids = {name: f"item{index}" for index, name in enumerate(chapters)}
    base_dir = package_path.rsplit("/", 1)[0] + "/" if "/" in package_path else ""

    items = "\n".join(
        f'    <item id="{ids[name]}" href="{name}" media-type="application/xhtml+xml"/>'
        for name in chapters
    )
    itemrefs = "\n".join(f'    <itemref idref="{ids[name]}"/>' for name in spine)

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("mimetype", "application/epub+zip")
        if include_container:
            archive.writestr("META-INF/container.xml", CONTAINER_XML.format(path=package_path))
        if include_package:
            archive.writestr(package_path, PACKAGE_OPF.format(items=items, itemrefs=itemrefs))
        for name, body in chapters.items():
            if name in skip_files:
                continue
            archive.writestr(base_dir + name, CHAPTER_XHTML.format(body=body))
    return buffer.getvalue()


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def make_epub():
    return build_epub
