"""
EPUB Extraction

Reads an EPUB (a ZIP archive) the way a reading system does:

    1. META-INF/container.xml names the package document (OPF)
    2. The OPF manifest maps item ids to archive paths
    3. The OPF spine lists item ids in reading order
    4. Each spine document is parsed and serialized to markdown

A missing container or package document is fatal. A spine document that is
missing or unreadable is skipped so the rest of the book can still be read.

Example:
    >>> markdown = extract(Path("book.epub").read_bytes())
"""

from __future__ import annotations

import io
import logging
import posixpath
import zipfile
import zlib
from urllib.parse import unquote

from bs4 import BeautifulSoup, ParserRejectedMarkup
from lxml import etree

from reedfeed.errors import InvalidFormat
from reedfeed.ingestion.epub.serializer import serialize_document

logger = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"

# Failures reading one archive member
_MEMBER_READ_ERRORS = (zipfile.BadZipFile, zlib.error, NotImplementedError)

_XML_PARSER = etree.XMLParser(resolve_entities=False, no_network=True, recover=False)


def _parse_xml(data: bytes) -> etree._Element:
    return etree.fromstring(data, parser=_XML_PARSER)


def _find_package_path(archive: zipfile.ZipFile) -> str:
    try:
        container = archive.read(CONTAINER_PATH)
    except KeyError:
        raise InvalidFormat("missing container descriptor") from None
    except _MEMBER_READ_ERRORS as exc:
        raise InvalidFormat("missing container descriptor") from exc

    try:
        root = _parse_xml(container)
    except etree.XMLSyntaxError as exc:
        raise InvalidFormat("missing container descriptor") from exc

    paths = root.xpath("//*[local-name()='rootfile']/@full-path")
    if not paths or not paths[0].strip():
        raise InvalidFormat("missing package document")
    return str(paths[0]).strip()


def _read_spine(archive: zipfile.ZipFile, package_path: str) -> list[str]:
    """Return archive paths of the spine documents in reading order."""
    try:
        package = _parse_xml(archive.read(package_path))
    except (KeyError, etree.XMLSyntaxError, *_MEMBER_READ_ERRORS) as exc:
        raise InvalidFormat("missing package document") from exc

    base_dir = posixpath.dirname(package_path)

    manifest: dict[str, str] = {}
    for item in package.xpath("//*[local-name()='manifest']/*[local-name()='item']"):
        item_id = item.get("id")
        href = item.get("href")
        if item_id and href:
            manifest[item_id] = href

    spine: list[str] = []
    for itemref in package.xpath("//*[local-name()='spine']/*[local-name()='itemref']"):
        href = manifest.get(itemref.get("idref", ""))
        if not href:
            logger.warning(f"Spine item {itemref.get('idref')!r} not in manifest, skipping")
            continue
        href = unquote(href.split("#", 1)[0])
        spine.append(posixpath.normpath(posixpath.join(base_dir, href)))

    return spine


def _parse_html(html: bytes) -> BeautifulSoup:
    head = html.lstrip()[:512].lower()
    parser = "lxml-xml" if (head.startswith(b"<?xml") or b"xmlns=" in head) else "lxml"
    return BeautifulSoup(html, parser)


def spine_document_to_markdown(html: bytes) -> str:
    """Serialize one XHTML spine document to markdown."""
    soup = _parse_html(html)
    for tag in soup.find_all(["script", "style"]):
        tag.decompose()

    root = soup.find("body") or soup.find(True)
    if root is None:
        return ""
    return serialize_document(root)


def extract(raw_bytes: bytes) -> str:
    """
    Extract the text of an EPUB as markdown.

    Args:
        raw_bytes: Contents of an .epub file

    Returns:
        Markdown of all spine documents in reading order, separated by a
        blank line

    Raises:
        InvalidFormat: If the archive, its container descriptor, or its
            package document is missing or unreadable
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(raw_bytes))
    except zipfile.BadZipFile as exc:
        raise InvalidFormat("not a zip archive") from exc

    with archive:
        package_path = _find_package_path(archive)
        spine = _read_spine(archive, package_path)
        logger.debug(f"Package {package_path} lists {len(spine)} spine documents")

        parts: list[str] = []
        for path in spine:
            try:
                html = archive.read(path)
            except KeyError:
                logger.warning(f"Spine document {path} missing from archive, skipping")
                continue
            except _MEMBER_READ_ERRORS as exc:
                logger.warning(f"Spine document {path} unreadable ({exc}), skipping")
                continue

            try:
                text = spine_document_to_markdown(html)
            except (ParserRejectedMarkup, ValueError) as exc:
                logger.warning(f"Spine document {path} could not be parsed ({exc}), skipping")
                continue
            if text:
                parts.append(text)

    return "\n\n".join(parts)
