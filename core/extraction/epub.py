"""EPUB extraction - chapters in spine order, converted to markdown.

EPUB files are ZIP archives of XHTML documents. The OPF package file lists
the reading order (spine) and carries Dublin Core title/creator metadata.
"""

import logging
import zipfile
from io import BytesIO
from pathlib import Path
from typing import Optional
from xml.etree import ElementTree as ET

import html2text

from workflows.shared.text_utils import count_words, title_from_path

from .errors import ExtractionError, SourceNotFoundError
from .types import ExtractedMetadata, ExtractionResult, InputType

logger = logging.getLogger(__name__)

CHAPTER_SEPARATOR = "\n\n---\n\n"


def validate_epub_bytes(content: bytes) -> bool:
    """ZIP magic bytes plus either an epub mimetype entry or a container.xml."""
    if content[:4] != b"PK\x03\x04":
        return False

    try:
        with zipfile.ZipFile(BytesIO(content)) as zf:
            names = zf.namelist()
            if "mimetype" in names:
                mimetype = zf.read("mimetype").decode("utf-8", errors="ignore").strip()
                if "epub" in mimetype.lower():
                    return True
            return "META-INF/container.xml" in names
    except zipfile.BadZipFile:
        return False


def _find_opf_path(zf: zipfile.ZipFile) -> str:
    try:
        container = ET.fromstring(zf.read("META-INF/container.xml"))
    except KeyError:
        opf_files = [name for name in zf.namelist() if name.endswith(".opf")]
        if not opf_files:
            raise ValueError("Cannot find OPF file")
        return opf_files[0]

    rootfile = container.find(".//{*}rootfile")
    opf_path = rootfile.get("full-path") if rootfile is not None else None
    if not opf_path:
        raise ValueError("OPF file path not found in container.xml")
    return opf_path


def _read_package(zf: zipfile.ZipFile) -> tuple[list[str], Optional[str], Optional[str]]:
    """Return (spine document paths, title, author) from the OPF file."""
    opf_path = _find_opf_path(zf)
    opf = ET.fromstring(zf.read(opf_path))

    opf_dir = str(Path(opf_path).parent)
    prefix = "" if opf_dir == "." else f"{opf_dir}/"

    manifest = {}
    for item in opf.findall(".//{*}item"):
        item_id = item.get("id")
        href = item.get("href")
        media_type = item.get("media-type", "")
        if item_id and href and (
            "html" in media_type or href.endswith((".html", ".xhtml", ".htm"))
        ):
            manifest[item_id] = f"{prefix}{href}"

    spine = [
        manifest[ref.get("idref")]
        for ref in opf.findall(".//{*}itemref")
        if ref.get("idref") in manifest
    ]

    title_el = opf.find(".//{http://purl.org/dc/elements/1.1/}title")
    creator_el = opf.find(".//{http://purl.org/dc/elements/1.1/}creator")
    title = title_el.text.strip() if title_el is not None and title_el.text else None
    author = creator_el.text.strip() if creator_el is not None and creator_el.text else None
    return spine, title, author


def _html_to_markdown(html_content: bytes) -> str:
    h2t = html2text.HTML2Text()
    h2t.ignore_links = False
    h2t.ignore_images = True
    h2t.ignore_emphasis = False
    h2t.body_width = 0  # Don't wrap lines
    return h2t.handle(html_content.decode("utf-8", errors="replace"))


def extract_from_epub(file_path: str) -> ExtractionResult:
    """Convert an EPUB file to markdown, one section per spine chapter.

    Raises:
        SourceNotFoundError: File missing
        ExtractionError: Not an EPUB, or no readable chapters
    """
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise SourceNotFoundError(
            f"EPUB file not found: {file_path}", file_path, InputType.DOCUMENT.value
        )

    content = path.read_bytes()
    if not validate_epub_bytes(content):
        raise ExtractionError(
            f"Not a valid EPUB: {file_path}", file_path, InputType.DOCUMENT.value
        )

    try:
        with zipfile.ZipFile(BytesIO(content)) as zf:
            spine, title, author = _read_package(zf)
            if not spine:
                spine = sorted(
                    name for name in zf.namelist()
                    if name.endswith((".html", ".xhtml", ".htm"))
                )

            chapters = []
            for item_path in spine:
                try:
                    chapter = _html_to_markdown(zf.read(item_path)).strip()
                except KeyError:
                    logger.debug(f"Spine item missing from archive: {item_path}")
                    continue
                if chapter:
                    chapters.append(chapter)
    except (zipfile.BadZipFile, ET.ParseError, ValueError) as e:
        raise ExtractionError(
            f"EPUB processing failed: {e}", file_path, InputType.DOCUMENT.value
        ) from e

    if not chapters:
        raise ExtractionError(
            f"No readable content in EPUB: {file_path}", file_path, InputType.DOCUMENT.value
        )

    markdown = CHAPTER_SEPARATOR.join(chapters)
    logger.debug(f"Extracted {len(markdown)} chars from {len(chapters)} EPUB chapters")

    return ExtractionResult(
        content=markdown,
        sections=chapters,
        metadata=ExtractedMetadata(
            title=title or title_from_path(file_path),
            author=author,
            word_count=count_words(markdown),
        ),
    )
