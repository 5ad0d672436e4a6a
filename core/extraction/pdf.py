"""PDF text extraction with pypdf."""

import logging
from pathlib import Path

from pypdf import PdfReader

from workflows.shared.text_utils import count_words, split_sections, title_from_path

from .errors import ExtractionError, SourceNotFoundError
from .types import ExtractedMetadata, ExtractionResult, InputType

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"


def validate_pdf_bytes(content: bytes) -> bool:
    """Check for the PDF magic bytes at the start of the file."""
    return content[:4] == PDF_MAGIC


def extract_from_pdf(file_path: str) -> ExtractionResult:
    """Extract text and document info from a PDF file.

    Page texts are joined with blank lines. The title comes from the PDF's
    document info, falling back to one derived from the file name.

    Raises:
        SourceNotFoundError: File missing
        ExtractionError: File is not a readable PDF
    """
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise SourceNotFoundError(
            f"PDF file not found: {file_path}", file_path, InputType.DOCUMENT.value
        )

    data = path.read_bytes()
    if not validate_pdf_bytes(data):
        raise ExtractionError(
            f"Not a PDF file: {file_path}", file_path, InputType.DOCUMENT.value
        )

    try:
        reader = PdfReader(path)
        pages = [(page.extract_text() or "").strip() for page in reader.pages]
        info = reader.metadata
    except Exception as e:
        raise ExtractionError(
            f"Failed to extract PDF content: {e}", file_path, InputType.DOCUMENT.value
        ) from e

    content = "\n\n".join(page for page in pages if page)
    logger.debug(f"Extracted {len(content)} chars from {len(pages)} PDF pages")

    title = (info.title or "").strip() if info else ""
    author = (info.author or "").strip() if info else ""

    sections = split_sections(content)
    if not sections and len(pages) > 1:
        sections = [page for page in pages if page]

    return ExtractionResult(
        content=content,
        sections=sections,
        metadata=ExtractedMetadata(
            title=title or title_from_path(file_path),
            author=author or None,
            word_count=count_words(content),
        ),
    )
