"""
Content extraction for text, documents, images and web pages.

Usage:
    from core.extraction import ExtractionService, classify_source

    service = ExtractionService(http_timeout=30)
    input_type = classify_source(raw)
    result = await service.extract(raw, input_type)
    print(result.metadata.title, result.metadata.word_count)
"""

from .detection import DOCUMENT_EXTENSIONS, IMAGE_EXTENSIONS, classify_source, is_url
from .epub import extract_from_epub
from .errors import (
    EmptyContentError,
    ExtractionError,
    SourceFetchError,
    SourceNotFoundError,
    UnsupportedSourceError,
)
from .image import ImageDescriber, extract_from_image
from .pdf import extract_from_pdf
from .service import ExtractionService
from .text import extract_from_text
from .types import ExtractedMetadata, ExtractionResult, InputType
from .web import extract_from_url, html_to_markdown, title_from_html

__all__ = [
    # Service
    "ExtractionService",
    # Detection
    "classify_source",
    "is_url",
    "DOCUMENT_EXTENSIONS",
    "IMAGE_EXTENSIONS",
    # Extractors
    "extract_from_text",
    "extract_from_pdf",
    "extract_from_epub",
    "extract_from_image",
    "extract_from_url",
    "html_to_markdown",
    "title_from_html",
    "ImageDescriber",
    # Types
    "InputType",
    "ExtractedMetadata",
    "ExtractionResult",
    # Errors
    "ExtractionError",
    "SourceNotFoundError",
    "SourceFetchError",
    "UnsupportedSourceError",
    "EmptyContentError",
]
