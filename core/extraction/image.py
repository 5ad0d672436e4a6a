"""Image transcription through a vision-capable model.

There is no local OCR engine: the image is sent to the configured
generative backend, which returns the visible text plus a short
description of any non-text content.
"""

import logging
import mimetypes
from pathlib import Path
from typing import Awaitable, Callable

from workflows.shared.text_utils import count_words, title_from_path

from .errors import SourceNotFoundError, UnsupportedSourceError
from .types import ExtractedMetadata, ExtractionResult, InputType

logger = logging.getLogger(__name__)

ImageDescriber = Callable[[bytes, str, str], Awaitable[str]]

TRANSCRIBE_PROMPT = """Transcribe all legible text in this image exactly as written, preserving line breaks and reading order.

After the transcription, add a section headed "## Visual Content" that briefly describes any diagrams, charts, photos or handwriting layout that carries meaning beyond the text.

If the image contains no text and nothing meaningful to describe, return nothing."""

SUPPORTED_MEDIA_TYPES = {"image/png", "image/jpeg", "image/gif", "image/webp"}


def guess_media_type(file_path: str) -> str:
    media_type, _ = mimetypes.guess_type(file_path)
    return media_type or "application/octet-stream"


async def extract_from_image(file_path: str, describe: ImageDescriber) -> ExtractionResult:
    """Transcribe an image file.

    Args:
        file_path: Path to the image
        describe: async (image_bytes, media_type, prompt) -> text

    Raises:
        SourceNotFoundError: File missing
        UnsupportedSourceError: Format the vision model can't read
    """
    path = Path(file_path).expanduser()
    if not path.is_file():
        raise SourceNotFoundError(
            f"Image file not found: {file_path}", file_path, InputType.IMAGE.value
        )

    media_type = guess_media_type(str(path))
    if media_type not in SUPPORTED_MEDIA_TYPES:
        raise UnsupportedSourceError(
            f"Unsupported image format {media_type}: {file_path}",
            file_path,
            InputType.IMAGE.value,
        )

    image_bytes = path.read_bytes()
    logger.info(f"Transcribing {len(image_bytes)} byte {media_type} image")
    content = (await describe(image_bytes, media_type, TRANSCRIBE_PROMPT)).strip()

    return ExtractionResult(
        content=content,
        metadata=ExtractedMetadata(
            title=title_from_path(file_path),
            word_count=count_words(content),
        ),
    )
