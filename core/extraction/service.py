"""Extraction service: one entry point dispatching on the detected input type."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import httpx

from workflows.shared.text_utils import count_words

from .epub import extract_from_epub
from .errors import EmptyContentError, UnsupportedSourceError
from .image import ImageDescriber, extract_from_image
from .pdf import extract_from_pdf
from .text import extract_from_text
from .types import ExtractionResult, InputType
from .web import extract_from_url

logger = logging.getLogger(__name__)


class ExtractionService:
    """Turns a raw source into text plus metadata.

    Args:
        http_timeout: Timeout for URL fetches, in seconds
        image_describer: async (image_bytes, media_type, prompt) -> text,
            required for image sources
        http_client: Optional shared httpx client for URL fetches
    """

    def __init__(
        self,
        http_timeout: float = 30.0,
        image_describer: Optional[ImageDescriber] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.http_timeout = http_timeout
        self.image_describer = image_describer
        self.http_client = http_client

    async def extract(self, raw: str, input_type: InputType) -> ExtractionResult:
        """Extract content from a raw source of the given type.

        Raises:
            ExtractionError: Any subclass, when the source can't be turned into
                non-empty text
        """
        input_type = InputType(input_type)
        logger.debug(f"Extracting {input_type.value} source")

        if input_type == InputType.TEXT:
            result = extract_from_text(raw)
        elif input_type == InputType.URL:
            result = await extract_from_url(
                raw.strip(), timeout=self.http_timeout, client=self.http_client
            )
        elif input_type == InputType.DOCUMENT:
            result = await self._extract_document(raw.strip())
        elif input_type == InputType.IMAGE:
            if self.image_describer is None:
                raise UnsupportedSourceError(
                    "Image extraction needs a vision-capable describer",
                    raw,
                    input_type.value,
                )
            result = await extract_from_image(raw.strip(), self.image_describer)
        else:
            raise UnsupportedSourceError(
                f"No extractor for input type {input_type.value}", raw, input_type.value
            )

        if not result.content.strip():
            raise EmptyContentError(
                f"Extraction produced no content from {input_type.value} source",
                raw,
                input_type.value,
            )

        if not result.metadata.word_count:
            result.metadata.word_count = count_words(result.content)

        logger.info(
            f"Extracted {result.metadata.word_count} words "
            f"from {input_type.value} source: {result.metadata.title}"
        )
        return result

    async def _extract_document(self, path: str) -> ExtractionResult:
        suffix = Path(path).suffix.lower()
        if suffix == ".pdf":
            return await asyncio.to_thread(extract_from_pdf, path)
        if suffix == ".epub":
            return await asyncio.to_thread(extract_from_epub, path)
        raise UnsupportedSourceError(
            f"Unsupported document format: {suffix or path}",
            path,
            InputType.DOCUMENT.value,
        )
