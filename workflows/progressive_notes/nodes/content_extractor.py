"""
Content extraction node: turn the classified source into text and metadata.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from core.extraction import ExtractionResult, ExtractionService, InputType
from core.flow import Node, RetryPolicy
from workflows.shared.text_utils import generate_timestamp, slugify

from ..state import NoteState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionRequest:
    raw: str
    input_type: InputType


class ContentExtractor(Node):
    """Calls the extraction service; failures are retried, then abort the run.

    Finalize writes metadata, content and the timestamp/slug used to name
    the output files.
    """

    def __init__(
        self,
        extractor: ExtractionService,
        retry: Optional[RetryPolicy] = None,
        name: str = "content_extractor",
    ):
        super().__init__(name=name, retry=retry)
        self.extractor = extractor

    async def prepare(self, state: NoteState) -> ExtractionRequest:
        return ExtractionRequest(
            raw=state.input.raw,
            input_type=state.input.type or InputType.TEXT,
        )

    async def execute(self, request: ExtractionRequest) -> ExtractionResult:
        return await self.extractor.extract(request.raw, request.input_type)

    async def finalize(
        self, state: NoteState, request: ExtractionRequest, result: ExtractionResult
    ) -> None:
        metadata = result.metadata
        title = metadata.title or "Untitled"

        state.metadata.title = title
        state.metadata.source_type = request.input_type.value
        state.metadata.word_count = metadata.word_count
        if metadata.author:
            state.metadata.author = metadata.author
        if metadata.date:
            state.metadata.date = metadata.date

        state.content.text = result.content
        state.content.sections = list(result.sections)

        state.output.timestamp = generate_timestamp()
        state.output.slug = slugify(title)

        logger.info(f"Extracted '{title}' ({metadata.word_count} words)")
        return None
