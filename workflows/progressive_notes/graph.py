"""
Progressive notes workflow graph.

    input_detector --text|document|image|url--> content_extractor
        -> layer_1 -> layer_2 -> layer_3 -> layer_4 -> layer_5 -> file_saver

The detector is the only branch point; all four labels converge on the
extractor. Extraction and generation are retried per ProcessingConfig;
file writes are not.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

from core.config import NotesConfig, ProcessingConfig, get_config
from core.extraction import ExtractionService, InputType
from core.flow import Flow, RetryPolicy
from core.logging import end_run, start_run
from workflows.shared.llm_utils import LLMGenerator, TextGenerator

from .nodes import (
    CaptureNode,
    ContentExtractor,
    CreativeOutputNode,
    DistillNode,
    ExecutiveSummaryNode,
    FileSaver,
    InputDetector,
    KeyPassagesNode,
)
from .persistence import ArtifactWriter, MarkdownArtifactWriter
from .state import NoteState, create_initial_state

logger = logging.getLogger(__name__)


def create_note_flow(
    extractor: ExtractionService,
    generator: TextGenerator,
    writer: ArtifactWriter,
    processing: Optional[ProcessingConfig] = None,
) -> Flow:
    """Wire the six-stage note flow around the given collaborators."""
    processing = processing or ProcessingConfig()
    retry = RetryPolicy(max_attempts=processing.max_retries, wait=processing.retry_wait)

    detector = InputDetector()
    content_extractor = ContentExtractor(extractor, retry=retry)
    for input_type in InputType:
        detector.on(input_type.value, content_extractor)

    (
        content_extractor.next(CaptureNode(generator, retry=retry))
        .next(KeyPassagesNode(generator, retry=retry))
        .next(DistillNode(generator, retry=retry))
        .next(ExecutiveSummaryNode(generator, retry=retry))
        .next(CreativeOutputNode(generator, retry=retry))
        .next(FileSaver(writer, concurrency=processing.save_concurrency))
    )

    return Flow(start=detector, name="note_flow")


async def process_source(
    raw: str,
    *,
    config: Optional[NotesConfig] = None,
    focus_area: Optional[str] = None,
    output_format: Optional[str] = None,
    output_directory: Optional[str | Path] = None,
    extractor: Optional[ExtractionService] = None,
    generator: Optional[TextGenerator] = None,
    writer: Optional[ArtifactWriter] = None,
) -> NoteState:
    """
    Run one source through the full note flow.

    Collaborators not passed in are built from config.

    Args:
        raw: Literal text, a document/image path, or a URL
        config: Settings (default: get_config())
        focus_area: Optional lens applied to every layer prompt
        output_format: Preferred layer 5 format, auto-detected when None
        output_directory: Where layer files go (default: config.output_dir)

    Returns:
        Final state, with saved paths in state.output.saved_files

    Raises:
        NodeExecutionError: A stage failed after its retries
    """
    config = config or get_config()
    generator = generator or LLMGenerator(config.llm)
    if extractor is None:
        extractor = ExtractionService(
            http_timeout=config.processing.http_timeout,
            image_describer=getattr(generator, "describe_image", None),
        )
    writer = writer or MarkdownArtifactWriter()

    state = create_initial_state(
        raw,
        focus_area=focus_area,
        output_format=output_format,
        output_directory=output_directory or config.output_dir,
    )
    flow = create_note_flow(extractor, generator, writer, config.processing)

    run_id = uuid.uuid4().hex[:12]
    start_run(run_id)
    logger.info(f"Starting note run {run_id}")
    try:
        result = await flow.run(state)
    finally:
        end_run()

    logger.info(
        f"Note run {run_id} complete: {' -> '.join(result.path)}, "
        f"{len(state.output.saved_files)} files saved"
    )
    return state
