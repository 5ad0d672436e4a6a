"""Plain text extraction (pass-through)."""

from workflows.shared.text_utils import count_words, split_sections, title_from_text

from .types import ExtractedMetadata, ExtractionResult


def extract_from_text(text: str) -> ExtractionResult:
    """Return the text unchanged with a title taken from its first line."""
    return ExtractionResult(
        content=text,
        sections=split_sections(text),
        metadata=ExtractedMetadata(
            title=title_from_text(text),
            word_count=count_words(text),
        ),
    )
