"""In-memory doubles for the note flow's external collaborators."""

from pathlib import Path
from typing import Any, Mapping, Optional

from core.extraction import (
    ExtractedMetadata,
    ExtractionResult,
    InputType,
    SourceFetchError,
    extract_from_text,
)
from workflows.progressive_notes.persistence import ArtifactWriteError, MarkdownArtifactWriter


class FakeExtractor:
    """Extraction service double.

    Text goes through the real text extractor; sources listed in
    ``unreachable`` fail with SourceFetchError. Every call is recorded.
    """

    def __init__(self, unreachable: tuple[str, ...] = (), result: Optional[ExtractionResult] = None):
        self.unreachable = set(unreachable)
        self.result = result
        self.calls: list[tuple[str, InputType]] = []

    async def extract(self, raw: str, input_type: InputType) -> ExtractionResult:
        self.calls.append((raw, input_type))
        if raw in self.unreachable:
            raise SourceFetchError(
                f"Failed to fetch {raw}: name resolution failed", raw, input_type.value
            )
        if self.result is not None:
            return self.result
        if input_type == InputType.TEXT:
            return extract_from_text(raw)
        return ExtractionResult(
            content=f"Content extracted from {raw}",
            metadata=ExtractedMetadata(title="Fetched Source", word_count=4),
        )


class FakeGenerator:
    """Text generator double: "Generated note <n>" for the nth call.

    The first ``fail_times`` calls raise ConnectionError.
    """

    def __init__(self, fail_times: int = 0):
        self.fail_times = fail_times
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        self.calls.append({"prompt": prompt, "temperature": temperature, "max_tokens": max_tokens})
        if self.fail_times > 0:
            self.fail_times -= 1
            raise ConnectionError("backend unavailable")
        return f"Generated note {len(self.calls)}"


class FailingWriter(MarkdownArtifactWriter):
    """Real markdown writer that fails on the Nth save (1-based)."""

    def __init__(self, fail_on: int):
        self.fail_on = fail_on
        self.attempts = 0

    def save(
        self, directory: str | Path, filename: str, content: str, frontmatter: Mapping[str, Any]
    ) -> str:
        self.attempts += 1
        if self.attempts == self.fail_on:
            raise ArtifactWriteError(
                f"Failed to write {filename}: [Errno 28] No space left on device",
                str(Path(directory) / filename),
            )
        return super().save(directory, filename, content, frontmatter)
