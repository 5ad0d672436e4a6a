"""
State schema for the progressive notes workflow.

One NoteState is created per run and threaded through every node. Each
section is a dataclass whose fields may be assigned at most once after
construction; a second assignment raises StateWriteError. Every write is
appended to the state's journal as (field_path, value type), so tests and
debugging can count writes per field.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Iterator, Optional

from core.config import DEFAULT_OUTPUT_DIR, get_config
from core.extraction import InputType

LAYER_NAMES: dict[int, str] = {
    1: "Initial Capture",
    2: "Key Passages",
    3: "Distilled Insights",
    4: "Executive Summary",
    5: "Creative Output",
}


class StateWriteError(Exception):
    """A write-once state field was assigned twice."""

    def __init__(self, field_path: str):
        self.field_path = field_path
        super().__init__(f"State field '{field_path}' is already set")


def _is_empty(value) -> bool:
    return value is None or value == "" or value == []


class _WriteOnceSection:
    """Base for state sections: fields become read-only once written."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "_section", type(self).__name__)
        object.__setattr__(self, "_journal", None)
        # Values supplied at construction count as already written
        object.__setattr__(
            self,
            "_written",
            {f.name for f in fields(self) if not _is_empty(getattr(self, f.name))},
        )

    def _bind(self, section: str, journal: list) -> None:
        object.__setattr__(self, "_section", section)
        object.__setattr__(self, "_journal", journal)

    def __setattr__(self, name: str, value) -> None:
        written = self.__dict__.get("_written")
        if written is None or name.startswith("_"):
            object.__setattr__(self, name, value)
            return

        path = f"{self._section}.{name}"
        if name in written:
            raise StateWriteError(path)
        object.__setattr__(self, name, value)
        written.add(name)
        if self._journal is not None:
            self._journal.append((path, type(value).__name__))

    def is_set(self, name: str) -> bool:
        return name in self._written


@dataclass
class SourceInput(_WriteOnceSection):
    """Raw source plus user preferences. Only ``type`` is written later."""

    raw: str
    type: Optional[InputType] = None
    focus_area: Optional[str] = None
    output_format: Optional[str] = None


@dataclass
class SourceMetadata(_WriteOnceSection):
    """Written by the extraction node."""

    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    source_type: Optional[str] = None
    word_count: Optional[int] = None


@dataclass
class ExtractedContent(_WriteOnceSection):
    text: Optional[str] = None
    sections: Optional[list[str]] = None


@dataclass
class LayerSlots(_WriteOnceSection):
    """The five progressive layers, each written by its own node."""

    layer_1: Optional[str] = None
    layer_2: Optional[str] = None
    layer_3: Optional[str] = None
    layer_4: Optional[str] = None
    layer_5: Optional[str] = None

    def get(self, level: int) -> Optional[str]:
        if level not in LAYER_NAMES:
            raise ValueError(f"No layer {level}")
        return getattr(self, f"layer_{level}")

    def set(self, level: int, text: str) -> None:
        if level not in LAYER_NAMES:
            raise ValueError(f"No layer {level}")
        setattr(self, f"layer_{level}", text)

    def populated(self) -> Iterator[tuple[int, str, str]]:
        """(level, layer name, text) for every filled slot, ascending."""
        for level, name in LAYER_NAMES.items():
            text = self.get(level)
            if text:
                yield level, name, text


@dataclass
class OutputInfo(_WriteOnceSection):
    """Destination plus naming parts; saved_files only grows."""

    directory: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    timestamp: Optional[str] = None
    slug: Optional[str] = None
    saved_files: list[str] = field(default_factory=list)

    def record_saved(self, path: str) -> None:
        """Append a stored artifact path."""
        self.saved_files.append(path)
        if self._journal is not None:
            self._journal.append((f"{self._section}.saved_files", type(path).__name__))


SECTIONS = ("input", "metadata", "content", "layers", "output")


@dataclass
class NoteState:
    """Shared state for one run of the note flow."""

    input: SourceInput
    metadata: SourceMetadata = field(default_factory=SourceMetadata)
    content: ExtractedContent = field(default_factory=ExtractedContent)
    layers: LayerSlots = field(default_factory=LayerSlots)
    output: OutputInfo = field(default_factory=OutputInfo)
    journal: list[tuple[str, str]] = field(default_factory=list)

    def __post_init__(self) -> None:
        for name in SECTIONS:
            getattr(self, name)._bind(name, self.journal)
        object.__setattr__(self, "_sealed", True)

    def __setattr__(self, name: str, value) -> None:
        if self.__dict__.get("_sealed"):
            raise StateWriteError(name)
        object.__setattr__(self, name, value)

    def writes(self, field_path: str) -> int:
        """Number of journaled writes to a field, e.g. writes("layers.layer_3")."""
        return sum(1 for path, _ in self.journal if path == field_path)


def create_initial_state(
    raw: str,
    focus_area: Optional[str] = None,
    output_format: Optional[str] = None,
    output_directory: Optional[str | Path] = None,
) -> NoteState:
    """Fresh state for a single run; optional fields start empty."""
    directory = Path(output_directory) if output_directory else get_config().output_dir
    return NoteState(
        input=SourceInput(raw=raw, focus_area=focus_area, output_format=output_format),
        output=OutputInfo(directory=directory),
    )
