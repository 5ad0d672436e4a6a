"""
Progressive notes workflow.

Turns one source (text, PDF/EPUB, image or web page) into five layered
notes: initial capture, key passages, distilled insights, executive summary
and a creative output, each saved as its own markdown file.

Usage:
    from workflows.progressive_notes import process_source

    state = await process_source("https://example.com/article", focus_area="leadership")
    print(state.output.saved_files)
"""

from .graph import create_note_flow, process_source
from .persistence import ArtifactWriteError, MarkdownArtifactWriter
from .state import (
    LAYER_NAMES,
    NoteState,
    StateWriteError,
    create_initial_state,
)

__all__ = [
    "create_note_flow",
    "process_source",
    "create_initial_state",
    "NoteState",
    "StateWriteError",
    "LAYER_NAMES",
    "MarkdownArtifactWriter",
    "ArtifactWriteError",
]
