"""Layer 1: initial capture of the passages worth keeping."""

from ..prompts import CAPTURE_PROMPT, focus_text
from ..state import NoteState
from .layer_base import LayerNode


class CaptureNode(LayerNode):
    level = 1
    temperature = 0.3

    def build_prompt(self, state: NoteState) -> str:
        return CAPTURE_PROMPT.format(
            focus=focus_text(state.input.focus_area),
            title=state.metadata.title or "Untitled",
            content=state.content.text or "",
        )
