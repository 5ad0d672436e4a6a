"""Layer 2: bold the key passages within the layer 1 notes."""

from ..prompts import KEY_PASSAGES_PROMPT, focus_text
from ..state import NoteState
from .layer_base import LayerNode


class KeyPassagesNode(LayerNode):
    level = 2
    temperature = 0.3

    def build_prompt(self, state: NoteState) -> str:
        return KEY_PASSAGES_PROMPT.format(
            focus=focus_text(state.input.focus_area),
            title=state.metadata.title or "Untitled",
            layer_1=state.layers.layer_1 or "",
        )
