"""Layer 4: first-person executive summary."""

from ..prompts import EXECUTIVE_SUMMARY_PROMPT, focus_text
from ..state import NoteState
from .layer_base import LayerNode


class ExecutiveSummaryNode(LayerNode):
    level = 4
    temperature = 0.6

    def build_prompt(self, state: NoteState) -> str:
        return EXECUTIVE_SUMMARY_PROMPT.format(
            focus=focus_text(state.input.focus_area),
            title=state.metadata.title or "Untitled",
            layer_3=state.layers.layer_3 or "",
        )
