"""Layer 5: creative output in the requested format, or one chosen to fit."""

from ..prompts import (
    AUTO_FORMAT_INSTRUCTION,
    CREATIVE_OUTPUT_PROMPT,
    FORMAT_INSTRUCTION,
    focus_text,
)
from ..state import NoteState
from .layer_base import LayerNode


def format_instruction(output_format: str | None) -> str:
    if output_format:
        return FORMAT_INSTRUCTION.format(output_format=output_format)
    return AUTO_FORMAT_INSTRUCTION


class CreativeOutputNode(LayerNode):
    level = 5
    temperature = 0.7

    def build_prompt(self, state: NoteState) -> str:
        return CREATIVE_OUTPUT_PROMPT.format(
            focus=focus_text(state.input.focus_area),
            format_instruction=format_instruction(state.input.output_format),
            title=state.metadata.title or "Untitled",
            layer_4=state.layers.layer_4 or "",
            layer_3=state.layers.layer_3 or "",
        )
