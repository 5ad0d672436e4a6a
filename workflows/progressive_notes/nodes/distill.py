"""Layer 3: distilled insights at roughly 12% of the source length."""

from ..prompts import DISTILL_PROMPT, focus_text
from ..state import NoteState
from .layer_base import LayerNode

DISTILL_RATIO = 0.12
MIN_TARGET_WORDS = 50


def target_word_count(original_words: int) -> int:
    """12% of the source word count, never below 50 words."""
    return max(MIN_TARGET_WORDS, round(original_words * DISTILL_RATIO))


class DistillNode(LayerNode):
    level = 3
    temperature = 0.4

    def build_prompt(self, state: NoteState) -> str:
        return DISTILL_PROMPT.format(
            focus=focus_text(state.input.focus_area),
            title=state.metadata.title or "Untitled",
            target_words=target_word_count(state.metadata.word_count or 0),
            layer_2=state.layers.layer_2 or "",
        )
