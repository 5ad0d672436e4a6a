"""
Input detection node: classify the raw source and branch on its type.
"""

import logging

from core.extraction import InputType, classify_source
from core.flow import Node

from ..state import NoteState

logger = logging.getLogger(__name__)


class InputDetector(Node):
    """Returns the detected InputType value ("text", "document", "image",
    "url") as the routing label. Classification never fails; anything
    unrecognised is text.
    """

    def __init__(self, name: str = "input_detector"):
        super().__init__(name=name)

    async def prepare(self, state: NoteState) -> str:
        return state.input.raw

    async def execute(self, raw: str) -> InputType:
        return classify_source(raw)

    async def finalize(self, state: NoteState, raw: str, input_type: InputType) -> str:
        state.input.type = input_type
        logger.info(f"Detected input type: {input_type.value}")
        return input_type.value
