"""
Shared machinery for the five layer nodes.

Each layer node builds one prompt from state in prepare, sends it to the
text generator in execute, and stores the response in its own layer slot
in finalize.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from core.flow import Node, RetryPolicy
from workflows.shared.llm_utils import GenerationError, TextGenerator

from ..state import LAYER_NAMES, NoteState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerRequest:
    prompt: str
    temperature: float
    max_tokens: Optional[int] = None


class LayerNode(Node):
    """Base for nodes that generate one layer.

    Subclasses set ``level`` and ``temperature`` and implement
    build_prompt(). There is no fallback text: once retries run out the
    generation error aborts the run.
    """

    level: int = 0
    temperature: float = 0.7
    max_tokens: Optional[int] = None

    def __init__(
        self,
        generator: TextGenerator,
        retry: Optional[RetryPolicy] = None,
        name: Optional[str] = None,
    ):
        super().__init__(name=name or f"layer_{self.level}", retry=retry)
        self.generator = generator

    @property
    def layer_name(self) -> str:
        return LAYER_NAMES[self.level]

    def build_prompt(self, state: NoteState) -> str:
        raise NotImplementedError

    async def prepare(self, state: NoteState) -> LayerRequest:
        return LayerRequest(
            prompt=self.build_prompt(state),
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    async def execute(self, request: LayerRequest) -> str:
        text = await self.generator.generate(
            request.prompt,
            temperature=request.temperature,
            max_tokens=request.max_tokens,
        )
        if not text or not text.strip():
            raise GenerationError(
                f"Layer {self.level} generation returned no text",
                type(self.generator).__name__,
            )
        return text.strip()

    async def finalize(self, state: NoteState, request: LayerRequest, text: str) -> None:
        state.layers.set(self.level, text)
        logger.info(f"Layer {self.level} ({self.layer_name}): {len(text.split())} words")
        return None
