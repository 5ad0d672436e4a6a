"""LLM utilities for the note workflow.

Provides a small provider-neutral generation surface:
- LLMGenerator: prompt -> text over anthropic (langchain), openai or ollama
- describe_image: vision transcription (anthropic content blocks)
- TextGenerator: the protocol nodes depend on, so tests can inject fakes
"""

from .generation import (
    GenerationError,
    LLMGenerator,
    TextGenerator,
    extract_response_content,
)
from .models import get_llm, get_openai_client

__all__ = [
    "GenerationError",
    "LLMGenerator",
    "TextGenerator",
    "extract_response_content",
    "get_llm",
    "get_openai_client",
]
