"""Text generation against the configured provider."""

import base64
import logging
from typing import Any, Optional, Protocol

import httpx
from langchain_core.messages import HumanMessage

from core.config import LLMConfig

from .models import get_llm, get_openai_client, ollama_url

logger = logging.getLogger(__name__)

OLLAMA_TIMEOUT = 300.0


class GenerationError(Exception):
    """The backend answered but produced no usable text."""

    def __init__(self, message: str, provider: str):
        self.provider = provider
        super().__init__(message)


class TextGenerator(Protocol):
    """Anything that turns a prompt into text."""

    async def generate(
        self,
        prompt: str,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str: ...


def extract_response_content(response: Any) -> str:
    """Extract text content from a langchain message (str or content blocks)."""
    if isinstance(response.content, str):
        return response.content.strip()
    if isinstance(response.content, list):
        parts = []
        for block in response.content:
            if isinstance(block, dict):
                parts.append(block.get("text", ""))
            elif hasattr(block, "text"):
                parts.append(block.text)
            else:
                parts.append(str(block))
        return "".join(parts).strip()
    return str(response.content).strip()


class LLMGenerator:
    """TextGenerator for anthropic, openai and ollama backends.

    Clients are built lazily on first use, so a missing API key only fails
    the call that needs it.
    """

    def __init__(self, config: LLMConfig, http_client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self.http_client = http_client
        self._openai = None

    async def generate(
        self,
        prompt: str,
        *,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> str:
        temperature = self.config.temperature if temperature is None else temperature
        max_tokens = self.config.max_tokens if max_tokens is None else max_tokens
        provider = self.config.provider

        logger.debug(
            f"Generating with {provider}/{self.config.model} "
            f"(temperature={temperature}, max_tokens={max_tokens}, prompt={len(prompt)} chars)"
        )

        if provider == "anthropic":
            text = await self._generate_anthropic(prompt, temperature, max_tokens)
        elif provider == "openai":
            text = await self._generate_openai(prompt, temperature, max_tokens)
        elif provider == "ollama":
            text = await self._generate_ollama(prompt, temperature, max_tokens)
        else:
            raise ValueError(f"Unsupported LLM provider: {provider}")

        if not text.strip():
            raise GenerationError(f"Empty response from {provider}", provider)
        return text

    async def _generate_anthropic(self, prompt: str, temperature: float, max_tokens: int) -> str:
        llm = get_llm(self.config, temperature=temperature, max_tokens=max_tokens)
        response = await llm.ainvoke([HumanMessage(content=prompt)])
        return extract_response_content(response)

    async def _generate_openai(self, prompt: str, temperature: float, max_tokens: int) -> str:
        if self._openai is None:
            self._openai = get_openai_client(self.config)
        response = await self._openai.chat.completions.create(
            model=self.config.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature,
            max_tokens=max_tokens,
        )
        return (response.choices[0].message.content or "").strip()

    async def _generate_ollama(self, prompt: str, temperature: float, max_tokens: int) -> str:
        payload = {
            "model": self.config.model,
            "prompt": prompt,
            "stream": False,
            "options": {"temperature": temperature, "num_predict": max_tokens},
        }
        if self.http_client is not None:
            response = await self.http_client.post(ollama_url(self.config), json=payload)
        else:
            async with httpx.AsyncClient(timeout=OLLAMA_TIMEOUT) as client:
                response = await client.post(ollama_url(self.config), json=payload)
        response.raise_for_status()
        return (response.json().get("response") or "").strip()

    async def describe_image(self, image_bytes: bytes, media_type: str, prompt: str) -> str:
        """Send an image plus instructions to a vision model.

        Only the anthropic provider takes image input here; the image is
        sent as a base64 content block ahead of the text prompt.
        """
        if self.config.provider != "anthropic":
            raise ValueError(
                f"Image transcription requires the anthropic provider, got {self.config.provider}"
            )

        llm = get_llm(self.config, temperature=0.0)
        message = HumanMessage(
            content=[
                {
                    "type": "image",
                    "source": {
                        "type": "base64",
                        "media_type": media_type,
                        "data": base64.b64encode(image_bytes).decode("utf-8"),
                    },
                },
                {"type": "text", "text": prompt},
            ]
        )
        response = await llm.ainvoke([message])
        return extract_response_content(response)
