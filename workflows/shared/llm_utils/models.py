"""Provider client construction for the generative-text backend."""

from typing import Any, Optional

from openai import AsyncOpenAI

from core.config import LLMConfig, configure_langsmith

configure_langsmith()

from langchain_anthropic import ChatAnthropic

OLLAMA_DEFAULT_URL = "http://localhost:11434"


def get_llm(
    config: LLMConfig,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
) -> ChatAnthropic:
    """
    Get a configured Anthropic Claude chat model.

    Args:
        config: LLM settings (model, credentials, defaults)
        temperature: Overrides config.temperature for this call
        max_tokens: Overrides config.max_tokens for this call

    Returns:
        ChatAnthropic instance

    Raises:
        ValueError: ANTHROPIC_API_KEY not set and no explicit key given
    """
    api_key = config.resolve_api_key()
    if not api_key:
        raise ValueError("ANTHROPIC_API_KEY not set")

    kwargs: dict[str, Any] = {
        "model": config.model,
        "api_key": api_key,
        "max_tokens": max_tokens if max_tokens is not None else config.max_tokens,
        "temperature": temperature if temperature is not None else config.temperature,
    }
    if config.base_url:
        kwargs["base_url"] = config.base_url

    return ChatAnthropic(**kwargs)


def get_openai_client(config: LLMConfig) -> AsyncOpenAI:
    """Async OpenAI client using the configured key and optional base URL."""
    api_key = config.resolve_api_key()
    if not api_key:
        raise ValueError("OPENAI_API_KEY not set")
    return AsyncOpenAI(api_key=api_key, base_url=config.base_url)


def ollama_url(config: LLMConfig) -> str:
    return (config.base_url or OLLAMA_DEFAULT_URL).rstrip("/") + "/api/generate"
