"""Tests for the provider-neutral text generator (no real API calls)."""

import json
from types import SimpleNamespace

import httpx
import pytest

from core.config import LLMConfig
from workflows.shared.llm_utils import (
    GenerationError,
    LLMGenerator,
    extract_response_content,
    get_llm,
)


def _ollama_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class TestExtractResponseContent:
    def test_plain_string(self):
        assert extract_response_content(SimpleNamespace(content="  hi  ")) == "hi"

    def test_content_blocks_are_joined(self):
        response = SimpleNamespace(content=[{"type": "text", "text": "one "}, {"type": "text", "text": "two"}])
        assert extract_response_content(response) == "one two"


class TestOllama:
    @pytest.mark.asyncio
    async def test_posts_generate_request(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": " local answer "})

        config = LLMConfig(provider="ollama", model="llama3.1", base_url="http://ollama:11434/")
        async with _ollama_client(handler) as client:
            text = await LLMGenerator(config, http_client=client).generate(
                "Summarise this", temperature=0.4, max_tokens=256
            )

        assert text == "local answer"
        assert seen["url"] == "http://ollama:11434/api/generate"
        assert seen["body"]["model"] == "llama3.1"
        assert seen["body"]["stream"] is False
        assert seen["body"]["options"] == {"temperature": 0.4, "num_predict": 256}

    @pytest.mark.asyncio
    async def test_config_defaults_used_when_not_given(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"response": "ok"})

        config = LLMConfig(provider="ollama", temperature=0.9, max_tokens=100)
        async with _ollama_client(handler) as client:
            await LLMGenerator(config, http_client=client).generate("prompt")

        assert seen["body"]["options"] == {"temperature": 0.9, "num_predict": 100}

    @pytest.mark.asyncio
    async def test_empty_response_raises(self):
        config = LLMConfig(provider="ollama")
        async with _ollama_client(lambda r: httpx.Response(200, json={"response": "  "})) as client:
            with pytest.raises(GenerationError) as exc_info:
                await LLMGenerator(config, http_client=client).generate("prompt")

        assert exc_info.value.provider == "ollama"

    @pytest.mark.asyncio
    async def test_http_error_propagates(self):
        config = LLMConfig(provider="ollama")
        async with _ollama_client(lambda r: httpx.Response(500, text="down")) as client:
            with pytest.raises(httpx.HTTPStatusError):
                await LLMGenerator(config, http_client=client).generate("prompt")


class TestCredentials:
    def test_anthropic_requires_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            get_llm(LLMConfig(provider="anthropic"))

    @pytest.mark.asyncio
    async def test_openai_missing_key_fails_at_call_time(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        generator = LLMGenerator(LLMConfig(provider="openai"))

        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            await generator.generate("prompt")

    @pytest.mark.asyncio
    async def test_image_description_needs_anthropic(self):
        generator = LLMGenerator(LLMConfig(provider="ollama"))
        with pytest.raises(ValueError, match="anthropic"):
            await generator.describe_image(b"png", "image/png", "transcribe")
