"""Progressive notes configuration and environment setup.

This module provides centralized configuration for the note-taking workflow:
LLM provider selection, retry behaviour, output location, plus development
mode detection and LangSmith tracing setup.

Configuration objects are plain dataclasses whose defaults come from the
environment. They are passed explicitly into the flow and its collaborators,
so two runs with different settings never share mutable globals.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv

load_dotenv()

Provider = Literal["anthropic", "openai", "ollama"]

DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-5-20250929",
    "openai": "gpt-4o-mini",
    "ollama": "llama3.1",
}

DEFAULT_OUTPUT_DIR = "./data/notes"


def is_dev_mode() -> bool:
    """Check if running in development mode.

    Returns:
        True if NOTES_MODE is set to 'dev', False otherwise.
    """
    return os.getenv("NOTES_MODE", "prod").lower() == "dev"


def configure_langsmith() -> None:
    """Configure LangSmith tracing based on NOTES_MODE.

    When NOTES_MODE=dev:
        - Enables LangSmith tracing
        - Sets project to 'progressive-notes-dev'

    When NOTES_MODE=prod (or unset):
        - Disables LangSmith tracing

    Idempotent, safe to call multiple times.
    """
    if is_dev_mode():
        os.environ.setdefault("LANGSMITH_TRACING", "true")
        os.environ.setdefault("LANGSMITH_PROJECT", "progressive-notes-dev")
    else:
        os.environ["LANGSMITH_TRACING"] = "false"


def _default_provider() -> str:
    return os.environ.get("NOTES_LLM_PROVIDER", "anthropic").strip().lower()


@dataclass
class LLMConfig:
    """Configuration for the generative-text backend.

    Environment Variables:
        NOTES_LLM_PROVIDER: anthropic, openai or ollama (default: anthropic)
        NOTES_LLM_MODEL: Model name (default depends on provider)
        NOTES_LLM_BASE_URL: Override the provider endpoint
        NOTES_LLM_TEMPERATURE: Default sampling temperature (default: 0.7)
        NOTES_LLM_MAX_TOKENS: Default output token cap (default: 4096)
        ANTHROPIC_API_KEY / OPENAI_API_KEY: Provider credentials
    """

    provider: str = field(default_factory=_default_provider)
    model: Optional[str] = field(
        default_factory=lambda: os.environ.get("NOTES_LLM_MODEL") or None
    )
    api_key: Optional[str] = None
    base_url: Optional[str] = field(
        default_factory=lambda: os.environ.get("NOTES_LLM_BASE_URL") or None
    )
    temperature: float = field(
        default_factory=lambda: float(os.environ.get("NOTES_LLM_TEMPERATURE", "0.7"))
    )
    max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("NOTES_LLM_MAX_TOKENS", "4096"))
    )

    def __post_init__(self) -> None:
        self.provider = self.provider.lower()
        if self.provider not in DEFAULT_MODELS:
            raise ValueError(
                f"Unsupported LLM provider: {self.provider} "
                f"(expected one of {', '.join(DEFAULT_MODELS)})"
            )
        if self.model is None:
            self.model = DEFAULT_MODELS[self.provider]

    def resolve_api_key(self) -> Optional[str]:
        """Explicit key first, then the provider's environment variable."""
        if self.api_key:
            return self.api_key
        if self.provider == "anthropic":
            return os.getenv("ANTHROPIC_API_KEY")
        if self.provider == "openai":
            return os.getenv("OPENAI_API_KEY")
        return None


@dataclass
class ProcessingConfig:
    """Retry and concurrency settings for flow nodes.

    Environment Variables:
        NOTES_MAX_RETRIES: Attempts per execute phase (default: 3)
        NOTES_RETRY_WAIT: Seconds between attempts (default: 2)
        NOTES_SAVE_CONCURRENCY: Parallel layer renders in the saver (default: 5)
        NOTES_HTTP_TIMEOUT: Timeout for URL extraction in seconds (default: 30)
    """

    max_retries: int = field(
        default_factory=lambda: int(os.environ.get("NOTES_MAX_RETRIES", "3"))
    )
    retry_wait: float = field(
        default_factory=lambda: float(os.environ.get("NOTES_RETRY_WAIT", "2"))
    )
    save_concurrency: int = field(
        default_factory=lambda: int(os.environ.get("NOTES_SAVE_CONCURRENCY", "5"))
    )
    http_timeout: float = field(
        default_factory=lambda: float(os.environ.get("NOTES_HTTP_TIMEOUT", "30"))
    )

    def __post_init__(self) -> None:
        if self.max_retries < 1:
            raise ValueError("max_retries must be >= 1")
        if self.retry_wait < 0:
            raise ValueError("retry_wait must be >= 0")


@dataclass
class NotesConfig:
    """Top-level configuration handed to the note flow."""

    llm: LLMConfig = field(default_factory=LLMConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    output_dir: Path = field(
        default_factory=lambda: Path(os.environ.get("NOTES_OUTPUT_DIR", DEFAULT_OUTPUT_DIR))
    )


_config: NotesConfig | None = None


def get_config() -> NotesConfig:
    """Get the process-wide default NotesConfig instance."""
    global _config
    if _config is None:
        _config = NotesConfig()
    return _config
