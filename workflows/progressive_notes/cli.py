"""
Command line entry point for progressive notes.

Usage:
    progressive-notes article.pdf
    progressive-notes https://example.com/post -f "team habits" --format checklist
    progressive-notes notes.md -o ./my-notes -p openai -m gpt-4o-mini
    progressive-notes "Some literal text to take notes on"
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from core.config import DEFAULT_MODELS, LLMConfig, NotesConfig, ProcessingConfig
from core.extraction import DOCUMENT_EXTENSIONS, IMAGE_EXTENSIONS, is_url
from core.flow import FlowError, NodeExecutionError
from core.logging import configure_logging

from .graph import process_source

logger = logging.getLogger(__name__)


def resolve_input(value: str) -> str:
    """Map the CLI argument to the raw source handed to the flow.

    URLs and document/image paths pass through unchanged. An existing
    readable file is read as text. Anything else is literal text.
    """
    candidate = value.strip()
    if is_url(candidate):
        return candidate
    if candidate.lower().endswith(DOCUMENT_EXTENSIONS + IMAGE_EXTENSIONS):
        return candidate

    try:
        path = Path(candidate).expanduser()
        if path.is_file():
            return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Treating argument as literal text ({e})")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="progressive-notes",
        description="Turn a text, document, image or web page into five layers of notes",
    )
    parser.add_argument("input", help="Text, path to a file (txt, md, pdf, epub, image) or a URL")
    parser.add_argument("-o", "--output", help="Output directory (default: $NOTES_OUTPUT_DIR or ./data/notes)")
    parser.add_argument("-f", "--focus", help="Lens to read the source through")
    parser.add_argument("--format", dest="output_format", help="Format for the creative output layer")
    parser.add_argument(
        "-p", "--provider",
        choices=sorted(DEFAULT_MODELS),
        help="LLM provider (default: $NOTES_LLM_PROVIDER or anthropic)",
    )
    parser.add_argument("-m", "--model", help="Model name (default depends on provider)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Echo log output to stderr")
    return parser


async def run(args: argparse.Namespace) -> int:
    llm_kwargs = {}
    if args.provider:
        llm_kwargs["provider"] = args.provider
    if args.model:
        llm_kwargs["model"] = args.model
    config = NotesConfig(llm=LLMConfig(**llm_kwargs), processing=ProcessingConfig())

    raw = resolve_input(args.input)
    print(f"Processing with {config.llm.provider}/{config.llm.model}...")

    try:
        state = await process_source(
            raw,
            config=config,
            focus_area=args.focus,
            output_format=args.output_format,
            output_directory=args.output,
        )
    except NodeExecutionError as e:
        print(f"Failed at stage '{e.node_name}' ({e.phase}): {e.cause}", file=sys.stderr)
        return 1
    except FlowError as e:
        print(f"Flow failed: {e}", file=sys.stderr)
        return 1

    print()
    print("=" * 60)
    print(f"Title: {state.metadata.title}")
    print(f"Word count: {state.metadata.word_count}")
    print(f"Source type: {state.metadata.source_type}")
    print(f"Saved {len(state.output.saved_files)} files:")
    for path in state.output.saved_files:
        print(f"  {path}")
    print("=" * 60)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO, console=args.verbose)

    try:
        return asyncio.run(run(args))
    except ValueError as e:
        # Bad provider/credential settings
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
