"""
Markdown artifact writer for layer files.

Each file is a frontmatter block followed by the rendered layer body:

    ---
    title: "Deep Work"
    layer: 3
    layer_name: "Distilled Insights"
    source: "url"
    created: "2025-01-15T10:30:00+00:00"
    word_count: 412
    author: "Cal Newport"
    ---

    # L3: Deep Work - Distilled Insights
    ...

Strings are written as double-quoted JSON strings, which YAML parsers
read back unchanged.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Protocol

logger = logging.getLogger(__name__)

FRONTMATTER_FIELDS = ("title", "layer", "layer_name", "source", "created", "word_count", "author")


class ArtifactWriteError(Exception):
    """A layer file could not be written."""

    def __init__(self, message: str, path: str):
        self.path = path
        super().__init__(message)


class ArtifactWriter(Protocol):
    def save(
        self, directory: str | Path, filename: str, content: str, frontmatter: Mapping[str, Any]
    ) -> str: ...


def _yaml_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return json.dumps(str(value), ensure_ascii=False)


def render_frontmatter(frontmatter: Mapping[str, Any]) -> str:
    """Frontmatter block in FRONTMATTER_FIELDS order, then any extra keys.

    Keys whose value is None are left out.
    """
    ordered = [key for key in FRONTMATTER_FIELDS if key in frontmatter]
    ordered += [key for key in frontmatter if key not in FRONTMATTER_FIELDS]

    lines = ["---"]
    for key in ordered:
        value = frontmatter[key]
        if value is None:
            continue
        lines.append(f"{key}: {_yaml_value(value)}")
    lines.append("---")
    return "\n".join(lines) + "\n"


class MarkdownArtifactWriter:
    """Writes one markdown file per call, creating the directory if needed."""

    encoding = "utf-8"

    def save(
        self,
        directory: str | Path,
        filename: str,
        content: str,
        frontmatter: Mapping[str, Any],
    ) -> str:
        """Write frontmatter + content to directory/filename.

        Returns:
            Path of the written file, as a string

        Raises:
            ArtifactWriteError: Directory creation or the write failed
        """
        path = Path(directory) / filename
        document = render_frontmatter(frontmatter) + "\n" + content
        if not document.endswith("\n"):
            document += "\n"

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(document, encoding=self.encoding)
        except OSError as e:
            raise ArtifactWriteError(f"Failed to write {path}: {e}", str(path)) from e

        logger.debug(f"Wrote {len(document)} chars to {path}")
        return str(path)
