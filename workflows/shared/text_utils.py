"""Text processing utilities for the note workflow."""

import re
import unicodedata
from datetime import datetime
from pathlib import PurePath
from typing import Optional

HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$", re.MULTILINE)
MAX_TITLE_LENGTH = 100


def count_words(text: str) -> int:
    """Count words in text (split on whitespace)."""
    return len(text.split())


def split_sections(markdown: str) -> list[str]:
    """
    Split markdown into its natural sections at heading lines.

    Each section keeps its own heading line. Text before the first heading
    becomes a leading section. Returns an empty list when the text has no
    headings, since the whole text is then a single section.

    Args:
        markdown: Markdown text to split

    Returns:
        Section strings in document order
    """
    matches = list(HEADING_PATTERN.finditer(markdown))
    if not matches:
        return []

    sections = []
    preamble = markdown[: matches[0].start()].strip()
    if preamble:
        sections.append(preamble)

    for index, match in enumerate(matches):
        end = matches[index + 1].start() if index + 1 < len(matches) else len(markdown)
        section = markdown[match.start() : end].strip()
        if section:
            sections.append(section)

    return sections


def title_from_text(text: str) -> str:
    """First line of the text, minus any markdown heading marks.

    Lines over 100 characters are cut to 97 characters plus "...".
    """
    lines = text.strip().splitlines()
    first_line = lines[0].strip() if lines else ""
    if not first_line:
        return "Untitled"

    if first_line.startswith("#"):
        return first_line.lstrip("#").strip() or "Untitled"

    if len(first_line) <= MAX_TITLE_LENGTH:
        return first_line
    return first_line[: MAX_TITLE_LENGTH - 3] + "..."


def title_from_path(path: str) -> str:
    """Readable title from a file or URL path: "my-notes_v2.pdf" -> "My Notes V2"."""
    name = PurePath(path).name or path
    stem = re.sub(r"\.[^.]+$", "", name)
    words = re.sub(r"[-_]+", " ", stem).strip()
    if not words:
        return "Untitled"
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), words)


def slugify(text: str, max_length: int = 80) -> str:
    """Convert text to a lowercase, filesystem-safe slug.

    Accents are folded to ASCII, every run of other characters becomes a
    single hyphen, and the result is trimmed of hyphens at both ends.
    """
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text).strip("-")
    if max_length and len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug or "untitled"


def generate_timestamp(moment: Optional[datetime] = None) -> str:
    """Timestamp in YYYYMMDD-HHMMSS format (local time)."""
    return (moment or datetime.now()).strftime("%Y%m%d-%H%M%S")


def layer_filename(timestamp: str, slug: str, level: int, extension: str = "md") -> str:
    """<timestamp>_<slug>_level-<n>.<ext>"""
    return f"{timestamp}_{slug}_level-{level}.{extension}"
