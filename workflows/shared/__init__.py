"""Shared utilities for note workflows."""

from .text_utils import (
    count_words,
    generate_timestamp,
    layer_filename,
    slugify,
    split_sections,
    title_from_path,
    title_from_text,
)

__all__ = [
    "count_words",
    "generate_timestamp",
    "layer_filename",
    "slugify",
    "split_sections",
    "title_from_path",
    "title_from_text",
]
