"""Tests for shared text helpers."""

from datetime import datetime

from workflows.shared.text_utils import (
    count_words,
    generate_timestamp,
    layer_filename,
    slugify,
    split_sections,
    title_from_path,
    title_from_text,
)


def test_count_words():
    assert count_words("Hello world. This is a short note about focus.") == 9
    assert count_words("  spaced\n\tout   words ") == 3
    assert count_words("") == 0


class TestSplitSections:
    def test_no_headings(self):
        assert split_sections("just a paragraph\n\nand another") == []

    def test_preamble_and_headings(self):
        text = "intro line\n\n# One\nbody one\n\n## Two\nbody two"
        assert split_sections(text) == ["intro line", "# One\nbody one", "## Two\nbody two"]


class TestTitles:
    def test_first_line(self):
        assert title_from_text("My Title\nrest of text") == "My Title"

    def test_strips_heading_marks(self):
        assert title_from_text("## Heading Title\nbody") == "Heading Title"

    def test_truncates_long_first_line(self):
        title = title_from_text("x" * 150)
        assert len(title) == 100
        assert title.endswith("...")

    def test_empty_text(self):
        assert title_from_text("   \n  ") == "Untitled"

    def test_title_from_path(self):
        assert title_from_path("/tmp/my-notes_v2.pdf") == "My Notes V2"
        assert title_from_path("deep-work") == "Deep Work"


class TestSlugify:
    def test_basic(self):
        assert slugify("Hello World! A Note") == "hello-world-a-note"

    def test_accents_folded(self):
        assert slugify("Café Crème") == "cafe-creme"

    def test_empty_falls_back(self):
        assert slugify("!!!") == "untitled"

    def test_max_length(self):
        slug = slugify("word " * 40, max_length=20)
        assert len(slug) <= 20
        assert not slug.endswith("-")


def test_timestamp_format():
    assert generate_timestamp(datetime(2025, 1, 15, 9, 5, 7)) == "20250115-090507"


def test_layer_filename():
    assert layer_filename("20250115-090507", "deep-work", 3) == "20250115-090507_deep-work_level-3.md"
