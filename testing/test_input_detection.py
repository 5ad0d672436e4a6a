"""Tests for raw input classification."""

import pytest

from core.extraction import InputType, classify_source, is_url


class TestClassifySource:
    @pytest.mark.parametrize(
        "raw",
        [
            "https://example.com/article",
            "http://example.com",
            "  https://example.com/path?q=1  ",
            "HTTPS://EXAMPLE.COM/",
        ],
    )
    def test_urls(self, raw):
        assert classify_source(raw) == InputType.URL

    @pytest.mark.parametrize("raw", ["book.pdf", "~/docs/Paper.PDF", "novel.epub"])
    def test_documents(self, raw):
        assert classify_source(raw) == InputType.DOCUMENT

    @pytest.mark.parametrize(
        "raw",
        ["scan.png", "photo.JPG", "a.jpeg", "b.gif", "c.bmp", "d.webp", "e.tiff"],
    )
    def test_images(self, raw):
        assert classify_source(raw) == InputType.IMAGE

    @pytest.mark.parametrize(
        "raw",
        [
            "Hello world. This is a short note about focus.",
            "",
            "ftp://example.com/file.txt",
            "see https://example.com for details",
            "notes.txt",
            "https://",
        ],
    )
    def test_everything_else_is_text(self, raw):
        assert classify_source(raw) == InputType.TEXT

    def test_url_wins_over_extension(self):
        assert classify_source("https://example.com/paper.pdf") == InputType.URL


class TestIsUrl:
    def test_requires_host(self):
        assert is_url("https://example.com")
        assert not is_url("https:///path-only")

    def test_rejects_whitespace(self):
        assert not is_url("https://example.com/a b")
