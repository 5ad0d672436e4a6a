"""Tests for the progressive-notes command line."""

import pytest

from core.flow import NodeExecutionError
from core.extraction import SourceFetchError
from workflows.progressive_notes import cli
from workflows.progressive_notes.state import create_initial_state


class TestResolveInput:
    def test_url_passes_through(self):
        assert cli.resolve_input("https://example.com/a") == "https://example.com/a"

    def test_document_and_image_paths_pass_through(self):
        assert cli.resolve_input("book.pdf") == "book.pdf"
        assert cli.resolve_input("scan.PNG") == "scan.PNG"

    def test_text_file_is_read(self, tmp_path):
        notes = tmp_path / "notes.md"
        notes.write_text("# Meeting\nDecisions made today.", encoding="utf-8")

        assert cli.resolve_input(str(notes)) == "# Meeting\nDecisions made today."

    def test_literal_text(self):
        text = "Hello world. This is a short note about focus."
        assert cli.resolve_input(text) == text

    def test_overlong_literal_text(self):
        text = "word " * 2000
        assert cli.resolve_input(text) == text


class TestMain:
    @pytest.fixture(autouse=True)
    def no_log_files(self, monkeypatch, tmp_path):
        monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: tmp_path)

    def test_success_prints_summary(self, monkeypatch, tmp_path, capsys):
        async def fake_process_source(raw, **kwargs):
            state = create_initial_state(raw, output_directory=kwargs["output_directory"])
            state.metadata.title = "Focus"
            state.metadata.word_count = 9
            state.metadata.source_type = "text"
            state.output.record_saved(str(tmp_path / "a_level-1.md"))
            return state

        monkeypatch.setattr(cli, "process_source", fake_process_source)

        code = cli.main(["Some text", "-o", str(tmp_path), "-p", "ollama"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Title: Focus" in out
        assert "Word count: 9" in out
        assert "a_level-1.md" in out

    def test_stage_failure_exits_nonzero(self, monkeypatch, tmp_path, capsys):
        async def failing_process_source(raw, **kwargs):
            cause = SourceFetchError("Failed to fetch", raw, "url")
            raise NodeExecutionError("content_extractor", "execute", cause) from cause

        monkeypatch.setattr(cli, "process_source", failing_process_source)

        code = cli.main(["https://no-such-host.invalid/", "-p", "ollama"])

        err = capsys.readouterr().err
        assert code == 1
        assert "content_extractor" in err
        assert "Failed to fetch" in err

    def test_bad_provider_is_rejected_by_parser(self):
        with pytest.raises(SystemExit):
            cli.main(["text", "-p", "cohere"])
