"""End-to-end tests for the progressive notes flow with fake collaborators."""

import re

import pytest

from core.config import NotesConfig
from core.extraction import InputType, SourceFetchError
from core.flow import NodeExecutionError
from testing.utils import FailingWriter, FakeExtractor, FakeGenerator
from workflows.progressive_notes import (
    LAYER_NAMES,
    MarkdownArtifactWriter,
    create_note_flow,
    process_source,
)
from workflows.progressive_notes.nodes import target_word_count
from workflows.progressive_notes.persistence import ArtifactWriteError
from workflows.progressive_notes.state import create_initial_state

SAMPLE_TEXT = "Hello world. This is a short note about focus."
FILENAME_PATTERN = re.compile(r"^\d{8}-\d{6}_hello-world-this-is-a-short-note-about-focus_level-(\d)\.md$")


def _names(paths):
    return [path.rsplit("/", 1)[-1] for path in paths]


class TestWiring:
    def test_all_input_types_converge_on_extractor(self, fake_extractor, fake_generator):
        flow = create_note_flow(fake_extractor, fake_generator, MarkdownArtifactWriter())
        table = flow.describe()

        assert table["input_detector"] == {t.value: "content_extractor" for t in InputType}
        assert table["content_extractor"] == {"default": "layer_1"}
        assert table["layer_5"] == {"default": "file_saver"}
        assert table["file_saver"] == {}

    def test_layer_three_target(self):
        assert target_word_count(10_000) == 1200
        assert target_word_count(9) == 50


class TestEndToEnd:
    @pytest.mark.asyncio
    async def test_text_source_produces_five_artifacts(
        self, fake_extractor, fake_generator, fast_processing, output_dir
    ):
        config = NotesConfig(processing=fast_processing, output_dir=output_dir)

        state = await process_source(
            SAMPLE_TEXT,
            config=config,
            extractor=fake_extractor,
            generator=fake_generator,
            writer=MarkdownArtifactWriter(),
        )

        assert state.input.type == InputType.TEXT
        assert state.content.text == SAMPLE_TEXT
        assert state.metadata.word_count == 9
        assert state.metadata.source_type == "text"

        layers = list(state.layers.populated())
        assert [level for level, _, _ in layers] == [1, 2, 3, 4, 5]
        assert all(text for _, _, text in layers)

        names = _names(state.output.saved_files)
        assert len(names) == 5
        levels = [int(FILENAME_PATTERN.match(name).group(1)) for name in names]
        assert levels == [1, 2, 3, 4, 5]
        assert sorted(p.name for p in output_dir.iterdir()) == sorted(names)

    @pytest.mark.asyncio
    async def test_every_field_written_once(
        self, fake_extractor, fake_generator, fast_processing, output_dir
    ):
        state = await process_source(
            SAMPLE_TEXT,
            config=NotesConfig(processing=fast_processing, output_dir=output_dir),
            extractor=fake_extractor,
            generator=fake_generator,
        )

        for level in LAYER_NAMES:
            assert state.writes(f"layers.layer_{level}") == 1
        assert state.writes("input.type") == 1
        assert state.writes("metadata.title") == 1
        assert state.writes("content.text") == 1
        assert state.writes("output.saved_files") == 5

    @pytest.mark.asyncio
    async def test_artifact_headers(self, fake_extractor, fake_generator, fast_processing, output_dir):
        state = await process_source(
            SAMPLE_TEXT,
            config=NotesConfig(processing=fast_processing, output_dir=output_dir),
            extractor=fake_extractor,
            generator=fake_generator,
        )

        level_3 = [p for p in state.output.saved_files if p.endswith("_level-3.md")][0]
        content = open(level_3, encoding="utf-8").read()

        assert f'title: "{SAMPLE_TEXT}"' in content
        assert "layer: 3\n" in content
        assert 'layer_name: "Distilled Insights"' in content
        assert 'source: "text"' in content
        assert "word_count: 3\n" in content
        assert "author:" not in content
        assert f"# L3: {SAMPLE_TEXT} - Distilled Insights\n\nGenerated note 3" in content

    @pytest.mark.asyncio
    async def test_layer_temperatures_and_preferences(
        self, fake_extractor, fake_generator, fast_processing, output_dir
    ):
        await process_source(
            SAMPLE_TEXT,
            config=NotesConfig(processing=fast_processing, output_dir=output_dir),
            focus_area="productivity",
            output_format="checklist",
            extractor=fake_extractor,
            generator=fake_generator,
        )

        assert [call["temperature"] for call in fake_generator.calls] == [0.3, 0.3, 0.4, 0.6, 0.7]
        assert all("productivity" in call["prompt"] for call in fake_generator.calls)
        assert "checklist" in fake_generator.calls[-1]["prompt"]
        assert "Generated note 4" in fake_generator.calls[-1]["prompt"]

    @pytest.mark.asyncio
    async def test_transient_generation_failure_is_retried(
        self, fake_extractor, fast_processing, output_dir
    ):
        generator = FakeGenerator(fail_times=2)

        state = await process_source(
            SAMPLE_TEXT,
            config=NotesConfig(processing=fast_processing, output_dir=output_dir),
            extractor=fake_extractor,
            generator=generator,
        )

        assert len(state.output.saved_files) == 5
        assert len(generator.calls) == 7


class TestFailures:
    @pytest.mark.asyncio
    async def test_unresolvable_url_aborts_before_layers(
        self, fake_generator, fast_processing, output_dir
    ):
        url = "https://no-such-host.invalid/article"
        extractor = FakeExtractor(unreachable=(url,))

        with pytest.raises(NodeExecutionError) as exc_info:
            await process_source(
                url,
                config=NotesConfig(processing=fast_processing, output_dir=output_dir),
                extractor=extractor,
                generator=fake_generator,
            )

        error = exc_info.value
        assert error.node_name == "content_extractor"
        assert error.phase == "execute"
        assert isinstance(error.cause, SourceFetchError)
        assert [call[1] for call in extractor.calls] == [InputType.URL] * 3
        assert fake_generator.calls == []
        assert list(output_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_disk_full_on_third_file(self, fake_extractor, fake_generator, fast_processing, output_dir):
        writer = FailingWriter(fail_on=3)
        flow = create_note_flow(fake_extractor, fake_generator, writer, fast_processing)
        state = create_initial_state(SAMPLE_TEXT, output_directory=output_dir)

        with pytest.raises(NodeExecutionError) as exc_info:
            await flow.run(state)

        assert exc_info.value.node_name == "file_saver"
        assert exc_info.value.phase == "finalize"
        assert isinstance(exc_info.value.cause, ArtifactWriteError)
        assert writer.attempts == 3

        names = _names(state.output.saved_files)
        assert len(names) == 2
        assert names[0].endswith("_level-1.md")
        assert names[1].endswith("_level-2.md")
        assert sorted(p.name for p in output_dir.iterdir()) == sorted(names)
