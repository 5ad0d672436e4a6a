"""
File saver batch node: one markdown artifact per populated layer.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from core.flow import BatchNode, RetryPolicy
from workflows.shared.text_utils import count_words, generate_timestamp, layer_filename

from ..persistence import ArtifactWriter
from ..state import NoteState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerItem:
    level: int
    name: str
    text: str
    title: str


@dataclass(frozen=True)
class RenderedLayer:
    body: str
    word_count: int


def render_layer(item: LayerItem) -> RenderedLayer:
    """Section heading plus layer text; word count is of the layer text."""
    body = f"# L{item.level}: {item.title} - {item.name}\n\n{item.text}"
    return RenderedLayer(body=body, word_count=count_words(item.text))


class FileSaver(BatchNode):
    """Renders each layer concurrently, then writes them in layer order.

    Writes happen in finalize, one at a time in ascending layer order, and
    each stored path is recorded in state.output.saved_files right after
    its write. A failed write is not retried; it aborts the run with the
    earlier paths already recorded.
    """

    def __init__(
        self,
        writer: ArtifactWriter,
        concurrency: Optional[int] = None,
        retry: Optional[RetryPolicy] = None,
        name: str = "file_saver",
    ):
        super().__init__(name=name, retry=retry, concurrency=concurrency)
        self.writer = writer

    async def prepare(self, state: NoteState) -> list[LayerItem]:
        title = state.metadata.title or "Untitled"
        items = [
            LayerItem(level=level, name=name, text=text, title=title)
            for level, name, text in state.layers.populated()
        ]
        logger.info(f"Preparing to save {len(items)} layers")
        return items

    async def execute(self, item: LayerItem) -> RenderedLayer:
        return render_layer(item)

    async def finalize(
        self, state: NoteState, items: list[LayerItem], results: list[RenderedLayer]
    ) -> None:
        directory = state.output.directory
        timestamp = state.output.timestamp or generate_timestamp()
        slug = state.output.slug or "untitled"

        for item, rendered in zip(items, results):
            frontmatter = {
                "title": item.title,
                "layer": item.level,
                "layer_name": item.name,
                "source": state.metadata.source_type or "text",
                "created": datetime.now(timezone.utc).isoformat(),
                "word_count": rendered.word_count,
                "author": state.metadata.author,
            }
            filename = layer_filename(timestamp, slug, item.level)
            path = self.writer.save(directory, filename, rendered.body, frontmatter)
            state.output.record_saved(path)
            logger.info(f"Saved layer {item.level}: {filename}")

        logger.info(f"Saved {len(state.output.saved_files)} files to {directory}")
        return None
