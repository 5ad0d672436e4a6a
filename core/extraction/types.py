"""Types for source content extraction."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class InputType(str, Enum):
    """Kind of raw input handed to the note flow."""

    TEXT = "text"  # Literal text (or the contents of a text file)
    DOCUMENT = "document"  # Path to a PDF or EPUB
    IMAGE = "image"  # Path to an image, transcribed by a vision model
    URL = "url"  # http(s) web page


class ExtractedMetadata(BaseModel):
    """Metadata recovered alongside the content."""

    title: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    word_count: int = 0


class ExtractionResult(BaseModel):
    """Output of ExtractionService.extract()."""

    content: str
    sections: list[str] = Field(default_factory=list)
    metadata: ExtractedMetadata = Field(default_factory=ExtractedMetadata)
