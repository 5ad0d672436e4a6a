"""Custom exceptions for content extraction."""

from typing import Optional


class ExtractionError(Exception):
    """Base extraction exception."""

    def __init__(self, message: str, source: str, input_type: Optional[str] = None):
        self.message = message
        self.source = source
        self.input_type = input_type
        super().__init__(message)


class SourceNotFoundError(ExtractionError):
    """Local file does not exist or can't be read."""

    pass


class SourceFetchError(ExtractionError):
    """URL could not be fetched (DNS, connection, non-2xx status)."""

    pass


class UnsupportedSourceError(ExtractionError):
    """Input type or file format has no extractor."""

    pass


class EmptyContentError(ExtractionError):
    """Extraction succeeded but produced no usable text."""

    pass
