"""Classify a raw input string as text, document, image or URL."""

import re
from urllib.parse import urlparse

from .types import InputType

DOCUMENT_EXTENSIONS = (".pdf", ".epub")
IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp", ".tiff")

_URL_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def is_url(value: str) -> bool:
    """http(s) scheme followed by a non-empty host, no embedded whitespace."""
    if not _URL_SCHEME.match(value) or any(ch.isspace() for ch in value):
        return False
    try:
        return bool(urlparse(value).netloc)
    except ValueError:
        return False


def classify_source(raw: str) -> InputType:
    """Detect the input type of a raw source string.

    Checks, in order: URL syntax, document suffix, image suffix. Anything
    else is plain text, so classification never fails.
    """
    value = raw.strip()
    if is_url(value):
        return InputType.URL

    lower = value.lower()
    if lower.endswith(DOCUMENT_EXTENSIONS):
        return InputType.DOCUMENT
    if lower.endswith(IMAGE_EXTENSIONS):
        return InputType.IMAGE
    return InputType.TEXT
