"""Web page extraction: fetch with httpx, convert with html2text."""

import html
import logging
import re
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import unquote, urlparse

import html2text
import httpx

from workflows.shared.text_utils import count_words, split_sections, title_from_path

from .errors import SourceFetchError
from .types import ExtractedMetadata, ExtractionResult, InputType

logger = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; ProgressiveNoteTaker/1.0)"

_TITLE_TAG = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE | re.DOTALL)
_OG_TITLE = re.compile(
    r"<meta[^>]+property=[\"']og:title[\"'][^>]*content=[\"']([^\"']*)[\"']",
    re.IGNORECASE,
)
_OG_TITLE_REVERSED = re.compile(
    r"<meta[^>]+content=[\"']([^\"']*)[\"'][^>]*property=[\"']og:title[\"']",
    re.IGNORECASE,
)
_H1 = re.compile(r"<h1[^>]*>(.*?)</h1>", re.IGNORECASE | re.DOTALL)
_TAGS = re.compile(r"<[^>]+>")
_DROP_BLOCKS = re.compile(
    r"<(script|style|noscript|nav|footer|header|aside)[^>]*>.*?</\1>",
    re.IGNORECASE | re.DOTALL,
)


def _clean(fragment: str) -> str:
    text = html.unescape(_TAGS.sub("", fragment))
    return " ".join(text.split())


def title_from_html(page: str, url: str) -> str:
    """<title>, then og:title, then the first <h1>, then the URL path."""
    for pattern in (_TITLE_TAG, _OG_TITLE, _OG_TITLE_REVERSED, _H1):
        match = pattern.search(page)
        if match:
            title = _clean(match.group(1))
            if title:
                return title

    path = unquote(urlparse(url).path).rstrip("/")
    if path:
        return title_from_path(path)
    return urlparse(url).netloc or "Untitled"


def html_to_markdown(page: str) -> str:
    """Convert page HTML to markdown, dropping scripts and page chrome."""
    h2t = html2text.HTML2Text()
    h2t.ignore_links = False
    h2t.ignore_images = True
    h2t.ignore_emphasis = False
    h2t.body_width = 0  # Don't wrap lines
    markdown = h2t.handle(_DROP_BLOCKS.sub("", page))
    return re.sub(r"\n{3,}", "\n\n", markdown).strip()


async def extract_from_url(
    url: str,
    *,
    timeout: float = 30.0,
    client: Optional[httpx.AsyncClient] = None,
) -> ExtractionResult:
    """Fetch a web page and convert it to markdown.

    Args:
        url: http(s) URL
        timeout: Request timeout in seconds (ignored when client is given)
        client: Optional shared client; a short-lived one is created otherwise

    Raises:
        SourceFetchError: Connection failure or non-2xx response
    """
    headers = {"User-Agent": USER_AGENT}
    try:
        if client is not None:
            response = await client.get(url, headers=headers, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                response = await own_client.get(
                    url, headers=headers, follow_redirects=True
                )
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise SourceFetchError(
            f"HTTP {e.response.status_code} fetching {url}", url, InputType.URL.value
        ) from e
    except httpx.HTTPError as e:
        raise SourceFetchError(
            f"Failed to fetch {url}: {e}", url, InputType.URL.value
        ) from e

    page = response.text
    fetched_at = datetime.now(timezone.utc).isoformat()
    content = html_to_markdown(page)
    logger.debug(f"Fetched {len(page)} chars of HTML from {url}")

    return ExtractionResult(
        content=content,
        sections=split_sections(content),
        metadata=ExtractedMetadata(
            title=title_from_html(page, url),
            date=fetched_at,
            word_count=count_words(content),
        ),
    )
