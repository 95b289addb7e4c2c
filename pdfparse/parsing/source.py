"""PDF source resolution.

Obtains PDF bytes from an attachment (raw or base64) or a URL fetch and
validates them before they reach the decoder.
"""

import base64
import binascii
import logging
from urllib.parse import urlparse

import httpx

from pdfparse.config import DEFAULT_MAX_FILE_SIZE
from pdfparse.parsing.errors import FetchFailure, InvalidSource

logger = logging.getLogger(__name__)

PDF_MAGIC_BYTES = b"%PDF"
DEFAULT_FETCH_TIMEOUT = 30.0


def validate_pdf_bytes(file_content: bytes, max_size: int = DEFAULT_MAX_FILE_SIZE) -> None:
    """Validate PDF file content before parsing.

    Args:
        file_content: Raw bytes of the PDF file.
        max_size: Largest accepted size in bytes.

    Raises:
        InvalidSource: If the buffer is empty, too large, or not a PDF.
    """
    if not file_content:
        raise InvalidSource("PDF file is empty or could not be read")

    if len(file_content) > max_size:
        size_mb = len(file_content) / (1024 * 1024)
        limit_mb = max_size / (1024 * 1024)
        raise InvalidSource(
            f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:g}MB)"
        )

    if not file_content.startswith(PDF_MAGIC_BYTES):
        raise InvalidSource("Invalid PDF: file does not start with PDF header")


def validate_url(url: str | None) -> str:
    """Validate that a URL is present and absolute http(s).

    Returns:
        The stripped URL.

    Raises:
        InvalidSource: If the URL is missing or malformed.
    """
    if not url or not url.strip():
        raise InvalidSource("URL is required when source is set to URL")

    url = url.strip()
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidSource(f"Invalid URL format: {url}")

    return url


def decode_attachment(data: str | bytes) -> bytes:
    """Decode a base64-encoded attachment.

    Raises:
        InvalidSource: If the payload is not valid base64.
    """
    try:
        return base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidSource(f"Attachment is not valid base64: {e}") from e


async def _get(client: httpx.AsyncClient, url: str) -> bytes:
    try:
        response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchFailure(
            f"Failed to fetch PDF from URL: HTTP {e.response.status_code}"
        ) from e
    except httpx.RequestError as e:
        raise FetchFailure(f"Failed to fetch PDF from URL: {e}") from e
    return response.content


async def fetch_pdf(
    url: str,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """Download a PDF.

    Args:
        url: Location of the PDF file.
        timeout: Request timeout in seconds, used when no client is given.
        client: Optional client to reuse (tests inject a mock transport here).

    Returns:
        Response body bytes.

    Raises:
        InvalidSource: If the URL is malformed.
        FetchFailure: On transport errors or non-2xx responses.
    """
    url = validate_url(url)
    logger.info(f"Fetching PDF from {url}")

    if client is not None:
        return await _get(client, url)

    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as owned:
        return await _get(owned, url)


async def resolve_source(
    data: str | bytes | None = None,
    url: str | None = None,
    max_size: int = DEFAULT_MAX_FILE_SIZE,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
    client: httpx.AsyncClient | None = None,
) -> bytes:
    """Resolve an attachment or URL into validated PDF bytes.

    ``data`` may be raw bytes or a base64 string. When both sources are
    given, the attachment wins.

    Raises:
        InvalidSource: If no source is given or the bytes are not a valid PDF.
        FetchFailure: If the URL fetch fails.
    """
    if data is not None:
        content = data if isinstance(data, bytes) else decode_attachment(data)
    elif url is not None:
        content = await fetch_pdf(url, timeout=timeout, client=client)
    else:
        raise InvalidSource("No PDF source provided: expected attachment data or URL")

    validate_pdf_bytes(content, max_size)
    return content
