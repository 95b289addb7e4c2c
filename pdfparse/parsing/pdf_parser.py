"""PDF text extraction using pypdf.

Extracts text, page count and metadata from PDF bytes, optionally
restricted to a subset of pages.
"""

import io
import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from pdfparse.config import DEFAULT_MAX_FILE_SIZE
from pdfparse.formatting.pages import PAGE_BREAK
from pdfparse.parsing.errors import DecodeFailure
from pdfparse.parsing.source import validate_pdf_bytes

logger = logging.getLogger(__name__)

PageSelector = Callable[[int], bool]


class PDFContent(BaseModel):
    """Extracted content from a PDF file.

    Attributes:
        text: Text of the selected pages, joined by form feeds.
        pages: Total number of pages in the document.
        metadata: Document metadata (title, author, etc.).
        xmp_metadata: XMP metadata fields, or None when the document has none.
        version: PDF version from the file header.
    """

    text: str
    pages: int = Field(ge=0)
    metadata: dict[str, str | None]
    xmp_metadata: dict[str, Any] | None = None
    version: str | None = None


def build_page_selector(
    page_range_start: int = 1,
    page_range_end: int = 0,
    max_pages: int = 0,
) -> PageSelector | None:
    """Build a predicate over 1-based page numbers.

    Args:
        page_range_start: First page to include.
        page_range_end: Last page to include (0 = last page).
        max_pages: Maximum number of pages to include (0 = no limit).

    Returns:
        The predicate, or None when every page is selected.
    """
    start = max(page_range_start or 1, 1)
    end = page_range_end or 0
    limit = max_pages or 0

    if start == 1 and end == 0 and limit == 0:
        return None

    def select(page_number: int) -> bool:
        if page_number < start:
            return False
        if end and page_number > end:
            return False
        if limit and page_number >= start + limit:
            return False
        return True

    return select


def _extract_metadata(reader: PdfReader) -> dict[str, str | None]:
    """Extract metadata from PDF reader.

    Args:
        reader: Initialized PdfReader instance.

    Returns:
        Dictionary of metadata fields.
    """
    metadata: dict[str, str | None] = {}

    try:
        if reader.metadata:
            # Standard PDF metadata fields
            metadata["title"] = reader.metadata.get("/Title")
            metadata["author"] = reader.metadata.get("/Author")
            metadata["subject"] = reader.metadata.get("/Subject")
            metadata["creator"] = reader.metadata.get("/Creator")
            metadata["producer"] = reader.metadata.get("/Producer")

            # Handle dates (can be complex PDF date format)
            creation_date = reader.metadata.get("/CreationDate")
            if creation_date:
                metadata["creation_date"] = str(creation_date)

            mod_date = reader.metadata.get("/ModDate")
            if mod_date:
                metadata["modification_date"] = str(mod_date)
    except Exception as e:
        logger.warning(f"Failed to extract some metadata: {e}")

    # Filter out None values for cleaner output
    return {k: str(v) for k, v in metadata.items() if v is not None}


XMP_FIELDS = (
    "dc_title",
    "dc_creator",
    "dc_description",
    "dc_subject",
    "dc_date",
    "xmp_create_date",
    "xmp_modify_date",
    "xmp_creator_tool",
    "pdf_producer",
    "pdf_keywords",
)


def _xmp_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return [_xmp_value(v) for v in value]
    if isinstance(value, dict):
        return {str(k): _xmp_value(v) for k, v in value.items()}
    return str(value)


def _extract_xmp_metadata(reader: PdfReader) -> dict[str, Any] | None:
    """Extract XMP metadata fields from PDF reader.

    Args:
        reader: Initialized PdfReader instance.

    Returns:
        Dictionary of the XMP fields that are set, or None if the document
        has no XMP metadata.
    """
    try:
        xmp = reader.xmp_metadata
        if xmp is None:
            return None
        fields = {name: getattr(xmp, name, None) for name in XMP_FIELDS}
    except Exception as e:
        logger.warning(f"Failed to extract XMP metadata: {e}")
        return None

    return {k: _xmp_value(v) for k, v in fields.items() if v not in (None, [], {}, "")}


def _read_version(reader: PdfReader) -> str | None:
    try:
        header = reader.pdf_header
    except Exception as e:
        logger.warning(f"Failed to read PDF header: {e}")
        return None
    return header.removeprefix("%PDF-") or None


def extract_pdf(
    file_content: bytes,
    page_selector: PageSelector | None = None,
    max_size: int = DEFAULT_MAX_FILE_SIZE,
) -> PDFContent:
    """Extract text from a PDF file.

    Pages rejected by ``page_selector`` contribute no text. The text of the
    selected pages is joined with form feeds so it can be split per page
    after formatting.

    Args:
        file_content: Raw bytes of the PDF file.
        page_selector: Optional predicate over 1-based page numbers.
        max_size: Largest accepted size in bytes.

    Returns:
        PDFContent with extracted text, page count, metadata and version.

    Raises:
        InvalidSource: If the buffer is empty, too large, or not a PDF.
        DecodeFailure: If the PDF is corrupt or has no pages.
    """
    validate_pdf_bytes(file_content, max_size)

    try:
        reader = PdfReader(io.BytesIO(file_content))
        pages = len(reader.pages)
    except PdfReadError as e:
        raise DecodeFailure(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise DecodeFailure(f"Failed to read PDF: {e}") from e

    if pages == 0:
        raise DecodeFailure("PDF contains no pages")

    text_parts: list[str] = []
    for number, page in enumerate(reader.pages, start=1):
        if page_selector is not None and not page_selector(number):
            continue
        try:
            text_parts.append(page.extract_text() or "")
        except Exception as e:
            logger.warning(f"Failed to extract text from page {number}: {e}")
            text_parts.append("")

    text = PAGE_BREAK.join(text_parts)

    if not text.strip():
        logger.warning("PDF contains no extractable text (may be scanned/image-based)")

    return PDFContent(
        text=text,
        pages=pages,
        metadata=_extract_metadata(reader),
        xmp_metadata=_extract_xmp_metadata(reader),
        version=_read_version(reader),
    )
