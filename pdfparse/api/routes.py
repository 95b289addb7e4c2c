"""PDF parsing and text formatting endpoints.

Handles file upload, URL and batch sources, validation, extraction and
formatting.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Form, HTTPException, UploadFile, status

from pdfparse.config import ParserConfig, get_parser_config
from pdfparse.formatting import compute_statistics, format_text
from pdfparse.models.schemas import (
    BatchItem,
    BatchRequest,
    BatchResponse,
    FormatRequest,
    FormatResponse,
    ParseOptions,
    ParseUrlRequest,
)
from pdfparse.parsing.errors import FetchFailure, PDFParseError
from pdfparse.pipeline import parse_document, process_batch, process_item

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/parse", tags=["parse"])
format_router = APIRouter(tags=["format"])


async def get_http_client(
    config: ParserConfig = Depends(get_parser_config),
) -> AsyncGenerator[httpx.AsyncClient]:
    """Provide an HTTP client for URL sources, closed after the request."""
    async with httpx.AsyncClient(
        timeout=config.fetch_timeout, follow_redirects=True
    ) as client:
        yield client


def _to_http_error(error: PDFParseError) -> HTTPException:
    """Map a parsing error to an HTTP error.

    Fetch failures are upstream problems (502); everything else is a bad
    request (400).
    """
    if isinstance(error, FetchFailure):
        return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))


def _validate_file_extension(filename: str | None) -> str:
    """Validate that file has .pdf extension.

    Args:
        filename: The uploaded filename.

    Returns:
        The validated filename.

    Raises:
        HTTPException: 400 if extension is invalid.
    """
    if not filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Filename is required",
        )

    if not filename.lower().endswith(".pdf"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only PDF files are accepted",
        )

    return filename


async def _read_and_validate_size(file: UploadFile, max_size: int) -> bytes:
    """Read file content and validate size.

    Args:
        file: The uploaded file.
        max_size: Largest accepted size in bytes.

    Returns:
        File content as bytes.

    Raises:
        HTTPException: 413 if file exceeds size limit.
    """
    content = await file.read()

    if len(content) > max_size:
        size_mb = len(content) / (1024 * 1024)
        limit_mb = max_size / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_CONTENT_TOO_LARGE,
            detail=f"File size ({size_mb:.1f}MB) exceeds maximum allowed ({limit_mb:g}MB)",
        )

    return content


@router.post("/pdf")
async def parse_uploaded_pdf(
    file: UploadFile,
    text_formatting: str | None = Form(None),
    split_by_pages: bool = Form(False),
    include_metadata: bool = Form(False),
    page_range_start: int = Form(1, ge=1),
    page_range_end: int = Form(0, ge=0),
    max_pages: int = Form(0, ge=0),
    output_property: str | None = Form(None),
    config: ParserConfig = Depends(get_parser_config),
) -> dict[str, Any]:
    """Upload a PDF and return its formatted text.

    Args:
        file: The uploaded PDF file (multipart/form-data).

    Returns:
        Output record with text, page count and statistics.

    Raises:
        400: Invalid file (not PDF, empty, corrupt).
        413: File exceeds the configured size limit.
    """
    filename = _validate_file_extension(file.filename)
    content = await _read_and_validate_size(file, config.max_file_size)

    options = ParseOptions(
        text_formatting=text_formatting,
        split_by_pages=split_by_pages,
        include_metadata=include_metadata,
        page_range_start=page_range_start,
        page_range_end=page_range_end,
        max_pages=max_pages,
        output_property=output_property or None,
    )

    try:
        output = parse_document(content, options, record={"fileName": filename}, config=config)
    except PDFParseError as e:
        logger.warning(f"PDF parse error for {filename}: {e}")
        raise _to_http_error(e) from e

    logger.info(f"Parsed uploaded PDF: {filename}")
    return output


@router.post("/url")
async def parse_pdf_from_url(
    request: ParseUrlRequest,
    config: ParserConfig = Depends(get_parser_config),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> dict[str, Any]:
    """Fetch a PDF from a URL and return its formatted text.

    Raises:
        400: Invalid URL or file.
        502: The URL could not be fetched.
    """
    item = BatchItem(record=request.record, url=request.url)

    try:
        return await process_item(item, request.options, config, client)
    except PDFParseError as e:
        logger.warning(f"PDF parse error for {request.url}: {e}")
        raise _to_http_error(e) from e


@router.post("/batch", response_model=BatchResponse)
async def parse_batch(
    request: BatchRequest,
    config: ParserConfig = Depends(get_parser_config),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> BatchResponse:
    """Parse several PDFs given as base64 attachments or URLs.

    Raises:
        422: An item failed and continue-on-fail is off.
    """
    try:
        items = await process_batch(
            request.items,
            request.options,
            continue_on_fail=request.continue_on_fail,
            config=config,
            client=client,
        )
    except PDFParseError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=f"Item {e.item_index}: {e}",
        ) from e

    return BatchResponse(items=items)


@format_router.post("/format", response_model=FormatResponse)
async def format_extracted_text(request: FormatRequest) -> FormatResponse:
    """Format already extracted text. Unknown modes return the text unchanged."""
    text = format_text(request.text, request.mode)
    return FormatResponse(text=text, stats=compute_statistics(text, page_count=0))
