"""Document pipeline: resolve, extract, format and assemble output records.

Output records keep the caller's fields and add:

    <outputProperty>   formatted text, or a list of page texts
    numPages           page count (when metadata is not requested)
    pdfMetadata        numPages, info, metadata (XMP), version (when requested)
    pdfStats           textLength, wordCount, pageCount
"""

import logging
from typing import Any

import httpx

from pdfparse.config import ParserConfig, get_parser_config
from pdfparse.formatting import compute_statistics, format_text, split_pages
from pdfparse.models.schemas import BatchItem, ParseOptions, PDFMetadata
from pdfparse.parsing.errors import PDFParseError
from pdfparse.parsing.pdf_parser import PDFContent, build_page_selector, extract_pdf
from pdfparse.parsing.source import resolve_source

logger = logging.getLogger(__name__)


def assemble_output(
    record: dict[str, Any],
    text: str,
    content: PDFContent,
    options: ParseOptions,
    output_property: str = "result",
) -> dict[str, Any]:
    """Merge formatted text, statistics and metadata into the caller's record.

    Args:
        record: Caller fields, copied into the output.
        text: Formatted text.
        content: Extraction result the text came from.
        options: Options of the request.
        output_property: Key for the text when ``options`` does not set one.

    Returns:
        A new output record.
    """
    output: dict[str, Any] = dict(record)
    key = options.output_property or output_property

    output[key] = split_pages(text) if options.split_by_pages else text

    if options.include_metadata:
        output["pdfMetadata"] = PDFMetadata(
            num_pages=content.pages,
            info=content.metadata,
            metadata=content.xmp_metadata,
            version=content.version,
        ).model_dump(by_alias=True)
    else:
        output["numPages"] = content.pages

    output["pdfStats"] = compute_statistics(text, content.pages).model_dump(by_alias=True)
    return output


def parse_document(
    file_content: bytes,
    options: ParseOptions | None = None,
    record: dict[str, Any] | None = None,
    config: ParserConfig | None = None,
) -> dict[str, Any]:
    """Extract, format and assemble one PDF.

    Raises:
        InvalidSource: If the bytes are not a valid PDF.
        DecodeFailure: If the PDF cannot be read.
    """
    config = config or get_parser_config()
    options = options or ParseOptions()

    selector = build_page_selector(
        options.page_range_start, options.page_range_end, options.max_pages
    )
    content = extract_pdf(file_content, page_selector=selector, max_size=config.max_file_size)

    mode = options.text_formatting or config.text_formatting
    text = format_text(content.text, mode)
    logger.info(f"Parsed PDF ({content.pages} pages, {len(text)} chars, mode={mode})")

    return assemble_output(
        record or {}, text, content, options, output_property=config.output_property
    )


async def process_item(
    item: BatchItem,
    options: ParseOptions | None = None,
    config: ParserConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> dict[str, Any]:
    """Resolve the item's source and parse it."""
    config = config or get_parser_config()
    content = await resolve_source(
        data=item.data,
        url=item.url,
        max_size=config.max_file_size,
        timeout=config.fetch_timeout,
        client=client,
    )
    return parse_document(content, options, record=item.record, config=config)


async def process_batch(
    items: list[BatchItem],
    options: ParseOptions | None = None,
    continue_on_fail: bool | None = None,
    config: ParserConfig | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[dict[str, Any]]:
    """Process items in order.

    With ``continue_on_fail`` a failed item is forwarded with an ``error``
    field; otherwise the first failure is raised with its item index.

    Raises:
        PDFParseError: On the first failure when not continuing on failure.
    """
    config = config or get_parser_config()
    if continue_on_fail is None:
        continue_on_fail = config.continue_on_fail

    results: list[dict[str, Any]] = []
    for index, item in enumerate(items):
        try:
            results.append(await process_item(item, options, config, client))
        except PDFParseError as e:
            e.item_index = index
            if not continue_on_fail:
                raise
            logger.warning(f"Item {index} failed, continuing: {e}")
            results.append({**item.record, "error": str(e)})

    return results
