from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PDFStats(CamelModel):
    """Statistics attached to every parsed document.

    Attributes:
        text_length: Character count of the formatted text.
        word_count: Whitespace-delimited word count.
        page_count: Page count reported by the extractor.
    """

    text_length: int = Field(ge=0)
    word_count: int = Field(ge=0)
    page_count: int = Field(ge=0)


class PDFMetadata(CamelModel):
    """Document metadata included on request.

    Attributes:
        num_pages: Total number of pages in the document.
        info: Document information dictionary (title, author, etc.).
        metadata: XMP metadata fields, or None when the document has none.
        version: PDF version from the file header.
    """

    num_pages: int = Field(ge=0)
    info: dict[str, str | None] = Field(default_factory=dict)
    metadata: dict[str, Any] | None = None
    version: str | None = None


class ParseOptions(CamelModel):
    """Options controlling extraction and formatting.

    Attributes:
        text_formatting: Formatting mode name. Unknown names leave text unchanged.
            Falls back to the configured default when omitted.
        split_by_pages: Return a list of page texts instead of one string.
        include_metadata: Attach document metadata to the output.
        page_range_start: First page to extract (1-based).
        page_range_end: Last page to extract (0 = last page).
        max_pages: Maximum number of pages to extract (0 = all pages).
        output_property: Key under which the text is stored in the output record.
            Falls back to the configured default when omitted.
    """

    text_formatting: str | None = None
    split_by_pages: bool = False
    include_metadata: bool = False
    page_range_start: int = Field(default=1, ge=1)
    page_range_end: int = Field(default=0, ge=0)
    max_pages: int = Field(default=0, ge=0)
    output_property: str | None = Field(default=None, min_length=1)

    @field_validator("text_formatting", mode="before")
    @classmethod
    def normalize_formatting(cls, v: Any) -> Any:
        """Strip and lowercase the mode name before validation."""
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ParseUrlRequest(CamelModel):
    """Request payload for parsing a PDF fetched from a URL.

    Attributes:
        url: Location of the PDF file.
        record: Caller fields merged into the output record.
        options: Extraction and formatting options.
    """

    url: str
    record: dict[str, Any] = Field(default_factory=dict)
    options: ParseOptions = Field(default_factory=ParseOptions)


class BatchItem(CamelModel):
    """One input item of a batch.

    Exactly one source is expected: ``data`` (base64-encoded PDF) or ``url``.

    Attributes:
        record: Caller fields merged into this item's output.
        data: Base64-encoded PDF bytes.
        url: Location of the PDF file.
    """

    record: dict[str, Any] = Field(default_factory=dict, alias="json")
    data: str | None = None
    url: str | None = None


class BatchRequest(CamelModel):
    """Request payload for batch parsing.

    Attributes:
        items: Input items, processed in order.
        options: Options applied to every item.
        continue_on_fail: Annotate failed items instead of aborting.
            Falls back to the configured default when omitted.
    """

    items: list[BatchItem] = Field(..., min_length=1)
    options: ParseOptions = Field(default_factory=ParseOptions)
    continue_on_fail: bool | None = None


class BatchResponse(BaseModel):
    """Output records of a batch, in input order."""

    items: list[dict[str, Any]]


class FormatRequest(CamelModel):
    """Request payload for formatting already extracted text."""

    text: str
    mode: str = "raw"


class FormatResponse(CamelModel):
    """Formatted text with its statistics."""

    text: str
    stats: PDFStats
