"""Pydantic models for API requests and responses.

Provides type safety, validation, and automatic OpenAPI documentation.

Models:
    - ParseOptions: Extraction and formatting options
    - ParseUrlRequest / BatchRequest: Source payloads
    - PDFStats / PDFMetadata: Parts of an output record
    - FormatRequest / FormatResponse: Text-only formatting
"""

from pdfparse.models.schemas import (
    BatchItem,
    BatchRequest,
    BatchResponse,
    FormatRequest,
    FormatResponse,
    ParseOptions,
    ParseUrlRequest,
    PDFMetadata,
    PDFStats,
)

__all__ = [
    "BatchItem",
    "BatchRequest",
    "BatchResponse",
    "FormatRequest",
    "FormatResponse",
    "PDFMetadata",
    "PDFStats",
    "ParseOptions",
    "ParseUrlRequest",
]
