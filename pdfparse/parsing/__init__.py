"""PDF source resolution and text extraction.

Responsibilities:
    - Attachment and URL sources (httpx) with PDF signature validation
    - PDF text extraction with pypdf, optionally limited to a page range
    - Metadata extraction (title, author, version, pages)
"""

from pdfparse.parsing.errors import DecodeFailure, FetchFailure, InvalidSource, PDFParseError
from pdfparse.parsing.pdf_parser import PDFContent, build_page_selector, extract_pdf
from pdfparse.parsing.source import resolve_source

__all__ = [
    "DecodeFailure",
    "FetchFailure",
    "InvalidSource",
    "PDFContent",
    "PDFParseError",
    "build_page_selector",
    "extract_pdf",
    "resolve_source",
]
