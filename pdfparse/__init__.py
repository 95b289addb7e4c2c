"""PDF Parse - text extraction with layout recovery for PDF documents.

Combines pypdf for extraction, a rule-based layout formatter, FastAPI for
the HTTP surface and Pydantic for data validation.

Components:
    - formatting: Formatting modes, page splitting and statistics
    - parsing: Source resolution and PDF text extraction
    - pipeline: Per-item and batch processing into output records
    - api: HTTP endpoints
    - models: Request/response schemas
"""

__version__ = "0.1.0"
