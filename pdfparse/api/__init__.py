"""FastAPI endpoints for PDF parsing.

Endpoints:
    - GET /health: Service health status
    - POST /parse/pdf: Parse an uploaded PDF
    - POST /parse/url: Parse a PDF fetched from a URL
    - POST /parse/batch: Parse several PDFs with a per-item failure policy
    - POST /format: Format already extracted text
"""

from pdfparse.api.app import app, create_app

__all__ = ["app", "create_app"]
