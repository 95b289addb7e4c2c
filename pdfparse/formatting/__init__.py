"""Layout recovery for extracted PDF text.

Responsibilities:
    - Formatting modes as ordered rule sequences (raw, minimal, compact,
      smart, structured, visual)
    - Page splitting on form feeds
    - Length, word and page statistics
"""

from pdfparse.formatting.formatter import format_text, resolve_mode
from pdfparse.formatting.pages import compute_statistics, split_pages
from pdfparse.formatting.rules import FormattingMode

__all__ = [
    "FormattingMode",
    "compute_statistics",
    "format_text",
    "resolve_mode",
    "split_pages",
]
