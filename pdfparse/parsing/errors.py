"""Errors raised while resolving, validating and decoding PDF sources."""


class PDFParseError(Exception):
    """Raised when a PDF cannot be obtained or parsed.

    Attributes:
        item_index: Index of the failing input item, when processing a batch.
    """

    def __init__(self, message: str, item_index: int | None = None) -> None:
        super().__init__(message)
        self.item_index = item_index


class InvalidSource(PDFParseError):
    """Empty, oversized or non-PDF buffer, or a missing/malformed URL."""


class FetchFailure(PDFParseError):
    """Network or HTTP error while fetching a PDF from a URL."""


class DecodeFailure(PDFParseError):
    """The PDF structure could not be read."""
