"""Page splitting and text statistics for formatted output."""

from pdfparse.models.schemas import PDFStats

PAGE_BREAK = "\f"


def split_pages(text: str) -> list[str]:
    """Split text on form feeds, dropping pages that are blank after trimming.

    Kept pages are returned as-is, in their original order.
    """
    return [page for page in text.split(PAGE_BREAK) if page.strip()]


def count_words(text: str) -> int:
    return len(text.split())


def compute_statistics(text: str | list[str], page_count: int) -> PDFStats:
    """Compute length, word count and page count for formatted text.

    Args:
        text: Formatted text, or its page-split form.
        page_count: Page count reported by the extractor.

    Returns:
        PDFStats for the text.
    """
    pages = [text] if isinstance(text, str) else text
    return PDFStats(
        text_length=sum(len(page) for page in pages),
        word_count=sum(count_words(page) for page in pages),
        page_count=page_count,
    )
