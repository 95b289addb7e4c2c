"""Layout formatter entry point.

Maps a formatting mode to its rule sequence and applies it. The function is
total: any string goes in, a string comes out, no I/O, no shared state.
"""

import logging

from pdfparse.formatting.rules import MODE_RULES, FormattingMode, apply_rules

logger = logging.getLogger(__name__)


def resolve_mode(mode: FormattingMode | str | None) -> FormattingMode | None:
    """Resolve a mode value, ignoring case and surrounding whitespace.

    Returns:
        The matching FormattingMode, or None if the value is not a known mode.
    """
    if isinstance(mode, FormattingMode):
        return mode
    if not isinstance(mode, str):
        return None
    try:
        return FormattingMode(mode.strip().lower())
    except ValueError:
        return None


def format_text(
    text: str | None,
    mode: FormattingMode | str | None = FormattingMode.RAW,
) -> str:
    """Reformat extracted PDF text with the rule sequence of ``mode``.

    Args:
        text: Raw text from the extractor. None is treated as empty.
        mode: Formatting mode or its string value.

    Returns:
        The formatted text. Unknown modes return the input unchanged.
    """
    if not text:
        return ""

    resolved = resolve_mode(mode)
    if resolved is None:
        logger.debug(f"Unknown formatting mode {mode!r}, returning text unchanged")
        return text

    return apply_rules(text, MODE_RULES[resolved])
