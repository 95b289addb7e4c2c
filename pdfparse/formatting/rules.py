"""Text rewrite rules and the rule sequence of every formatting mode.

A mode is nothing more than an ordered tuple of rules. Each rule rewrites
the whole text and the next rule sees its output, so the order inside a
sequence is part of the mode's behaviour:

    raw         line endings only
    minimal     single spaces, trimmed lines, line breaks kept
    compact     everything on one line
    smart       word repair plus paragraph breaks after sentences
    structured  line breaks before contact details and section headers
    visual      gap-width classification of columns and sections

Rules that look at gaps, separators or the preceding character only match
spaces and tabs, so they never join lines an earlier rule split apart.
"""

import re
from collections.abc import Callable, Iterable
from enum import Enum
from functools import partial
from typing import NamedTuple

# Gap widths (consecutive spaces between two tokens) used by visual mode
COLUMN_GAP = 8
SECTION_GAP = 5
SPACING_GAP = 3
PRESERVED_SPACING = " " * SPACING_GAP

# Whitespace removed at line edges; newline and form feed are structural
_LINE_TRIM_CHARS = " \t\r\x0b\xa0"

CURRENCY_SYMBOLS = "$€£¥₹₽¢₩₪₫₦₨₱₡₴₼"


class FormattingMode(str, Enum):
    """Text formatting applied to extracted PDF text."""

    RAW = "raw"
    MINIMAL = "minimal"
    COMPACT = "compact"
    SMART = "smart"
    STRUCTURED = "structured"
    VISUAL = "visual"


class Rule(NamedTuple):
    """A named whole-text rewrite.

    Attributes:
        name: Identifier used in logs and tests.
        rewrite: Function mapping the current text to the rewritten text.
    """

    name: str
    rewrite: Callable[[str], str]

    def apply(self, text: str) -> str:
        return self.rewrite(text)


def sub_rule(
    name: str,
    pattern: str,
    replacement: str | Callable[[re.Match[str]], str],
    flags: int = 0,
) -> Rule:
    """Build a rule that substitutes every match of ``pattern``."""
    compiled = re.compile(pattern, flags)
    return Rule(name, partial(compiled.sub, replacement))


def break_before(name: str, token: str, preceded_by: str = r"\S") -> Rule:
    """Build a rule that moves ``token`` onto a new line.

    The horizontal whitespace between ``preceded_by`` and the token is
    replaced by a single line break.
    """
    return sub_rule(name, rf"(?<={preceded_by})[ \t]+(?={token})", "\n")


def apply_rules(text: str, rules: Iterable[Rule]) -> str:
    """Apply ``rules`` to ``text`` strictly in order."""
    for rule in rules:
        text = rule.apply(text)
    return text


def _trim_lines(text: str) -> str:
    return "\n".join(line.strip(_LINE_TRIM_CHARS) for line in text.split("\n"))


def _classify_gap(match: re.Match[str]) -> str:
    gap = match.group(0)
    width = len(gap)
    if width >= COLUMN_GAP:
        # Column boundary
        return "\n"
    if width >= SECTION_GAP:
        # New logical section
        return "\n"
    if width >= SPACING_GAP:
        return PRESERVED_SPACING
    return gap


def _clamp_spacing(match: re.Match[str]) -> str:
    return " " * min(len(match.group(0)), SPACING_GAP)


# --- Common primitives ---

NORMALIZE_LINE_ENDINGS = sub_rule("normalize_line_endings", r"\r\n?", "\n")

WORD_BOUNDARY_RULES = (
    sub_rule("split_lower_upper", r"([a-z])([A-Z])", r"\1 \2"),
    sub_rule("split_digit_letter", r"([0-9])([A-Za-z])", r"\1 \2"),
    sub_rule("split_letter_digit", r"([A-Za-z])([0-9])", r"\1 \2"),
)

TRIM_LINES = Rule("trim_lines", _trim_lines)
COLLAPSE_BLANK_RUNS = sub_rule("collapse_blank_runs", r"\n{4,}", "\n\n\n")
COLLAPSE_HORIZONTAL = sub_rule("collapse_horizontal_whitespace", r"[ \t]+", " ")
STRIP = Rule("strip", str.strip)

FIX_PURCHASE_ORDER_LABEL = sub_rule(
    "fix_purchase_order_label", r"PURCHASEORDERNO:", "PURCHASE ORDER NO:"
)

# --- visual ---

SPACE_AFTER_PUNCTUATION = sub_rule(
    "space_after_punctuation", r"([,;:])([A-Za-z])", r"\1 \2"
)
# Gap width counts spaces only; tabs are left to the final spacing clamp
CLASSIFY_GAPS = sub_rule("classify_gaps", r"(?<=\S) {2,}(?=\S)", _classify_gap)

# A label starts at a line start or right after a previous colon
_LABEL = r"(?<![^:\n\f])[^:\n\f]{3,}:"

BREAK_BEFORE_CAPS_VALUE = sub_rule(
    "break_before_caps_value", rf"({_LABEL})[ \t]*([A-Z][A-Z ]{{9,}})", r"\1\n\2"
)
BREAK_BEFORE_LONG_VALUE = sub_rule(
    "break_before_long_value", rf"({_LABEL})[ \t]*([^:\n\f]{{20,}})", r"\1\n\2"
)
JOIN_SHORT_LABEL_VALUE = sub_rule(
    "join_short_label_value",
    r"([^:\n\f]{2,8}:)[ \t]{0,2}([^:\s][^:\n\f]{0,14})(?=\s|$)",
    r"\1 \2",
)

PHONE_PATTERN = r"\(?\d{2,4}\)?[ ]?\d{3,4}[ -]?\d{3,4}"
EMAIL_PATTERN = r"[^\s@]+@\S+\.\S+"
URL_PATTERN = r"(?:https?://|www\.)\S+"

CONTACT_RULES = (
    break_before("break_before_phone", PHONE_PATTERN, preceded_by=r"\w"),
    break_before("break_before_email", EMAIL_PATTERN, preceded_by=r"\w"),
    break_before("break_before_url", URL_PATTERN, preceded_by=r"\w"),
)

LIST_AND_AMOUNT_RULES = (
    break_before("break_before_list_item", r"\d+[ \t]+[A-Z]", preceded_by=r"[^\n\d]"),
    break_before(
        "break_before_amount", rf"[{CURRENCY_SYMBOLS}]\d", preceded_by=r"[^\n\d]"
    ),
)

SECTION_HEADER_RULES = (
    sub_rule("enter_caps_header", r"(?<=[a-z])[ \t]+(?=[A-Z]{4,}\b)", "\n\n"),
    sub_rule("leave_caps_header", r"(?<=[A-Z]{4})[ \t]+(?=[a-z]{3,})", "\n\n"),
)

BREAK_AFTER_SENTENCE = sub_rule(
    "break_after_sentence", r"(?<=[.!?])[ \t]+(?=[A-Z][a-z]{4,})", "\n"
)
ISOLATE_SEPARATORS = sub_rule("isolate_separators", r"[-_=]{4,}", r"\n\g<0>\n")
CLAMP_SPACING = sub_rule("clamp_spacing", r"[ \t]+", _clamp_spacing)
COLLAPSE_BLANK_LINES = sub_rule("collapse_blank_lines", r"\n{3,}", "\n\n")

# --- smart ---

_DATE = r"(?<![\d/])(\d{2}/\d{2}/\d{4})(?![\d/])"

PARAGRAPH_AFTER_SENTENCE = sub_rule(
    "paragraph_after_sentence", r"([.!?])[ \t\n]*\n", r"\1\n\n"
)
DATE_RULES = (
    sub_rule("break_before_date", rf"(?<=\S)[ \t]*{_DATE}", r"\n\1"),
    sub_rule("break_after_date", rf"{_DATE}[ \t]*(?=\S)", r"\1\n"),
)
BREAK_BEFORE_NOTICE = sub_rule(
    "break_before_notice", r"(?<=\S)[ \t]*(IMPORTANT:)", r"\n\1"
)

# --- structured ---

FIX_PO_BOX_LABEL = sub_rule("fix_po_box_label", r"GPOBox[ \t]*(\d+)", r"GPO Box \1")

CONTACT_BLOCK_RULES = (
    break_before("break_before_state_postcode", r"[A-Z]{2,}[ \t][A-Z]{2,}[ \t]\d+"),
    break_before("break_before_web_address", r"www\."),
    break_before("break_before_email", r"[^\s@]+@\S"),
    break_before("break_before_phone", r"\(\d{2}\)[ \t]\d{4}[ \t]\d{3,4}"),
)

SECTION_TITLE_RULES = (
    sub_rule("goods_or_service_header", r"(GOODS OR SERVICE REQUIRED)", r"\n\n\1\n"),
    sub_rule("order_total_header", r"(Total Order Value)", r"\n\1"),
    sub_rule("notice_header", r"(IMPORTANT:)", r"\n\n\1"),
)


MODE_RULES: dict[FormattingMode, tuple[Rule, ...]] = {
    FormattingMode.RAW: (NORMALIZE_LINE_ENDINGS,),
    FormattingMode.MINIMAL: (
        NORMALIZE_LINE_ENDINGS,
        COLLAPSE_HORIZONTAL,
        TRIM_LINES,
    ),
    FormattingMode.COMPACT: (
        NORMALIZE_LINE_ENDINGS,
        sub_rule("collapse_all_whitespace", r"\s+", " "),
        sub_rule("collapse_blank_line_runs", r"\n\s*\n", "\n"),
        STRIP,
    ),
    FormattingMode.SMART: (
        NORMALIZE_LINE_ENDINGS,
        *WORD_BOUNDARY_RULES,
        PARAGRAPH_AFTER_SENTENCE,
        COLLAPSE_BLANK_RUNS,
        TRIM_LINES,
        FIX_PURCHASE_ORDER_LABEL,
        *DATE_RULES,
        BREAK_BEFORE_NOTICE,
    ),
    FormattingMode.STRUCTURED: (
        NORMALIZE_LINE_ENDINGS,
        *WORD_BOUNDARY_RULES,
        FIX_PURCHASE_ORDER_LABEL,
        FIX_PO_BOX_LABEL,
        *CONTACT_BLOCK_RULES,
        *SECTION_TITLE_RULES,
        COLLAPSE_HORIZONTAL,
        TRIM_LINES,
        COLLAPSE_BLANK_LINES,
        STRIP,
    ),
    FormattingMode.VISUAL: (
        NORMALIZE_LINE_ENDINGS,
        *WORD_BOUNDARY_RULES,
        SPACE_AFTER_PUNCTUATION,
        CLASSIFY_GAPS,
        BREAK_BEFORE_CAPS_VALUE,
        BREAK_BEFORE_LONG_VALUE,
        JOIN_SHORT_LABEL_VALUE,
        *CONTACT_RULES,
        *LIST_AND_AMOUNT_RULES,
        *SECTION_HEADER_RULES,
        BREAK_AFTER_SENTENCE,
        ISOLATE_SEPARATORS,
        COLLAPSE_BLANK_RUNS,
        CLAMP_SPACING,
        TRIM_LINES,
        COLLAPSE_BLANK_LINES,
        STRIP,
    ),
}


def normalize_line_endings(text: str) -> str:
    return NORMALIZE_LINE_ENDINGS.apply(text)


def repair_word_boundaries(text: str) -> str:
    """Insert spaces at lower/upper and digit/letter transitions."""
    return apply_rules(text, WORD_BOUNDARY_RULES)


def trim_lines(text: str) -> str:
    return TRIM_LINES.apply(text)


def classify_gaps(text: str) -> str:
    """Turn wide gaps into line breaks and keep medium gaps as three spaces."""
    return CLASSIFY_GAPS.apply(text)
