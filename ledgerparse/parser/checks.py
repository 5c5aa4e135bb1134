"""
Structural pre-checks for transaction text.

The grammar alone can only say that a transaction did not match. These
line-level checks run first and name the most likely cause. They are tried
in a fixed order and the first one that fires wins.
"""

import re
from typing import Optional

from ..errors import ErrorReason, LedgerParseError
from .amounts import AMOUNT_PATTERN

_DATE_PREFIX = r"[0-9]{4}[/-][0-9]{1,2}[/-][0-9]{1,2}"
_STARTS_WITH_DATE = re.compile(rf"^{_DATE_PREFIX}")
_HAS_PAYEE = re.compile(
    rf"^{_DATE_PREFIX}(?:={_DATE_PREFIX})?\s+(?:[*!]\s+)?(?:\([^)]+\)\s+)?(.+)"
)
_POSTING_LINE = re.compile(r"^\s+[^\s;]")
_INDENTED = re.compile(r"^\s")
_SEPARATOR = re.compile(r"[ \t]{2,}|\t")

AUTOMATED_MARKER = "="
PERIODIC_MARKER = "~"


def is_directive(first_line: str) -> bool:
    """True if the header opens an automated or periodic transaction."""
    return first_line.lstrip().startswith((AUTOMATED_MARKER, PERIODIC_MARKER))


def is_posting_line(line: str) -> bool:
    return bool(_POSTING_LINE.match(line))


def count_postings(lines: list[str]) -> int:
    """Count body lines that look like postings (indented, not a note)."""
    return sum(1 for line in lines[1:] if is_posting_line(line))


def has_invalid_indentation(lines: list[str]) -> bool:
    return any(
        not _INDENTED.match(line) for line in lines[1:] if line.strip()
    )


def lacks_amount_spacing(line: str) -> bool:
    """
    True if a posting line ends in an amount set off by a single space.

    Inline comments are ignored. A line that already has a two-space or tab
    separator somewhere is accepted; the grammar sorts out the rest.
    """
    content = line.split(";", 1)[0].strip()
    if _SEPARATOR.search(content):
        return False
    return any(
        AMOUNT_PATTERN.fullmatch(content, index + 1)
        for index, char in enumerate(content)
        if char == " "
    )


def has_insufficient_spacing(lines: list[str]) -> bool:
    return any(
        lacks_amount_spacing(line) for line in lines[1:] if is_posting_line(line)
    )


def find_structural_error(text: str) -> Optional[ErrorReason]:
    """
    Run the ordered pre-checks over a transaction block.

    Args:
        text: Complete transaction text, header line first.

    Returns:
        The reason of the first check that fails, or None.
    """
    lines = text.split("\n")
    first_line = lines[0]
    header = first_line.lstrip()
    directive = is_directive(first_line)
    minimum = 1 if directive else 2
    postings = count_postings(lines)

    if header.startswith(AUTOMATED_MARKER) and header.strip() == AUTOMATED_MARKER:
        return ErrorReason.MISSING_PREDICATE
    if header.startswith(PERIODIC_MARKER) and header.strip() == PERIODIC_MARKER:
        return ErrorReason.MISSING_PERIOD
    if directive and postings < minimum:
        return ErrorReason.INSUFFICIENT_POSTINGS
    if not directive and not _STARTS_WITH_DATE.match(first_line):
        return ErrorReason.MISSING_DATE
    if not directive and not _HAS_PAYEE.match(first_line):
        return ErrorReason.MISSING_PAYEE
    if has_invalid_indentation(lines):
        return ErrorReason.INVALID_INDENTATION
    if postings < minimum:
        return ErrorReason.INSUFFICIENT_POSTINGS
    if has_insufficient_spacing(lines):
        return ErrorReason.INSUFFICIENT_SPACING
    return None


def check_structure(text: str) -> None:
    """
    Raise the first structural problem found in `text`.

    Raises:
        LedgerParseError: With the reason of the first failing check.
    """
    reason = find_structural_error(text)
    if reason is not None:
        raise LedgerParseError(reason)
