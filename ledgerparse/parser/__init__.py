"""
Parsing entry points.

Each function takes one line or one contiguous block of ledger text and
returns a typed record, or raises LedgerParseError with the reason it
failed. The whole input must be consumed.

    >>> parse_amount("-$5").value
    Decimal('-5')
"""

import datetime
import logging
from typing import Callable, Optional

from ..errors import ErrorReason, LedgerParseError
from ..models import AccountDeclaration, AccountType, Amount, Note, Posting, Transaction
from .amounts import amount_value
from .checks import AUTOMATED_MARKER, PERIODIC_MARKER, check_structure
from .grammar import (
    account_declaration,
    automated_header,
    date_value,
    note_line,
    periodic_header,
    posting_groups,
    posting_line,
    regular_header,
)
from .harness import run_parser
from .primitives import Cursor
from .reducers import HeaderField, build_account_declaration, build_transaction

logger = logging.getLogger(__name__)

__all__ = [
    "parse_account_declaration",
    "parse_amount",
    "parse_automated_transaction",
    "parse_date",
    "parse_note",
    "parse_periodic_transaction",
    "parse_posting",
    "parse_regular_transaction",
    "parse_transaction",
]

_ACCOUNT_TYPES = {account_type.value: account_type for account_type in AccountType}


def parse_account_declaration(text: str) -> AccountDeclaration:
    """
    Parse `account NAME ; type:TYPE`.

    Raises:
        LedgerParseError: INVALID_ACCOUNT_TYPE if the line is well formed but
                          names an unknown type, PARSE_ERROR otherwise.
    """
    name, type_token = run_parser(account_declaration, text)
    account_type = _ACCOUNT_TYPES.get(type_token)
    if account_type is None:
        logger.debug(f"Unknown account type {type_token!r} for {name!r}")
        raise LedgerParseError(ErrorReason.INVALID_ACCOUNT_TYPE)
    return build_account_declaration(name, account_type)


def parse_date(text: str) -> datetime.date:
    return run_parser(date_value, text)


def parse_amount(text: str) -> Amount:
    return run_parser(amount_value, text)


def _standalone_note(cursor: Cursor) -> Optional[Note]:
    return note_line(cursor, indented=False)


def _standalone_posting(cursor: Cursor) -> Optional[Posting]:
    return posting_line(cursor, indented=False)


def parse_note(text: str) -> Note:
    """Parse a single `;` note line into a tag, metadata pair or comment."""
    return run_parser(_standalone_note, text)


def parse_posting(text: str) -> Posting:
    """Parse one posting line; leading indentation is optional here."""
    return run_parser(_standalone_posting, text)


def _parse_block(
    text: str,
    header: Callable[[Cursor], Optional[list[HeaderField]]],
    minimum_postings: int,
) -> Transaction:
    check_structure(text)

    cursor = Cursor(text)
    fields = header(cursor)
    if fields is None:
        logger.debug(f"{header.__name__} did not match {text[:40]!r}")
        raise LedgerParseError(ErrorReason.PARSE_ERROR)

    postings = posting_groups(cursor)
    if len(postings) < minimum_postings:
        raise LedgerParseError(ErrorReason.INSUFFICIENT_POSTINGS)
    if not cursor.at_end():
        raise LedgerParseError(ErrorReason.UNEXPECTED_INPUT, cursor.rest)

    return build_transaction([*fields, *postings])


def parse_regular_transaction(text: str) -> Transaction:
    """
    Parse a dated transaction with at least two postings.

    Args:
        text: Header line plus indented body, newline terminated.

    Returns:
        A REGULAR Transaction.

    Raises:
        LedgerParseError: With the structural reason found by the pre-checks,
                          PARSE_ERROR if the header does not match, or
                          UNEXPECTED_INPUT carrying the unconsumed text.
    """
    return _parse_block(text, regular_header, 2)


def parse_automated_transaction(text: str) -> Transaction:
    """Parse `= PREDICATE` plus at least one posting."""
    return _parse_block(text, automated_header, 1)


def parse_periodic_transaction(text: str) -> Transaction:
    """Parse `~ PERIOD` plus at least one posting."""
    return _parse_block(text, periodic_header, 1)


def parse_transaction(text: str) -> Transaction:
    """
    Dispatch on the first non-blank character: `=` automated, `~` periodic,
    anything else regular.
    """
    head = text.lstrip()
    if head.startswith(AUTOMATED_MARKER):
        return parse_automated_transaction(text)
    if head.startswith(PERIODIC_MARKER):
        return parse_periodic_transaction(text)
    return parse_regular_transaction(text)
