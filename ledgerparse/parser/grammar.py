"""
Structural grammar for ledger entries.

Each recognizer takes a Cursor and either returns what it matched (advancing
the cursor) or returns None and leaves the cursor where it started. Choices
are ordered: once an alternative matches, later alternatives are not tried.
"""

import datetime
import re
from typing import Optional, Union

from ..models import Note, Posting, TransactionState
from .amounts import amount_value
from .primitives import (
    ALPHANUMERIC,
    INDENTATION,
    LETTERS,
    NEWLINE,
    NON_EMPTY_REST_OF_LINE,
    OPTIONAL_WHITESPACE,
    REST_OF_LINE,
    TEXT_BEFORE_COMMENT,
    WHITESPACE,
    Cursor,
    trim,
)
from .reducers import HeaderField, assemble_posting, classify_metadata

_DATE = re.compile(r"([0-9]{4})[/-]([0-9]{1,2})[/-]([0-9]{1,2})")
_ACCOUNT_NAME = re.compile(r"[^ \t\n;]+(?: [^ \t\n;]+)*")
_AMOUNT_SEPARATOR = re.compile(r"[ \t]{2,}|\t")
_INLINE_COMMENT = re.compile(r"[ \t]*;+[ \t]*[^\n]*")
_SEMICOLONS = re.compile(r";+")
_TAG = re.compile(r":([^:\n]+):[ \t]*(?=\n|$)")
_METADATA_KEY = re.compile(r"([A-Z][A-Za-z0-9_]*):[ \t]*")

_STATE_FLAGS = {
    "*": TransactionState.CLEARED,
    "!": TransactionState.PENDING,
}


# ---------------------------------------------------------------------------
# Dates and account declarations
# ---------------------------------------------------------------------------


def date_value(cursor: Cursor) -> Optional[datetime.date]:
    """YYYY/MM/DD or YYYY-MM-DD; one- or two-digit month and day."""
    start = cursor.pos
    found = cursor.match(_DATE)
    if found is None:
        return None
    try:
        return datetime.date(*(int(part) for part in found.groups()))
    except ValueError:
        cursor.pos = start
        return None


def account_declaration(cursor: Cursor) -> Optional[tuple[str, str]]:
    """
    account NAME ;[;] type:TYPE

    Returns:
        (trimmed name, raw type token); the caller checks the token against
        the known account types.
    """
    start = cursor.pos
    if not (cursor.literal("account") and cursor.match(WHITESPACE)):
        cursor.pos = start
        return None

    name = cursor.match(TEXT_BEFORE_COMMENT)
    if name is None or not cursor.literal(";"):
        cursor.pos = start
        return None
    cursor.literal(";")
    cursor.skip(OPTIONAL_WHITESPACE)

    type_token = cursor.match(LETTERS) if cursor.literal("type:") else None
    if type_token is None:
        cursor.pos = start
        return None

    cursor.skip(OPTIONAL_WHITESPACE)
    cursor.literal(NEWLINE)
    return trim(name.group()), type_token.group()


# ---------------------------------------------------------------------------
# Transaction headers
# ---------------------------------------------------------------------------


def _state_flag(cursor: Cursor) -> Optional[TransactionState]:
    start = cursor.pos
    state = _STATE_FLAGS.get(cursor.peek())
    if state is None:
        return None
    cursor.pos += 1
    if cursor.match(WHITESPACE) is None:
        cursor.pos = start
        return None
    return state


def _code(cursor: Cursor) -> Optional[str]:
    start = cursor.pos
    if cursor.literal("("):
        code = cursor.match(ALPHANUMERIC)
        if code is not None and cursor.literal(")") and cursor.match(WHITESPACE):
            return code.group()
    cursor.pos = start
    return None


def _header_comment(cursor: Cursor) -> Optional[str]:
    if not cursor.literal(";"):
        return None
    cursor.skip(OPTIONAL_WHITESPACE)
    return trim(cursor.match(REST_OF_LINE).group())


def regular_header(cursor: Cursor) -> Optional[list[HeaderField]]:
    """
    DATE[=AUX_DATE] [*|!] [(CODE)] PAYEE [; COMMENT]

    Returns:
        Ordered (field, value) pairs, or None.
    """
    start = cursor.pos
    fields: list[HeaderField] = []

    date = date_value(cursor)
    if date is None:
        return None
    fields.append(("date", date))

    aux_start = cursor.pos
    if cursor.literal("="):
        aux_date = date_value(cursor)
        if aux_date is None:
            cursor.pos = aux_start
        else:
            fields.append(("aux_date", aux_date))

    if cursor.match(WHITESPACE) is None:
        cursor.pos = start
        return None

    state = _state_flag(cursor)
    if state is not None:
        fields.append(("state", state))

    code = _code(cursor)
    if code is not None:
        fields.append(("code", code))

    payee = cursor.match(TEXT_BEFORE_COMMENT)
    if payee is None:
        cursor.pos = start
        return None
    fields.append(("payee", trim(payee.group())))

    cursor.skip(OPTIONAL_WHITESPACE)
    comment = _header_comment(cursor)
    if comment is not None:
        fields.append(("comment", comment))

    if not cursor.literal(NEWLINE):
        cursor.pos = start
        return None
    return fields


def _directive_header(cursor: Cursor, marker: str, field: str) -> Optional[list[HeaderField]]:
    start = cursor.pos
    cursor.skip(OPTIONAL_WHITESPACE)
    if not cursor.literal(marker):
        cursor.pos = start
        return None
    cursor.skip(OPTIONAL_WHITESPACE)

    text = cursor.match(NON_EMPTY_REST_OF_LINE)
    if text is None or not cursor.literal(NEWLINE):
        cursor.pos = start
        return None
    return [(field, trim(text.group()))]


def automated_header(cursor: Cursor) -> Optional[list[HeaderField]]:
    """= PREDICATE"""
    return _directive_header(cursor, "=", "predicate")


def periodic_header(cursor: Cursor) -> Optional[list[HeaderField]]:
    """~ PERIOD"""
    return _directive_header(cursor, "~", "period")


# ---------------------------------------------------------------------------
# Notes and postings
# ---------------------------------------------------------------------------


def _note_body(cursor: Cursor) -> Note:
    tag = cursor.match(_TAG)
    if tag is not None:
        return Note.tag(tag.group(1))

    key = cursor.match(_METADATA_KEY)
    if key is not None:
        value = cursor.match(REST_OF_LINE).group()
        return classify_metadata(key.group(1), value)

    return Note.comment(cursor.match(REST_OF_LINE).group())


def note_line(cursor: Cursor, indented: bool = True) -> Optional[Note]:
    """
    [INDENT] ;[;...] then a tag, a Key: value pair, or a comment.

    Args:
        cursor: Input position.
        indented: Require leading indentation (note lines inside a
                  transaction) or forbid it (a standalone note).
    """
    start = cursor.pos
    if indented and cursor.match(INDENTATION) is None:
        return None
    if cursor.match(_SEMICOLONS) is None:
        cursor.pos = start
        return None
    cursor.skip(OPTIONAL_WHITESPACE)

    note = _note_body(cursor)
    cursor.literal(NEWLINE)
    return note


def posting_line(cursor: Cursor, indented: bool = True) -> Optional[Posting]:
    """
    INDENT ACCOUNT [SEP AMOUNT] [; COMMENT]

    The account is a run of non-blank tokens joined by single spaces; two or
    more blanks, or a tab, end it. The inline comment is recognized and
    dropped.

    Args:
        cursor: Input position.
        indented: Require leading indentation; when False it is optional.
    """
    start = cursor.pos
    if cursor.match(INDENTATION) is None and indented:
        return None

    account = cursor.match(_ACCOUNT_NAME)
    if account is None:
        cursor.pos = start
        return None

    amount = None
    separator_start = cursor.pos
    if cursor.match(_AMOUNT_SEPARATOR) is not None:
        amount = amount_value(cursor)
        if amount is None:
            cursor.pos = separator_start

    cursor.skip(_INLINE_COMMENT)
    cursor.skip(OPTIONAL_WHITESPACE)
    cursor.literal(NEWLINE)
    return Posting(account=trim(account.group()), amount=amount)


def posting_group(cursor: Cursor) -> Optional[Posting]:
    """Zero or more note lines followed by the posting they describe."""
    start = cursor.pos
    group: list[Union[Note, Posting]] = []

    note = note_line(cursor)
    while note is not None:
        group.append(note)
        note = note_line(cursor)

    posting = posting_line(cursor)
    if posting is None:
        cursor.pos = start
        return None
    group.append(posting)
    return assemble_posting(group)


def posting_groups(cursor: Cursor) -> list[Posting]:
    """Greedily match posting groups; stops at the first that does not match."""
    postings = []
    posting = posting_group(cursor)
    while posting is not None:
        postings.append(posting)
        posting = posting_group(cursor)
    return postings
