"""
Semantic reducers: pure folds from matched tokens to typed records.
"""

import re
from dataclasses import replace
from typing import Union

from ..models import (
    AccountDeclaration,
    AccountType,
    Note,
    NoteKind,
    Posting,
    Transaction,
    TransactionKind,
)
from .primitives import trim

HEADER_FIELDS = frozenset(
    {"date", "aux_date", "state", "code", "payee", "comment", "predicate", "period"}
)

_PROSE_START = re.compile(r"[a-z]")

HeaderField = tuple[str, object]


def classify_metadata(key: str, value: str) -> Note:
    """
    Decide whether a `Key: value` note is metadata or prose.

    A value whose first non-blank character is an ASCII lowercase letter
    reads as a sentence that happens to contain a colon, so the whole line
    is kept as a comment. Anything else is metadata.

    Args:
        key: Capitalized identifier before the colon.
        value: Text after the colon (leading spaces may already be removed).

    Returns:
        A METADATA note with trimmed key and value, or a COMMENT note
        holding "Key: value".
    """
    trimmed_value = trim(value)
    if trimmed_value and _PROSE_START.match(trimmed_value):
        return Note.comment(f"{key}: {value}")
    return Note.metadata(trim(key), trimmed_value)


def attach_notes(notes: list[Note], posting: Posting) -> Posting:
    """
    Fold note lines into the posting that follows them.

    Metadata keys overwrite earlier duplicates; tags and comments keep
    source order.
    """
    metadata: dict[str, str] = {}
    tags: list[str] = []
    comments: list[str] = []

    for note in notes:
        if note.kind is NoteKind.METADATA:
            metadata[note.key] = note.value
        elif note.kind is NoteKind.TAG:
            tags.append(note.text)
        else:
            comments.append(note.text)

    return replace(posting, metadata=metadata, tags=tags, comments=comments)


def assemble_posting(group: list[Union[Note, Posting]]) -> Posting:
    """Split a matched (notes..., posting) group and attach the notes."""
    *notes, posting = group
    return attach_notes(notes, posting)


def infer_kind(transaction: Transaction) -> TransactionKind:
    if transaction.predicate is not None:
        return TransactionKind.AUTOMATED
    if transaction.period is not None:
        return TransactionKind.PERIODIC
    return TransactionKind.REGULAR


def build_transaction(parts: list[Union[HeaderField, Posting]]) -> Transaction:
    """
    Fold header fields and postings over a fully defaulted Transaction.

    Each part updates exactly one field; postings are appended in order.
    `kind` is derived once the fold is complete.

    Args:
        parts: (field name, value) pairs and Posting records in match order.

    Returns:
        The assembled Transaction.
    """
    transaction = Transaction()

    for part in parts:
        if isinstance(part, Posting):
            transaction = replace(transaction, postings=transaction.postings + [part])
            continue
        name, value = part
        if name in HEADER_FIELDS:
            transaction = replace(transaction, **{name: value})

    return replace(transaction, kind=infer_kind(transaction))


def build_account_declaration(name: str, account_type: AccountType) -> AccountDeclaration:
    return AccountDeclaration(name=trim(name), type=account_type)
