"""
Shared test helpers for ledgerparse unit tests.

Provides factory functions for building records and small journal texts
without going through the parser.
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from pathlib import Path

from ledgerparse.models import (
    Amount,
    CurrencyPosition,
    Posting,
    Transaction,
    TransactionKind,
    TransactionState,
)


# ---------------------------------------------------------------------------
# Factory helpers
# ---------------------------------------------------------------------------


def make_amount(
    value: str,
    currency: str | None = "$",
    position: CurrencyPosition | None = CurrencyPosition.LEADING,
) -> Amount:
    """Create an Amount; pass currency=None for a bare number."""
    if currency is None:
        position = None
    return Amount(value=Decimal(value), currency=currency, currency_position=position)


def make_posting(
    account: str,
    amount: str | None = None,
    currency: str | None = "$",
    tags: list[str] | None = None,
    metadata: dict[str, str] | None = None,
    comments: list[str] | None = None,
) -> Posting:
    """Create a Posting; amount=None leaves it elided."""
    return Posting(
        account=account,
        amount=make_amount(amount, currency) if amount is not None else None,
        metadata=metadata or {},
        tags=tags or [],
        comments=comments or [],
    )


def make_transaction(
    payee: str,
    postings: list[Posting],
    date: str = "2024-01-15",
    state: TransactionState = TransactionState.UNCLEARED,
    code: str = "",
    comment: str | None = None,
) -> Transaction:
    """Create a regular Transaction."""
    return Transaction(
        kind=TransactionKind.REGULAR,
        date=datetime.date.fromisoformat(date),
        state=state,
        code=code,
        payee=payee,
        comment=comment,
        postings=postings,
    )


def block(*lines: str) -> str:
    """Join lines into newline-terminated ledger text."""
    return "".join(f"{line}\n" for line in lines)


def write_journal(directory: Path, name: str, *lines: str) -> Path:
    """Write a journal file under *directory* and return its resolved path."""
    path = directory / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(block(*lines), encoding="utf-8")
    return path.resolve()
