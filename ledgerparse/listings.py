"""
Sorted, de-duplicated listings drawn from parsed transactions.

Backs the `list` command group: accounts, payees, commodities and tags.
"""

import logging
import re
from typing import Iterable, Iterator, Optional

from .models import AccountDeclaration, Posting, Transaction

logger = logging.getLogger(__name__)


def regular_transactions(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Dated transactions only; automated and periodic entries are dropped."""
    return [transaction for transaction in transactions if transaction.is_regular]


def all_postings(transactions: Iterable[Transaction]) -> Iterator[Posting]:
    for transaction in transactions:
        yield from transaction.postings


def _unique_sorted(values: Iterable[Optional[str]]) -> list[str]:
    return sorted({value for value in values if value})


def list_accounts(
    transactions: Iterable[Transaction],
    declarations: Iterable[AccountDeclaration] = (),
) -> list[str]:
    """
    Every account used by a posting or declared with `account`.

    Args:
        transactions: Parsed transactions.
        declarations: Account declarations, whose names are included even
                      if no posting uses them.

    Returns:
        Sorted unique account names.
    """
    used = [posting.account for posting in all_postings(transactions)]
    declared = [declaration.name for declaration in declarations]
    return _unique_sorted(used + declared)


def list_payees(transactions: Iterable[Transaction]) -> list[str]:
    return _unique_sorted(transaction.payee for transaction in transactions)


def list_commodities(transactions: Iterable[Transaction]) -> list[str]:
    """Currencies of explicit posting amounts; elided amounts contribute none."""
    return _unique_sorted(
        posting.amount.currency
        for posting in all_postings(transactions)
        if posting.amount is not None
    )


def list_tags(transactions: Iterable[Transaction]) -> list[str]:
    return _unique_sorted(
        tag for posting in all_postings(transactions) for tag in posting.tags
    )


def filter_names(names: Iterable[str], pattern: Optional[str] = None) -> list[str]:
    """
    Keep names matching a regular expression anywhere.

    Args:
        names: Candidate names.
        pattern: Regular expression, or None to keep everything.

    Returns:
        The matching names, order preserved.

    Raises:
        ValueError: If `pattern` is not a valid regular expression.
    """
    names = list(names)
    if pattern is None:
        return names

    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e

    matched = [name for name in names if regex.search(name)]
    logger.debug(f"Pattern {pattern!r} kept {len(matched)} of {len(names)}")
    return matched
