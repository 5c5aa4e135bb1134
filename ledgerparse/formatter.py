"""
Render parsed records back to ledger text or JSON-ready dictionaries.
"""

import json
import logging
from decimal import Decimal, localcontext
from typing import Iterable, Optional

from .models import Amount, CurrencyPosition, Posting, Transaction, TransactionState

logger = logging.getLogger(__name__)

INDENT = "    "
AMOUNT_SEPARATOR = "  "
DOLLAR = "$"

_STATE_FLAGS = {
    TransactionState.CLEARED: "*",
    TransactionState.PENDING: "!",
}

_CENTS = Decimal("0.01")


def format_amount(amount: Optional[Amount]) -> str:
    """
    Format an amount with two decimal places.

    A leading dollar sign is glued to the number ("$-4.50"); other leading
    codes and all trailing codes are separated by a space ("EUR -4.50",
    "-4.50 EUR"). Bare numbers are printed plain. None renders as "".
    """
    if amount is None:
        return ""

    sign = "-" if amount.value < 0 else ""
    magnitude = amount.value.copy_abs()
    # quantize needs room for every integer digit plus the two decimals
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, magnitude.adjusted() + 3)
        number = f"{sign}{magnitude.quantize(_CENTS)}"

    if not amount.currency:
        return number
    if amount.currency_position is CurrencyPosition.TRAILING:
        return f"{number} {amount.currency}"
    if amount.currency == DOLLAR:
        return f"{DOLLAR}{number}"
    return f"{amount.currency} {number}"


def format_header(transaction: Transaction) -> str:
    """
    First line of a transaction.

    Regular: "2024/01/15 * (100) Payee  ; comment". Automated and periodic
    transactions render their "= predicate" / "~ period" line.
    """
    if transaction.predicate is not None:
        return f"= {transaction.predicate}"
    if transaction.period is not None:
        return f"~ {transaction.period}"

    parts = [transaction.date.strftime("%Y/%m/%d") if transaction.date else ""]
    if transaction.aux_date is not None:
        parts[0] += "=" + transaction.aux_date.strftime("%Y/%m/%d")

    flag = _STATE_FLAGS.get(transaction.state)
    if flag:
        parts.append(flag)
    if transaction.code:
        parts.append(f"({transaction.code})")
    parts.append(transaction.payee or "")

    header = " ".join(parts)
    if transaction.comment and transaction.comment.strip():
        header += f"{AMOUNT_SEPARATOR}; {transaction.comment}"
    return header


def format_posting_notes(posting: Posting) -> list[str]:
    """Metadata sorted by key, then tags, then comments."""
    lines = [f"{INDENT}; {key}: {value}" for key, value in sorted(posting.metadata.items())]
    lines += [f"{INDENT}; :{tag}:" for tag in posting.tags]
    lines += [f"{INDENT}; {comment}" for comment in posting.comments]
    return lines


def format_posting(posting: Posting) -> str:
    amount = format_amount(posting.amount)
    if not amount:
        return f"{INDENT}{posting.account}"
    return f"{INDENT}{posting.account}{AMOUNT_SEPARATOR}{amount}"


def format_transaction(transaction: Transaction, include_notes: bool = True) -> str:
    """
    Render a transaction as ledger text.

    Args:
        transaction: Transaction to render.
        include_notes: Emit each posting's notes above it.

    Returns:
        Newline-terminated ledger text.
    """
    lines = [format_header(transaction)]
    for posting in transaction.postings:
        if include_notes:
            lines.extend(format_posting_notes(posting))
        lines.append(format_posting(posting))
    return "\n".join(lines) + "\n"


def format_journal(transactions: Iterable[Transaction], include_notes: bool = True) -> str:
    """Render transactions separated by blank lines."""
    return "\n".join(
        format_transaction(transaction, include_notes) for transaction in transactions
    )


def amount_to_dict(amount: Optional[Amount]) -> Optional[dict]:
    if amount is None:
        return None
    return {
        "value": str(amount.value),
        "currency": amount.currency,
        "currency_position": amount.currency_position.value if amount.currency_position else None,
    }


def transaction_to_dict(transaction: Transaction) -> dict:
    """
    Convert a transaction to JSON-serializable primitives.

    Dates become ISO strings, enums their values, Decimals strings.
    """
    def posting_to_dict(posting: Posting) -> dict:
        return {
            "account": posting.account,
            "amount": amount_to_dict(posting.amount),
            "metadata": dict(posting.metadata),
            "tags": list(posting.tags),
            "comments": list(posting.comments),
        }

    return {
        "kind": transaction.kind.value,
        "date": transaction.date.isoformat() if transaction.date else None,
        "aux_date": transaction.aux_date.isoformat() if transaction.aux_date else None,
        "state": transaction.state.value,
        "code": transaction.code,
        "payee": transaction.payee,
        "comment": transaction.comment,
        "predicate": transaction.predicate,
        "period": transaction.period,
        "postings": [posting_to_dict(p) for p in transaction.postings],
        "source_file": transaction.source_file,
        "source_line": transaction.source_line,
    }


def format_as_json(transactions: Iterable[Transaction]) -> str:
    """
    Format transactions as a JSON document.

    Returns:
        JSON string with a top-level "transactions" array.
    """
    data = {"transactions": [transaction_to_dict(t) for t in transactions]}
    return json.dumps(data, indent=2)
