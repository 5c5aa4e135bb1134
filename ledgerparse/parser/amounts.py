"""
Amount grammar and normalizer.

Three shapes are recognized, tried in this order, first match wins:

    leading currency    $4.50   -$5   $-5   USD 1,000
    trailing currency   4.50 EUR   -12 CHF
    bare number         1,234.56   -3

A minus sign before the currency or before the number negates the value.
Integer digits may be grouped by commas, every group after the first being
exactly three digits.
"""

import re
from decimal import Decimal
from typing import Optional

from ..models import Amount, CurrencyPosition
from .primitives import DIGITS, LETTERS, OPTIONAL_WHITESPACE, Cursor

CURRENCY_SYMBOL = "$"
SIGN = "-"

_COMMA_GROUP = re.compile(r",([0-9]{3})")
_FRACTION = re.compile(r"\.([0-9]+)")

# Matches one complete amount token, currency included. Used only by the
# structural spacing check; the grammar below does the real recognition.
AMOUNT_PATTERN = re.compile(
    r"-?(?:\$|[A-Za-z]+)?[ \t]*-?[ \t]*[0-9]+(?:,[0-9]{3})*(?:\.[0-9]+)?"
    r"(?:[ \t]*(?:\$|[A-Za-z]+))?"
)


def normalize_amount(
    negative: bool,
    integer_digits: str,
    decimal_digits: Optional[str],
    currency: Optional[str] = None,
    position: Optional[CurrencyPosition] = None,
) -> Amount:
    """
    Fold matched amount parts into an Amount.

    value = sign * (integer + decimal_digits / 10 ** len(decimal_digits)),
    computed exactly.

    Args:
        negative: True if a minus sign was matched anywhere in the span.
        integer_digits: Integer part with comma separators already removed.
        decimal_digits: Digits after the period, or None.
        currency: Matched symbol or code, if any.
        position: Which shape matched; None for bare numbers.

    Returns:
        The normalized Amount.
    """
    # Exact at any length; no context rounding applies.
    if decimal_digits:
        value = Decimal(f"{integer_digits}.{decimal_digits}")
    else:
        value = Decimal(integer_digits)
    if negative:
        value = value.copy_negate()
    return Amount(value=value, currency=currency, currency_position=position)


def _currency(cursor: Cursor) -> Optional[str]:
    if cursor.literal(CURRENCY_SYMBOL):
        return CURRENCY_SYMBOL
    code = cursor.match(LETTERS)
    return code.group() if code else None


def _number(cursor: Cursor) -> Optional[tuple[str, Optional[str]]]:
    head = cursor.match(DIGITS)
    if head is None:
        return None

    integer_digits = head.group()
    group = cursor.match(_COMMA_GROUP)
    while group is not None:
        integer_digits += group.group(1)
        group = cursor.match(_COMMA_GROUP)

    fraction = cursor.match(_FRACTION)
    return integer_digits, fraction.group(1) if fraction else None


def _leading_currency(cursor: Cursor) -> Optional[Amount]:
    start = cursor.pos
    negative = cursor.literal(SIGN)

    currency = _currency(cursor)
    if currency is None:
        cursor.pos = start
        return None

    cursor.skip(OPTIONAL_WHITESPACE)
    negative = cursor.literal(SIGN) or negative
    cursor.skip(OPTIONAL_WHITESPACE)

    number = _number(cursor)
    if number is None:
        cursor.pos = start
        return None

    return normalize_amount(negative, *number, currency, CurrencyPosition.LEADING)


def _trailing_currency(cursor: Cursor) -> Optional[Amount]:
    start = cursor.pos
    negative = cursor.literal(SIGN)

    number = _number(cursor)
    if number is None:
        cursor.pos = start
        return None

    cursor.skip(OPTIONAL_WHITESPACE)
    currency = _currency(cursor)
    if currency is None:
        cursor.pos = start
        return None

    return normalize_amount(negative, *number, currency, CurrencyPosition.TRAILING)


def _bare_number(cursor: Cursor) -> Optional[Amount]:
    start = cursor.pos
    negative = cursor.literal(SIGN)

    number = _number(cursor)
    if number is None:
        cursor.pos = start
        return None

    return normalize_amount(negative, *number)


_ALTERNATIVES = (_leading_currency, _trailing_currency, _bare_number)


def amount_value(cursor: Cursor) -> Optional[Amount]:
    """
    Recognize one amount at the cursor.

    Returns:
        The first alternative that matches, or None with the cursor unchanged.
    """
    for alternative in _ALTERNATIVES:
        amount = alternative(cursor)
        if amount is not None:
            return amount
    return None
