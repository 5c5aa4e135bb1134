"""Tests for regular, automated and periodic transaction parsing."""

import datetime
from decimal import Decimal

import pytest

from ledgerparse.errors import ErrorReason, LedgerParseError
from ledgerparse.models import CurrencyPosition, TransactionKind, TransactionState
from ledgerparse.parser import (
    parse_automated_transaction,
    parse_date,
    parse_periodic_transaction,
    parse_regular_transaction,
    parse_transaction,
)
from tests.helpers import block


def reason_of(text: str, parser=parse_transaction) -> ErrorReason:
    with pytest.raises(LedgerParseError) as excinfo:
        parser(text)
    return excinfo.value.reason


# ---------------------------------------------------------------------------
# parse_date
# ---------------------------------------------------------------------------


class TestParseDate:
    def test_slashes(self):
        assert parse_date("2024/01/15") == datetime.date(2024, 1, 15)

    def test_dashes_and_short_fields(self):
        assert parse_date("2024-1-5") == datetime.date(2024, 1, 5)

    def test_invalid_calendar_date(self):
        with pytest.raises(LedgerParseError) as excinfo:
            parse_date("2024/02/30")
        assert excinfo.value.reason is ErrorReason.PARSE_ERROR

    def test_trailing_text(self):
        with pytest.raises(LedgerParseError):
            parse_date("2024/01/15 ")


# ---------------------------------------------------------------------------
# Regular transactions
# ---------------------------------------------------------------------------


class TestRegularTransaction:
    def test_full_header(self, coffee_text):
        txn = parse_transaction(coffee_text)

        assert txn.kind is TransactionKind.REGULAR
        assert txn.date == datetime.date(2024, 1, 15)
        assert txn.state is TransactionState.CLEARED
        assert txn.code == "100"
        assert txn.payee == "Coffee Shop"
        assert txn.comment == "morning"

        coffee, cash = txn.postings
        assert coffee.account == "Expenses:Coffee"
        assert coffee.amount.value == Decimal("4.50")
        assert coffee.amount.currency == "$"
        assert coffee.amount.currency_position is CurrencyPosition.LEADING
        assert cash.account == "Assets:Cash"
        assert cash.amount is None

    def test_defaults(self):
        txn = parse_regular_transaction(
            block("2024/03/01 Rent", "    Expenses:Rent  $900", "    Assets:Checking")
        )
        assert txn.state is TransactionState.UNCLEARED
        assert txn.code == ""
        assert txn.comment is None
        assert txn.aux_date is None
        assert txn.predicate is None
        assert txn.period is None
        assert txn.source_file is None
        assert txn.source_line is None

    def test_header_comment_is_trimmed(self):
        txn = parse_regular_transaction(
            block("2024/03/01 Rent ;  monthly  ", "    Expenses:Rent  $900", "    Assets:Checking")
        )
        assert txn.comment == "monthly"

    def test_pending_flag(self):
        txn = parse_transaction(block("2024/03/01 ! Rent", "  A  $1", "  B"))
        assert txn.state is TransactionState.PENDING

    def test_aux_date(self):
        txn = parse_transaction(block("2024/03/01=2024/03/05 Rent", "  A  $1", "  B"))
        assert txn.aux_date == datetime.date(2024, 3, 5)

    def test_payee_is_trimmed(self):
        txn = parse_transaction(block("2024/03/01   Corner Store   ", "  A  $1", "  B"))
        assert txn.payee == "Corner Store"

    def test_posting_notes(self):
        txn = parse_transaction(
            block(
                "2024/01/15 Grocery Store",
                "    ; :groceries:",
                "    ; Category: groceries",
                "    ; Receipt: 1234",
                "    Expenses:Food  $54.20",
                "    Assets:Checking",
            )
        )
        food = txn.postings[0]
        assert food.tags == ["groceries"]
        assert food.comments == ["Category: groceries"]
        assert food.metadata == {"Receipt": "1234"}

    def test_more_than_two_postings(self):
        txn = parse_transaction(
            block("2024/01/15 Split", "  A  $1", "  B  $2", "  C  4.50 EUR", "  D")
        )
        assert [p.account for p in txn.postings] == ["A", "B", "C", "D"]

    def test_missing_final_newline_on_posting(self):
        txn = parse_transaction("2024/01/15 X\n  A  $1\n  B")
        assert len(txn.postings) == 2

    def test_dangling_note_is_unexpected_input(self):
        with pytest.raises(LedgerParseError) as excinfo:
            parse_transaction(block("2024/01/15 X", "  A  $1", "  B", "  ; dangling"))
        assert excinfo.value.reason is ErrorReason.UNEXPECTED_INPUT
        assert excinfo.value.text == "  ; dangling\n"

    def test_header_only_is_insufficient_postings(self):
        assert reason_of("2024/01/15 Payee", parse_regular_transaction) is ErrorReason.INSUFFICIENT_POSTINGS

    def test_invalid_date_in_header_is_parse_error(self):
        assert reason_of(block("2024/02/30 Payee", "  A  $1", "  B")) is ErrorReason.PARSE_ERROR


# ---------------------------------------------------------------------------
# Structural errors
# ---------------------------------------------------------------------------


class TestTransactionErrors:
    def test_missing_date(self):
        assert reason_of(block("Coffee Shop", "  A  $1", "  B")) is ErrorReason.MISSING_DATE

    def test_missing_payee(self):
        assert reason_of(block("2024/01/15", "  A  $1", "  B")) is ErrorReason.MISSING_PAYEE

    def test_missing_payee_with_trailing_blank(self):
        assert reason_of(block("2024/01/15 ", "  A  $1", "  B")) is ErrorReason.MISSING_PAYEE

    def test_invalid_indentation(self):
        assert reason_of(block("2024/01/15 X", "  A  $1", "B")) is ErrorReason.INVALID_INDENTATION

    def test_single_posting(self):
        assert reason_of(block("2024/01/15 X", "  A  $1")) is ErrorReason.INSUFFICIENT_POSTINGS

    def test_note_lines_do_not_count_as_postings(self):
        text = block("2024/01/15 X", "  ; :tag:", "  A  $1")
        assert reason_of(text) is ErrorReason.INSUFFICIENT_POSTINGS

    def test_insufficient_spacing(self):
        assert reason_of(block("2024/01/15 X", "  A $1", "  B")) is ErrorReason.INSUFFICIENT_SPACING

    def test_indentation_checked_before_posting_count(self):
        assert reason_of(block("2024/01/15 X", "A  $1")) is ErrorReason.INVALID_INDENTATION


# ---------------------------------------------------------------------------
# Automated and periodic transactions
# ---------------------------------------------------------------------------


class TestDirectiveTransactions:
    def test_automated(self):
        txn = parse_transaction(block("= /^Expenses:Food/", "    (Budget:Food)  -1"))
        assert txn.kind is TransactionKind.AUTOMATED
        assert txn.predicate == "/^Expenses:Food/"
        assert txn.date is None
        assert txn.payee is None
        assert txn.postings[0].account == "(Budget:Food)"
        assert txn.postings[0].amount.value == Decimal("-1")

    def test_periodic(self):
        txn = parse_periodic_transaction(
            block("~ Monthly", "    Expenses:Rent  500.00 EUR", "    Assets:Checking")
        )
        assert txn.kind is TransactionKind.PERIODIC
        assert txn.period == "Monthly"
        assert len(txn.postings) == 2

    def test_dispatch_ignores_leading_blanks(self):
        txn = parse_transaction(block("  ~  every week  ", "    Expenses:Gym  $10"))
        assert txn.kind is TransactionKind.PERIODIC
        assert txn.period == "every week"

    def test_missing_predicate(self):
        assert reason_of(block("=", "    A  $1")) is ErrorReason.MISSING_PREDICATE

    def test_missing_period(self):
        assert reason_of(block("~  ", "    A  $1")) is ErrorReason.MISSING_PERIOD

    def test_automated_without_postings(self):
        assert reason_of(block("= expr")) is ErrorReason.INSUFFICIENT_POSTINGS

    def test_automated_entry_point_rejects_periodic_text(self):
        text = block("~ Monthly", "    A  $1")
        assert reason_of(text, parse_automated_transaction) is ErrorReason.PARSE_ERROR


# ---------------------------------------------------------------------------
# Kind inference
# ---------------------------------------------------------------------------


class TestKindInference:
    @pytest.mark.parametrize(
        "text, kind",
        [
            (block("2024/01/01 X", "  A  $1", "  B"), TransactionKind.REGULAR),
            (block("= expr", "  A  $1"), TransactionKind.AUTOMATED),
            (block("~ Weekly", "  A  $1"), TransactionKind.PERIODIC),
        ],
    )
    def test_kind_follows_header(self, text, kind):
        assert parse_transaction(text).kind is kind

    def test_regular_needs_two_postings_directives_need_one(self):
        one_posting = ["  A  $1"]
        assert reason_of(block("2024/01/01 X", *one_posting)) is ErrorReason.INSUFFICIENT_POSTINGS
        assert parse_transaction(block("= expr", *one_posting)).postings
        assert parse_transaction(block("~ Weekly", *one_posting)).postings
