"""
Shared pytest fixtures for ledgerparse tests.
"""

import pytest

from ledgerparse.config import LedgerParseConfig
from tests.helpers import block, make_posting, make_transaction, write_journal


@pytest.fixture
def sample_config() -> LedgerParseConfig:
    """Default ledgerparse configuration."""
    return LedgerParseConfig()


@pytest.fixture
def coffee_text() -> str:
    """A cleared, coded transaction with a header comment and an elided amount."""
    return block(
        "2024/01/15 * (100) Coffee Shop ; morning",
        "  Expenses:Coffee  $4.50",
        "  Assets:Cash",
    )


@pytest.fixture
def sample_journal_text() -> str:
    """
    A small journal exercising every kind of entry:

        account declarations (one-line and block form)
        two regular transactions with notes
        one automated and one periodic transaction
        skipped directives and top-level comments
    """
    return block(
        "; Personal books",
        "account Assets:Checking ; type:asset",
        "account Expenses:Food",
        "    alias food",
        "    assert amount > 0",
        "",
        "commodity $",
        "",
        "2024/01/01 * Opening Balance",
        "    Assets:Checking  $1,000.00",
        "    Equity:Opening",
        "",
        "2024/01/15 ! (42) Grocery Store ; weekly",
        "    ; :groceries:",
        "    ; Receipt: 1234",
        "    Expenses:Food  $54.20",
        "    ; paid with card",
        "    Assets:Checking",
        "",
        "= /^Expenses:Food/",
        "    (Budget:Food)  -1",
        "",
        "~ Monthly",
        "    Expenses:Rent  500.00 EUR",
        "    Assets:Checking",
    )


@pytest.fixture
def sample_journal(tmp_path, sample_journal_text):
    """The sample journal written to disk."""
    path = tmp_path / "books.ledger"
    path.write_text(sample_journal_text, encoding="utf-8")
    return path.resolve()


@pytest.fixture
def broken_journal(tmp_path):
    """A journal whose second transaction (line 5) has a single-space amount."""
    return write_journal(
        tmp_path,
        "broken.ledger",
        "2024/01/01 Opening",
        "    Assets:Cash  $10.00",
        "    Equity:Opening",
        "",
        "2024/01/02 Lunch",
        "    Expenses:Food $12.00",
        "    Assets:Cash",
    )


@pytest.fixture
def grocery_transactions() -> list:
    """Two parsed-looking transactions for listing and formatting tests."""
    return [
        make_transaction(
            "Grocery Store",
            [
                make_posting("Expenses:Food", "54.20", tags=["groceries"]),
                make_posting("Assets:Checking"),
            ],
        ),
        make_transaction(
            "Cafe",
            [
                make_posting("Expenses:Coffee", "4.50", currency="EUR", tags=["coffee", "groceries"]),
                make_posting("Assets:Cash"),
            ],
            date="2024-01-16",
        ),
    ]
