"""
Typed records produced by the ledger parser.

Every record is built fresh per parse call from immutable input text.
Monetary values are kept as Decimal so the normalized value is exactly the
decimal written in the journal.
"""

import datetime
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class CurrencyPosition(Enum):
    """Where a currency marker sits relative to the number."""

    LEADING = "leading"
    TRAILING = "trailing"


class TransactionState(Enum):
    CLEARED = "cleared"
    PENDING = "pending"
    UNCLEARED = "uncleared"


class TransactionKind(Enum):
    REGULAR = "regular"
    AUTOMATED = "automated"
    PERIODIC = "periodic"


class AccountType(Enum):
    EXPENSE = "expense"
    REVENUE = "revenue"
    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"


class NoteKind(Enum):
    TAG = "tag"
    METADATA = "metadata"
    COMMENT = "comment"


@dataclass
class Amount:
    """
    A signed quantity with optional currency metadata.

    Attributes:
        value: Signed decimal magnitude.
        currency: Currency symbol ("$") or letter code ("USD"), if any.
        currency_position: LEADING or TRAILING when a currency is present,
                           None otherwise.
    """

    value: Decimal
    currency: Optional[str] = None
    currency_position: Optional[CurrencyPosition] = None

    def __post_init__(self):
        """Keep currency and currency_position present or absent together."""
        if (self.currency is None) != (self.currency_position is None):
            raise ValueError(
                f"currency ({self.currency!r}) and currency_position "
                f"({self.currency_position!r}) must both be set or both be None"
            )


@dataclass
class Posting:
    """
    One account line within a transaction.

    Attributes:
        account: Account name, trimmed, internal single spaces preserved.
        amount: Explicit amount, or None when elided.
        metadata: Key/value notes; a later duplicate key overwrites an earlier one.
        tags: Tags in source order.
        comments: Free comments in source order.
    """

    account: str
    amount: Optional[Amount] = None
    metadata: dict[str, str] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    comments: list[str] = field(default_factory=list)


@dataclass
class Transaction:
    """
    A regular, automated or periodic transaction.

    `kind` is derived from which header fields are set and is never read
    from the input. `source_file` and `source_line` are filled in by callers
    that know where the text came from.
    """

    kind: TransactionKind = TransactionKind.REGULAR
    date: Optional[datetime.date] = None
    aux_date: Optional[datetime.date] = None
    state: TransactionState = TransactionState.UNCLEARED
    code: str = ""
    payee: Optional[str] = None
    comment: Optional[str] = None
    predicate: Optional[str] = None
    period: Optional[str] = None
    postings: list[Posting] = field(default_factory=list)
    source_file: Optional[str] = None
    source_line: Optional[int] = None

    @property
    def is_regular(self) -> bool:
        """True for dated, non-automated, non-periodic transactions."""
        return self.kind is TransactionKind.REGULAR and self.date is not None


@dataclass
class AccountDeclaration:
    """
    An `account` directive.

    Attributes:
        name: Trimmed account name.
        type: Declared account type.
        aliases: Alias names from an indented `alias` sub-directive.
        assertions: Expressions from indented `assert` sub-directives.
    """

    name: str
    type: AccountType
    aliases: list[str] = field(default_factory=list)
    assertions: list[str] = field(default_factory=list)


@dataclass
class Note:
    """
    A note line: a tag, a metadata pair, or a free comment.

    For TAG and COMMENT notes `text` holds the content; for METADATA notes
    `key` and `value` are set and `text` is None.
    """

    kind: NoteKind
    text: Optional[str] = None
    key: Optional[str] = None
    value: Optional[str] = None

    @classmethod
    def tag(cls, text: str) -> "Note":
        return cls(NoteKind.TAG, text=text)

    @classmethod
    def metadata(cls, key: str, value: str) -> "Note":
        return cls(NoteKind.METADATA, key=key, value=value)

    @classmethod
    def comment(cls, text: str) -> "Note":
        return cls(NoteKind.COMMENT, text=text)
