"""
Error classification for ledger parsing.

The parser reports failures with a closed vocabulary of reasons. A reason
can later be wrapped with the line, file and include chain it came from by
whoever knows that context (the journal reader, the CLI).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorReason(Enum):
    """Why a parse failed."""

    MISSING_DATE = "missing_date"
    MISSING_PAYEE = "missing_payee"
    MISSING_PREDICATE = "missing_predicate"
    MISSING_PERIOD = "missing_period"
    INVALID_INDENTATION = "invalid_indentation"
    INSUFFICIENT_POSTINGS = "insufficient_postings"
    INSUFFICIENT_SPACING = "insufficient_spacing"
    PARSE_ERROR = "parse_error"
    # Reserved for a validation pass over already-parsed transactions.
    UNBALANCED = "unbalanced"
    MULTIPLE_NIL_AMOUNTS = "multiple_nil_amounts"
    MULTI_CURRENCY_MISSING_AMOUNT = "multi_currency_missing_amount"
    INVALID_ACCOUNT_TYPE = "invalid_account_type"
    UNEXPECTED_INPUT = "unexpected_input"


def describe_reason(reason: ErrorReason, text: Optional[str] = None) -> str:
    """
    Render a reason as a short human-readable message.

    Args:
        reason: The failure reason.
        text: Unmatched input, for UNEXPECTED_INPUT.

    Returns:
        Message such as "unexpected input '  junk\\n'".
    """
    if reason is ErrorReason.UNEXPECTED_INPUT:
        return f"unexpected input {text!r}"
    if reason is ErrorReason.MULTI_CURRENCY_MISSING_AMOUNT:
        return "cannot auto-balance multi-currency transaction with missing amount"
    return reason.value


class LedgerParseError(ValueError):
    """
    Raised by every parser entry point when its input does not match.

    Attributes:
        reason: The classified failure reason.
        text: The first unmatched fragment (UNEXPECTED_INPUT only).
    """

    def __init__(self, reason: ErrorReason, text: Optional[str] = None):
        self.reason = reason
        self.text = text
        super().__init__(describe_reason(reason, text))

    def __eq__(self, other):
        if not isinstance(other, LedgerParseError):
            return NotImplemented
        return (self.reason, self.text) == (other.reason, other.text)

    def __hash__(self):
        return hash((self.reason, self.text))

    def with_context(
        self,
        line: int,
        file: Optional[str] = None,
        import_chain: Optional[list[tuple[str, int]]] = None,
    ) -> "LedgerFileError":
        """
        Wrap this error with source location.

        Args:
            line: 1-based line number where the failing entry starts.
            file: Source file name, if known.
            import_chain: (file, line) pairs of the include directives that
                          led to `file`, outermost first.

        Returns:
            A LedgerFileError carrying the full detail.
        """
        detail = ParseErrorDetail(
            reason=self.reason,
            line=line,
            file=file,
            import_chain=import_chain,
            text=self.text,
        )
        return LedgerFileError(detail)


@dataclass
class ParseErrorDetail:
    """
    A parse failure with its location.

    Attributes:
        reason: The classified failure reason.
        line: 1-based line number of the failing entry.
        file: Source file name, if known.
        import_chain: Include directives that led to `file`, outermost first.
        text: Unmatched input for UNEXPECTED_INPUT.
    """

    reason: ErrorReason
    line: int
    file: Optional[str] = None
    import_chain: Optional[list[tuple[str, int]]] = None
    text: Optional[str] = None

    @property
    def location(self) -> str:
        if self.file:
            return f"{self.file}:{self.line}"
        return f"line {self.line}"

    def __str__(self) -> str:
        message = f"{self.location}: {describe_reason(self.reason, self.text)}"
        if self.import_chain:
            trace = "\n".join(
                f"    imported from {chain_file}:{chain_line}"
                for chain_file, chain_line in self.import_chain
            )
            message = f"{message}\n{trace}"
        return message


class LedgerFileError(Exception):
    """A parse failure raised with source location attached."""

    def __init__(self, detail: ParseErrorDetail):
        self.detail = detail
        super().__init__(str(detail))

    @property
    def reason(self) -> ErrorReason:
        return self.detail.reason


class IncludeErrorKind(Enum):
    INCLUDE_NOT_FOUND = "include_not_found"
    CIRCULAR_INCLUDE = "circular_include"
    INCLUDE_OUTSIDE_BASE = "include_outside_base"


_INCLUDE_MESSAGES = {
    IncludeErrorKind.INCLUDE_NOT_FOUND: "include file not found",
    IncludeErrorKind.CIRCULAR_INCLUDE: "circular include detected",
    IncludeErrorKind.INCLUDE_OUTSIDE_BASE: "include outside base directory",
}


class IncludeError(Exception):
    """
    Raised by the include resolver.

    Attributes:
        kind: What went wrong.
        path: The include target as written in the journal.
    """

    def __init__(self, kind: IncludeErrorKind, path: str):
        self.kind = kind
        self.path = path
        super().__init__(f"{_INCLUDE_MESSAGES[kind]}: {path}")
