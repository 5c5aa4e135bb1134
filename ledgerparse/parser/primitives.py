"""
Lexical primitives shared by the ledger grammars.

A Cursor walks an input string; recognizers either advance it and return
what they matched, or leave it where it was and return None.
"""

import re
from typing import Optional

WHITESPACE = re.compile(r"[ \t]+")
OPTIONAL_WHITESPACE = re.compile(r"[ \t]*")
DIGITS = re.compile(r"[0-9]+")
ALPHANUMERIC = re.compile(r"[A-Za-z0-9]+")
LETTERS = re.compile(r"[A-Za-z]+")
# A tab run or a space run, never a mix.
INDENTATION = re.compile(r"\t+| +")
TEXT_BEFORE_COMMENT = re.compile(r"[^;\n]+")
REST_OF_LINE = re.compile(r"[^\n]*")
NON_EMPTY_REST_OF_LINE = re.compile(r"[^\n]+")
NEWLINE = "\n"


class Cursor:
    """
    Read position over an immutable input string.

    Usage:
        cursor = Cursor("2024/01/15 Payee\\n")
        if cursor.match(DIGITS):
            ...
    """

    __slots__ = ("text", "pos")

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    @property
    def rest(self) -> str:
        """Unconsumed input."""
        return self.text[self.pos:]

    def peek(self) -> str:
        """Next character, or "" at end of input."""
        return self.text[self.pos:self.pos + 1]

    def match(self, pattern: re.Pattern) -> Optional[re.Match]:
        """
        Match a compiled pattern at the current position.

        Args:
            pattern: Compiled regular expression, anchored implicitly at pos.

        Returns:
            The match, after advancing past it, or None with pos unchanged.
        """
        found = pattern.match(self.text, self.pos)
        if found is not None:
            self.pos = found.end()
        return found

    def literal(self, expected: str) -> bool:
        """Consume `expected` if the input continues with it."""
        if self.text.startswith(expected, self.pos):
            self.pos += len(expected)
            return True
        return False

    def skip(self, pattern: re.Pattern) -> None:
        """Consume an optional pattern, ignoring what it matched."""
        self.match(pattern)

    def __repr__(self) -> str:
        return f"Cursor(pos={self.pos}, rest={self.rest[:20]!r})"


def trim(text: str) -> str:
    """Strip surrounding whitespace; trimming twice is the same as once."""
    return text.strip()
