"""
Entry-point harness: run a grammar over the whole input or raise.
"""

import logging
from typing import Callable, Optional, TypeVar

from ..errors import ErrorReason, LedgerParseError
from .primitives import Cursor

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_parser(
    grammar: Callable[[Cursor], Optional[T]],
    text: str,
    error: ErrorReason = ErrorReason.PARSE_ERROR,
) -> T:
    """
    Match `grammar` against all of `text`.

    Args:
        grammar: Recognizer taking a Cursor and returning a value or None.
        text: Complete input.
        error: Reason reported when the grammar fails or input is left over.

    Returns:
        Whatever the grammar produced.

    Raises:
        LedgerParseError: If the grammar does not match or does not consume
                          the whole input.
    """
    cursor = Cursor(text)
    result = grammar(cursor)

    if result is None or not cursor.at_end():
        logger.debug(
            f"{grammar.__name__} failed at {cursor!r} ({error.value})"
        )
        raise LedgerParseError(error)

    return result
