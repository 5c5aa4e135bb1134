"""
Journal reading: split multi-entry ledger text into blocks, parse each
block, and attach source locations to whatever fails.
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Iterator, Optional, Union

from .config import default_config
from .errors import ErrorReason, IncludeError, LedgerParseError
from .includes import include_target, resolve_include
from .models import AccountDeclaration, AccountType, Transaction
from .parser import parse_account_declaration, parse_transaction

logger = logging.getLogger(__name__)

# First characters of unindented lines that are comments, not entries.
COMMENT_CHARS = (";", "#", "%", "|", "*")

# Directives that carry no transaction and are passed over.
SKIPPED_DIRECTIVES = frozenset(
    {
        "alias",
        "payee",
        "commodity",
        "tag",
        "include",
        "P",
        "apply",
        "end",
        "year",
        "Y",
        "D",
        "define",
        "bucket",
    }
)

ACCOUNT_DIRECTIVE = "account"
# Type given to `account` blocks that do not declare one.
DEFAULT_ACCOUNT_TYPE = AccountType.ASSET

ImportChain = list[tuple[str, int]]


@dataclass
class JournalEntry:
    """
    One top-level block of journal text.

    Attributes:
        text: The block, header line first, newline terminated.
        line: 1-based line number of the header line.
    """

    text: str
    line: int

    @property
    def header(self) -> str:
        return self.text.split("\n", 1)[0]

    @property
    def keyword(self) -> str:
        """First whitespace-delimited word of the header line."""
        words = self.header.split(None, 1)
        return words[0] if words else ""


@dataclass
class Journal:
    """Everything read from a journal, in source order."""

    transactions: list[Transaction] = field(default_factory=list)
    accounts: list[AccountDeclaration] = field(default_factory=list)


def _is_top_level_comment(line: str) -> bool:
    return line.startswith(COMMENT_CHARS)


def split_entries(text: str) -> Iterator[JournalEntry]:
    """
    Split journal text into top-level entries.

    An entry starts at a non-blank, unindented line that is not a comment
    and runs over the indented lines that follow it. Blank lines and
    top-level comments close the current entry. Indented comment lines with
    no open entry are dropped; other stray indented lines become an entry
    of their own so the parser can reject them.

    Args:
        text: Complete journal text.

    Yields:
        JournalEntry blocks in source order.
    """
    block: list[str] = []
    start = 0

    for number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        indented = line[:1] in (" ", "\t")

        if not stripped or (not indented and _is_top_level_comment(line)):
            if block:
                yield JournalEntry("".join(block), start)
                block = []
            continue

        if indented and block:
            block.append(line + "\n")
            continue

        if block:
            yield JournalEntry("".join(block), start)
        if indented and stripped.startswith(COMMENT_CHARS):
            block = []
            continue
        block = [line + "\n"]
        start = number

    if block:
        yield JournalEntry("".join(block), start)


def parse_account_block(entry: JournalEntry) -> AccountDeclaration:
    """
    Parse an `account` entry.

    The one-line form `account NAME ; type:TYPE` goes through the
    declaration grammar. Without a type the account gets
    DEFAULT_ACCOUNT_TYPE. Indented `alias` and `assert` sub-directives are
    collected verbatim in either form.

    Raises:
        LedgerParseError: If a typed header line does not parse.
    """
    header = entry.header
    if "type:" in header:
        declaration = parse_account_declaration(header + "\n")
    else:
        name = header[len(ACCOUNT_DIRECTIVE):].split(";", 1)[0].strip()
        if not name:
            raise LedgerParseError(ErrorReason.PARSE_ERROR)
        declaration = AccountDeclaration(name=name, type=DEFAULT_ACCOUNT_TYPE)

    for line in entry.text.split("\n")[1:]:
        words = line.strip().split(None, 1)
        if len(words) < 2:
            continue
        keyword, value = words
        if keyword == "alias":
            declaration.aliases.append(value.strip())
        elif keyword == "assert":
            declaration.assertions.append(value.strip())
        else:
            logger.debug(f"Ignoring account sub-directive {keyword!r} for {declaration.name}")

    return declaration


def _read_entry(
    entry: JournalEntry,
    journal: Journal,
    source_file: Optional[str],
    import_chain: Optional[ImportChain],
) -> None:
    keyword = entry.keyword

    if keyword in SKIPPED_DIRECTIVES:
        logger.debug(f"Skipping {keyword!r} directive at line {entry.line}")
        return

    try:
        if keyword == ACCOUNT_DIRECTIVE:
            journal.accounts.append(parse_account_block(entry))
            return
        transaction = parse_transaction(entry.text)
    except LedgerParseError as err:
        raise err.with_context(entry.line, source_file, import_chain) from err

    journal.transactions.append(
        replace(transaction, source_file=source_file, source_line=entry.line)
    )


def parse_journal(
    text: str,
    source_file: Optional[str] = None,
    import_chain: Optional[ImportChain] = None,
) -> Journal:
    """
    Parse every entry in a journal string.

    Include directives are skipped here; use parse_journal_file to follow
    them.

    Args:
        text: Complete journal text.
        source_file: Name recorded on transactions and in errors.
        import_chain: Include directives that led to this text, outermost
                      first.

    Returns:
        The transactions and account declarations, in source order.

    Raises:
        LedgerFileError: On the first entry that does not parse, located at
                         the entry's first line.
    """
    journal = Journal()
    for entry in split_entries(text):
        _read_entry(entry, journal, source_file, import_chain)

    logger.debug(
        f"Parsed {len(journal.transactions)} transaction(s) and "
        f"{len(journal.accounts)} account declaration(s) from {source_file or '<string>'}"
    )
    return journal


def _load_file(
    path: Path,
    base_dir: Path,
    journal: Journal,
    seen: frozenset,
    import_chain: ImportChain,
    encoding: str,
) -> None:
    source_file = str(path)
    text = path.read_text(encoding=encoding)
    seen = seen | {path}
    chain = import_chain or None

    for entry in split_entries(text):
        target = include_target(entry.header)
        if target is None:
            _read_entry(entry, journal, source_file, chain)
            continue

        try:
            included = resolve_include(target, path.parent, base_dir, seen)
        except IncludeError as err:
            logger.error(f"{source_file}:{entry.line}: {err}")
            raise

        logger.debug(f"Following include {included} from {source_file}:{entry.line}")
        _load_file(
            included,
            base_dir,
            journal,
            seen,
            import_chain + [(source_file, entry.line)],
            encoding,
        )


def parse_journal_file(
    path: Union[str, Path],
    base_dir: Optional[Union[str, Path]] = None,
    encoding: Optional[str] = None,
) -> Journal:
    """
    Read and parse a journal file, following include directives.

    Args:
        path: Journal file to read.
        base_dir: Directory that included files must stay within. Defaults
                  to the directory of `path`.
        encoding: File encoding. Defaults to the configured encoding.

    Returns:
        The combined Journal of the file and everything it includes.

    Raises:
        FileNotFoundError: If `path` does not exist.
        IncludeError: On a missing, circular or out-of-tree include.
        LedgerFileError: On the first entry that does not parse; entries
                         from included files carry the import chain.
    """
    path = Path(path).resolve()
    if not path.is_file():
        raise FileNotFoundError(f"Journal file not found: {path}")

    base = Path(base_dir).resolve() if base_dir is not None else path.parent
    journal = Journal()
    _load_file(path, base, journal, frozenset(), [], encoding or default_config.encoding)

    logger.info(
        f"Loaded {len(journal.transactions)} transaction(s) and "
        f"{len(journal.accounts)} account declaration(s) from {path}"
    )
    return journal
