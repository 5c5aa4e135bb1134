"""
Journal command group for ledgerparse.

Commands: check, print, json
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from ..errors import IncludeError, LedgerFileError
from ..formatter import format_as_json, format_journal
from ..journal import Journal, parse_journal_file
from ..listings import regular_transactions
from ._options import base_dir_option, journal_file_option

logger = logging.getLogger(__name__)


def load_journal(journal_file: Path, base_dir: Optional[Path] = None) -> Journal:
    """
    Parse a journal for a command, exiting with status 1 on failure.

    Parse errors are printed with their location and include trace.
    """
    try:
        return parse_journal_file(journal_file, base_dir=base_dir)
    except LedgerFileError as e:
        logger.debug(f"Parse failed: {e.detail!r}")
        click.echo(f"ERROR: {e}")
        sys.exit(1)
    except IncludeError as e:
        click.echo(f"ERROR: {e}")
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read {journal_file}: {e}")
        click.echo(f"ERROR: {e}")
        sys.exit(1)


@click.group(name="journal")
def journal_group():
    """Parse, check and reformat journal files."""


@journal_group.command()
@journal_file_option
@base_dir_option
def check(journal_file, base_dir):
    """
    Parse a journal and report what it contains.

    Exits 0 if every entry parses. Otherwise prints the first failure as
    FILE:LINE: REASON, followed by the include chain if the failing entry
    came from an included file, and exits 1.
    """
    journal = load_journal(journal_file, base_dir)

    regular = regular_transactions(journal.transactions)
    click.echo(f"[OK] {journal_file}")
    click.echo(f"  Transactions:          {len(journal.transactions)}")
    click.echo(f"    regular:             {len(regular)}")
    click.echo(f"    automated/periodic:  {len(journal.transactions) - len(regular)}")
    click.echo(f"  Account declarations:  {len(journal.accounts)}")


@journal_group.command(name="print")
@journal_file_option
@base_dir_option
@click.option(
    "--no-notes",
    is_flag=True,
    help="Omit posting metadata, tags and comments.",
)
def print_journal(journal_file, base_dir, no_notes):
    """
    Reformat the regular transactions of a journal.

    Postings are indented four spaces with amounts two spaces after the
    account; notes are written above their posting unless --no-notes.
    """
    journal = load_journal(journal_file, base_dir)
    transactions = regular_transactions(journal.transactions)
    if transactions:
        click.echo(format_journal(transactions, include_notes=not no_notes), nl=False)


@journal_group.command(name="json")
@journal_file_option
@base_dir_option
def json_dump(journal_file, base_dir):
    """Dump every parsed transaction as JSON."""
    journal = load_journal(journal_file, base_dir)
    click.echo(format_as_json(journal.transactions))
