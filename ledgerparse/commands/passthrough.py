"""
Pass-through to the external ledger binary.

Commands: exec
"""

import logging
import sys

import click

from ..ledger_cli import LedgerCommandError, run_ledger_with_file
from ._options import journal_file_option, ledger_bin_option

logger = logging.getLogger(__name__)


@click.command(
    name="exec",
    context_settings={"ignore_unknown_options": True},
)
@journal_file_option
@ledger_bin_option
@click.argument("command")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def exec_ledger(journal_file, ledger_bin, command, args):
    """
    Run COMMAND through the external ledger binary against the journal.

    Example: ledgerparse exec -f books.ledger balance Assets
    """
    try:
        result = run_ledger_with_file(
            str(journal_file), command, list(args), ledger_bin=ledger_bin
        )
    except FileNotFoundError as e:
        click.echo(f"ERROR: ledger binary not found: {e}")
        sys.exit(127)
    except LedgerCommandError as e:
        click.echo(e.output, nl=False)
        sys.exit(e.status)

    click.echo(result.output, nl=False)
