"""
Command-line interface for ledgerparse.

Provides CLI commands for checking, reformatting and listing ledger
journals, plus a pass-through to the external ledger binary.
"""

import logging

import click

from . import __version__
from .commands.journal import journal_group
from .commands.listing import list_group
from .commands.passthrough import exec_ledger
from .config import setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="ledgerparse")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose (DEBUG level) logging."
)
@click.pass_context
def main(ctx, verbose):
    """
    ledgerparse - Plaintext Ledger Journal Parser.

    Parses ledger-CLI journals into transactions, postings, amounts and
    account declarations, and reports precisely where an entry fails.
    """
    # Set up logging
    setup_logging(verbose)

    # Store verbose flag in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    logger.debug(f"ledgerparse version {__version__}")


main.add_command(journal_group)
main.add_command(list_group)
main.add_command(exec_ledger)


if __name__ == "__main__":
    main()
