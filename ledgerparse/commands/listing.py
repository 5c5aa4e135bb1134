"""
List command group for ledgerparse.

Commands: accounts, payees, commodities, tags
"""

import logging
import sys

import click

from ..listings import (
    filter_names,
    list_accounts,
    list_commodities,
    list_payees,
    list_tags,
)
from ._options import base_dir_option, journal_file_option, pattern_argument
from .journal import load_journal

logger = logging.getLogger(__name__)


def _echo_names(names, pattern):
    try:
        matched = filter_names(names, pattern)
    except ValueError as e:
        click.echo(f"ERROR: {e}")
        sys.exit(1)

    for name in matched:
        click.echo(name)


@click.group(name="list")
def list_group():
    """List accounts, payees, commodities or tags, optionally filtered."""


@list_group.command()
@journal_file_option
@base_dir_option
@pattern_argument
def accounts(journal_file, base_dir, pattern):
    """List every account used or declared, sorted."""
    journal = load_journal(journal_file, base_dir)
    _echo_names(list_accounts(journal.transactions, journal.accounts), pattern)


@list_group.command()
@journal_file_option
@base_dir_option
@pattern_argument
def payees(journal_file, base_dir, pattern):
    """List every payee, sorted."""
    journal = load_journal(journal_file, base_dir)
    _echo_names(list_payees(journal.transactions), pattern)


@list_group.command()
@journal_file_option
@base_dir_option
@pattern_argument
def commodities(journal_file, base_dir, pattern):
    """List every currency symbol or code used in an amount."""
    journal = load_journal(journal_file, base_dir)
    _echo_names(list_commodities(journal.transactions), pattern)


@list_group.command()
@journal_file_option
@base_dir_option
@pattern_argument
def tags(journal_file, base_dir, pattern):
    """List every posting tag, sorted."""
    journal = load_journal(journal_file, base_dir)
    _echo_names(list_tags(journal.transactions), pattern)
