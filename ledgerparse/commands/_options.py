"""
Shared Click option decorators for ledgerparse command groups.

Each decorator factory wraps a single Click option so it can be reused
across multiple commands without repeating the option definition.
"""

from pathlib import Path

import click


def journal_file_option(func):
    """--file/-f: required path to a ledger journal file."""
    return click.option(
        "--file",
        "-f",
        "journal_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        required=True,
        help="Path to the ledger journal file.",
    )(func)


def base_dir_option(func):
    """--base-dir: directory that include directives may not leave."""
    return click.option(
        "--base-dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=None,
        help="Directory includes must stay within (default: the journal's directory).",
    )(func)


def pattern_argument(func):
    """PATTERN: optional regular expression filter."""
    return click.argument("pattern", required=False, default=None)(func)


def ledger_bin_option(func):
    """--ledger-bin: path to the external ledger executable."""
    return click.option(
        "--ledger-bin",
        type=str,
        default=None,
        help="Ledger executable to run (default: ledger on PATH).",
    )(func)
