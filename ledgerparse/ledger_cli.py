"""
Wrapper around the external `ledger` command-line binary.

Nothing in the parser depends on this module; it exists so callers can
compare results with, or fall back to, the reference implementation.
"""

import logging
import subprocess
from dataclasses import dataclass
from typing import Optional, Sequence

from .config import default_config

logger = logging.getLogger(__name__)


@dataclass
class LedgerRunResult:
    """
    Output of a successful ledger invocation.

    Attributes:
        output: Captured stdout (with stderr merged in when requested).
        status: Process exit status, always 0 here.
    """

    output: str
    status: int = 0


class LedgerCommandError(RuntimeError):
    """Raised when the ledger binary exits with a non-zero status."""

    def __init__(self, status: int, output: str):
        self.status = status
        self.output = output
        super().__init__(f"ledger exited with status {status}: {output.strip()}")


def run_ledger(
    args: Sequence[str],
    ledger_bin: Optional[str] = None,
    stderr_to_stdout: Optional[bool] = None,
    **kwargs,
) -> LedgerRunResult:
    """
    Run the ledger binary with the given arguments.

    Args:
        args: Command-line arguments, not including the binary.
        ledger_bin: Executable to run. Defaults to the configured binary.
        stderr_to_stdout: Merge stderr into the captured output. Defaults to
                          the configured setting.
        **kwargs: Extra keyword arguments passed to subprocess.run.

    Returns:
        LedgerRunResult with the captured output.

    Raises:
        FileNotFoundError: If the binary cannot be found.
        LedgerCommandError: If the process exits with a non-zero status.
    """
    ledger_bin = ledger_bin or default_config.ledger_bin
    if stderr_to_stdout is None:
        stderr_to_stdout = default_config.stderr_to_stdout

    command = [ledger_bin, *args]
    logger.debug(f"Running {' '.join(command)}")

    try:
        completed = subprocess.run(
            command,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT if stderr_to_stdout else subprocess.PIPE,
            text=True,
            **kwargs,
        )
    except FileNotFoundError:
        logger.error(f"ledger binary not found: {ledger_bin}")
        raise

    if completed.returncode != 0:
        logger.error(f"{ledger_bin} exited with status {completed.returncode}")
        raise LedgerCommandError(completed.returncode, completed.stdout or "")

    return LedgerRunResult(output=completed.stdout, status=completed.returncode)


def run_ledger_with_file(
    file: str,
    command: str,
    args: Sequence[str] = (),
    **kwargs,
) -> LedgerRunResult:
    """
    Run a ledger command against a specific journal file.

    Example:
        run_ledger_with_file("/tmp/ledger.dat", "balance", ["Assets"])
    """
    return run_ledger(["-f", str(file), command, *args], **kwargs)
