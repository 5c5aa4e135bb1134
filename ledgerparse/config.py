"""
Configuration management for ledgerparse.

Handles global settings such as the external ledger binary, the encoding
used to read journal files, and logging setup.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class LedgerParseConfig:
    """
    Global configuration for journal reading and the ledger wrapper.

    Attributes:
        ledger_bin: Name or path of the external ledger executable.
                    Default: "ledger" (resolved through PATH).
        encoding: Text encoding of journal files.
                  Default: "utf-8".
        stderr_to_stdout: Merge the ledger process's stderr into the
                          captured output. Default: True.
    """

    ledger_bin: str = "ledger"
    encoding: str = "utf-8"
    stderr_to_stdout: bool = True


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, sets log level to DEBUG. Otherwise, INFO.
    """
    log_level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    if verbose:
        logger.debug("Verbose logging enabled")


# Global default configuration instance
default_config = LedgerParseConfig()
