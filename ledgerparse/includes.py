"""
Include directive resolution.

Turns the target of an `include` line into an absolute path, refusing
missing files, cycles, and paths that escape the journal's base directory.
"""

import logging
import re
from pathlib import Path
from typing import AbstractSet, Optional

from .errors import IncludeError, IncludeErrorKind

logger = logging.getLogger(__name__)

_INCLUDE_DIRECTIVE = re.compile(r"^include[ \t]+(?P<target>[^;\n]+?)[ \t]*(?:;.*)?$")


def include_target(line: str) -> Optional[str]:
    """
    Extract the path from an `include` directive.

    Args:
        line: A single unindented journal line.

    Returns:
        The include target as written, or None if the line is not an
        include directive.
    """
    match = _INCLUDE_DIRECTIVE.match(line.rstrip("\n"))
    if match is None:
        return None
    return match.group("target")


def resolve_include(
    target: str,
    current_dir: Path,
    base_dir: Path,
    seen: AbstractSet[Path] = frozenset(),
) -> Path:
    """
    Resolve an include target relative to the including file.

    Args:
        target: Path text from the include directive.
        current_dir: Directory of the including file.
        base_dir: Root directory includes may not leave.
        seen: Resolved paths of files already on the include stack.

    Returns:
        The absolute, resolved path of the included file.

    Raises:
        IncludeError: INCLUDE_OUTSIDE_BASE, CIRCULAR_INCLUDE or
                      INCLUDE_NOT_FOUND.
    """
    candidate = Path(target).expanduser()
    if not candidate.is_absolute():
        candidate = Path(current_dir) / candidate
    resolved = candidate.resolve()
    base = Path(base_dir).resolve()

    if resolved != base and base not in resolved.parents:
        logger.warning(f"Include {target!r} resolves outside {base}")
        raise IncludeError(IncludeErrorKind.INCLUDE_OUTSIDE_BASE, target)

    if resolved in seen:
        logger.warning(f"Circular include of {resolved}")
        raise IncludeError(IncludeErrorKind.CIRCULAR_INCLUDE, target)

    if not resolved.is_file():
        raise IncludeError(IncludeErrorKind.INCLUDE_NOT_FOUND, target)

    logger.debug(f"Resolved include {target!r} -> {resolved}")
    return resolved
