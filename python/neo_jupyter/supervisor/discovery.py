"""
Executable discovery for the supervisor.

Each probe walks an ordered list of candidate paths and returns the first
one present on disk. Nothing is executed.
"""

import os
from typing import Iterable, Optional

from ..logging_config import get_logger

logger = get_logger(__name__)


PYTHON_CANDIDATES = [
    "/usr/bin/python3",
    "/usr/bin/python",
]

JUPYTER_CANDIDATES = [
    "${HOME}/.local/bin/jupyter",
    "/home/${USER}/.local/bin/jupyter",
    "/usr/local/bin/jupyter",
]


def find_path(candidates: Iterable[str]) -> Optional[str]:
    """Return the first candidate that exists after environment expansion.

    Args:
        candidates: Paths to probe, in priority order. ``$VAR`` and ``${VAR}``
            references are expanded from the current environment.

    Returns:
        Optional[str]: The expanded path of the first existing candidate, or
        None if no candidate exists
    """
    for candidate in candidates:
        path = os.path.expandvars(candidate)
        if os.path.exists(path):
            logger.debug(f"Found '{path}'")
            return path
        logger.debug(f"Not found: '{path}'")
    return None


def find_python() -> Optional[str]:
    return find_path(PYTHON_CANDIDATES)


def find_jupyter_executable() -> Optional[str]:
    return find_path(JUPYTER_CANDIDATES)
