"""
Environment configuration for stencil.

Runtime settings that are not part of a project manifest are read from
environment variables, so CI jobs and wrappers can tune them without flags.

Environment variables:
    - STENCIL_GIT: git executable to run (default: "git")
    - STENCIL_FETCH_TIMEOUT: seconds to wait for a template fetch
      (default: no deadline)

Usage:
    from stencil.core.environment import get_fetch_timeout, get_git_executable

    timeout = get_fetch_timeout()  # None or a positive float
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

GIT_EXECUTABLE_VAR = "STENCIL_GIT"
FETCH_TIMEOUT_VAR = "STENCIL_FETCH_TIMEOUT"

_DEFAULT_GIT = "git"


def get_git_executable() -> str:
    """Get the git executable from STENCIL_GIT, defaulting to "git"."""
    value = os.environ.get(GIT_EXECUTABLE_VAR, "").strip()
    return value or _DEFAULT_GIT


def get_fetch_timeout() -> float | None:
    """Get the template fetch deadline in seconds from STENCIL_FETCH_TIMEOUT.

    Returns:
        A positive number of seconds, or None when unset. Values that are not
        positive numbers are ignored with a warning.

    Examples:
        >>> import os
        >>> os.environ["STENCIL_FETCH_TIMEOUT"] = "90"
        >>> get_fetch_timeout()
        90.0
    """
    raw = os.environ.get(FETCH_TIMEOUT_VAR, "").strip()
    if not raw:
        return None

    try:
        value = float(raw)
    except ValueError:
        value = 0.0

    if value <= 0:
        logger.warning(
            "Ignoring %s=%r: expected a positive number of seconds.",
            FETCH_TIMEOUT_VAR,
            raw,
        )
        return None
    return value


def get_environment_info() -> dict[str, str | float | None]:
    """Get a summary of the current environment configuration.

    Useful for debugging and --version output.
    """
    return {
        "git": get_git_executable(),
        "fetch_timeout": get_fetch_timeout(),
    }
