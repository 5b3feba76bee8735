"""
Project name validation and sanitization.

Handles validation of explicit project names and derivation of a default
name from the project directory.
"""

from __future__ import annotations

import re
from pathlib import Path

from ..errors import InitError

DEFAULT_PROJECT_NAME = "my-project"

# Names that collide with files or directories stencil manages
RESERVED_NAMES = {
    ".",
    "..",
    ".git",
    ".stencil",
    "stencil",
}

_NAME_PATTERN = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


def validate_project_name(name: str) -> tuple[bool, str | None]:
    """
    Validate a project name.

    Args:
        name: Project name to validate

    Returns:
        (is_valid, error_message)

    Examples:
        validate_project_name("stencil")  # -> (False, "...")
        validate_project_name("my-app")  # -> (True, None)
    """
    if not name:
        return (False, "Project name cannot be empty")

    if name.lower() in RESERVED_NAMES:
        return (
            False,
            f"Project name '{name}' is reserved. Try '{name}-app' or 'my-{name}' instead",
        )

    if not _NAME_PATTERN.match(name):
        return (
            False,
            f"Project name '{name}' must be lowercase and contain only letters, numbers, "
            "'.', '-' and '_', starting with a letter or number",
        )

    return (True, None)


def sanitize_name(name: str) -> str:
    """
    Convert a directory name to a valid project name.

    Args:
        name: Raw name (can include spaces, capitals, punctuation)

    Returns:
        Valid project name (lowercase, hyphen-separated)

    Examples:
        "My Project" -> "my-project"
        "Todo_App!" -> "todo_app"
        "..." -> "my-project"
    """
    name = name.lower()
    # Replace anything outside the allowed set with hyphens
    name = re.sub(r"[^a-z0-9._-]+", "-", name)
    # Remove leading/trailing separators
    name = name.strip("-._")

    if not name or name in RESERVED_NAMES:
        return DEFAULT_PROJECT_NAME
    return name


def default_project_name(project_dir: Path) -> str:
    """Project name derived from the base name of ``project_dir``."""
    return sanitize_name(project_dir.resolve().name)


def resolve_project_name(project_dir: Path, name: str | None = None) -> str:
    """
    Return ``name`` if given and valid, otherwise the directory-derived default.

    Raises:
        InitError: If an explicit name is invalid
    """
    if name is None:
        return default_project_name(project_dir)

    is_valid, error_msg = validate_project_name(name)
    if not is_valid:
        raise InitError(error_msg or "Invalid project name")
    return name
