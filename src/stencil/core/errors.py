"""
Error types for stencil project initialization.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class StencilError(Exception):
    """Base exception for all stencil errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class InitError(StencilError):
    """Raised when project initialization fails."""

    pass


class FetchError(InitError):
    """
    Raised when a template cannot be materialized into the staging directory.

    Examples:
    - git clone exits non-zero
    - Local template path does not exist
    """

    pass


class FetchCancelled(FetchError):
    """Raised when the fetch deadline expires before the template is staged."""

    pass


class DuplicateScanError(InitError):
    """Raised when the template or target tree cannot be walked."""

    pass


class OverwriteDeclined(InitError):
    """Raised when the user declines overwriting existing files."""

    def __init__(self, duplicates: list[str]):
        self.duplicates = duplicates
        super().__init__(
            f"Initialization cancelled: {len(duplicates)} existing file(s) would be overwritten"
        )


class PathConflictError(InitError):
    """
    Raised when template files cannot be written over the project's layout.

    Examples:
    - Template file ``build`` where the project has a ``build/`` directory
    - Template file ``docs/index.md`` where the project has a file ``docs``
    """

    def __init__(self, conflicts: list[str]):
        self.conflicts = conflicts
        super().__init__(
            f"{len(conflicts)} template file(s) collide with project paths of a "
            f"different kind: {', '.join(conflicts)}"
        )


class PermissionParseError(InitError):
    """Raised when a tracked-file listing line is malformed."""

    pass


class ConfigError(StencilError):
    """
    Raised when project configuration is invalid or cannot be written.

    Examples:
    - stencil.toml is not valid TOML
    - [project] table or name is missing
    - .gitignore is not writable
    """

    pass


class GitError(StencilError):
    """Raised when a git command fails or git is not installed."""

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path of the offending file, if any
        line: Line number (1-indexed), if any
        snippet: Optional text of the offending line
    """

    file: Path | None = None
    line: int | None = None
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "stencil.toml:3" or "line 3: <snippet>"
        """
        if self.file is not None and self.line is not None:
            location = f"{self.file}:{self.line}"
        elif self.file is not None:
            location = str(self.file)
        elif self.line is not None:
            location = f"line {self.line}"
        else:
            location = "<unknown>"

        if self.snippet is not None:
            return f"{location}: {self.snippet!r}"
        return location


def make_parse_error(line: int, snippet: str, message: str) -> PermissionParseError:
    """
    Helper to create a PermissionParseError with line context.

    Args:
        line: Line number in the listing (1-indexed)
        snippet: Offending line text
        message: Error description

    Returns:
        PermissionParseError with context attached
    """
    return PermissionParseError(message, ErrorContext(line=line, snippet=snippet))


def make_config_error(message: str, file: Path | None = None) -> ConfigError:
    """Helper to create a ConfigError pointing at a file."""
    if file is not None:
        return ConfigError(message, ErrorContext(file=file))
    return ConfigError(message)
