"""
Project configuration scaffolding.

Creates stencil.toml and .gitignore when missing, and merges the entries
stencil needs into an existing .gitignore. Both operations are idempotent:
running them on an already-conformant project writes nothing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..errors import ConfigError, make_config_error
from ..manifest import MANIFEST_FILENAME, TemplateInfo, default_manifest_content, load_manifest
from .validation import resolve_project_name

logger = logging.getLogger(__name__)

IGNORE_FILENAME = ".gitignore"

STATE_DIRECTORY = ".stencil"

# Entries every project's .gitignore must contain
IGNORE_ENTRIES: tuple[str, ...] = (STATE_DIRECTORY, ".env")

LF = "\n"
CRLF = "\r\n"


@dataclass
class IgnoreFile:
    """
    An ignore file split into lines, remembering how it was written.

    Lines are split on ``\\n`` with any ``\\r`` before it dropped, so files
    mixing LF and CRLF compare line by line like uniform ones. ``newline``
    is the terminator of the first line and is only used for appended lines;
    the parsed text itself is rendered back untouched.

    ``IgnoreFile.parse(content).render() == content`` for any content.
    """

    lines: list[str] = field(default_factory=list)
    newline: str = LF
    trailing_newline: bool = True
    raw: str | None = field(default=None, compare=False, repr=False)

    @classmethod
    def parse(cls, content: str) -> IgnoreFile:
        if not content:
            return cls(lines=[], raw=content)

        chunks = content.split(LF)
        trailing = content.endswith(LF)
        if trailing:
            chunks.pop()
        newline = CRLF if LF in content and chunks[0].endswith("\r") else LF
        lines = [chunk.removesuffix("\r") for chunk in chunks]
        return cls(lines=lines, newline=newline, trailing_newline=trailing, raw=content)

    def missing(self, entries: Sequence[str]) -> list[str]:
        """Entries not present as an exact line, in ``entries`` order."""
        present = set(self.lines)
        missing = []
        for entry in entries:
            if entry not in present:
                missing.append(entry)
                present.add(entry)
        return missing

    def with_entries(self, entries: Sequence[str]) -> IgnoreFile:
        """Copy with missing entries appended; ``self`` when nothing is missing."""
        missing = self.missing(entries)
        if not missing:
            return self

        content = self.render()
        if content and not content.endswith(LF):
            content += self.newline
        content += self.newline.join(missing) + self.newline
        return IgnoreFile(
            lines=self.lines + missing,
            newline=self.newline,
            trailing_newline=True,
            raw=content,
        )

    def render(self) -> str:
        if self.raw is not None:
            return self.raw
        if not self.lines:
            return ""
        content = self.newline.join(self.lines)
        if self.trailing_newline:
            content += self.newline
        return content


def merge_ignore_entries(content: str, entries: Sequence[str] = IGNORE_ENTRIES) -> str:
    """
    Append the entries missing from ``content``, keeping its line endings.

    Examples:
        merge_ignore_entries("node_modules\\n", [".stencil"])
        # -> "node_modules\\n.stencil\\n"
        merge_ignore_entries("a\\r\\nb", ["c"])
        # -> "a\\r\\nb\\r\\nc\\r\\n"
    """
    return IgnoreFile.parse(content).with_entries(entries).render()


def ensure_ignore_file(project_dir: Path, entries: Sequence[str] = IGNORE_ENTRIES) -> bool:
    """
    Create or update ``.gitignore`` so it contains every entry.

    Returns:
        True if the file was written, False if it was already conformant

    Raises:
        ConfigError: If the file cannot be read or written
    """
    path = project_dir / IGNORE_FILENAME

    try:
        existing = path.read_bytes().decode("utf-8") if path.exists() else None
    except (OSError, UnicodeDecodeError) as e:
        raise make_config_error(f"Cannot read ignore file: {e}", path) from e

    if existing is None:
        content = IgnoreFile(lines=list(entries)).render()
    else:
        content = merge_ignore_entries(existing, entries)
        if content == existing:
            logger.debug("%s already contains all required entries", path)
            return False

    try:
        path.write_bytes(content.encode("utf-8"))
    except OSError as e:
        raise make_config_error(f"Cannot write ignore file: {e}", path) from e
    return True


def ensure_manifest(
    project_dir: Path,
    project_name: str | None = None,
    template: TemplateInfo | None = None,
    load: Callable[[Path], Any] = load_manifest,
) -> bool:
    """
    Create ``stencil.toml`` if missing, otherwise validate the existing one.

    An existing manifest is never rewritten.

    Args:
        project_dir: Project directory
        project_name: Name for a new manifest (defaults to the directory name)
        template: Template provenance recorded in a new manifest
        load: Manifest loader used to validate an existing file

    Returns:
        True if the manifest was created

    Raises:
        ConfigError: If the existing manifest is invalid or a new one cannot
            be written
    """
    path = project_dir / MANIFEST_FILENAME

    if path.exists():
        try:
            load(path)
        except ConfigError:
            raise
        except (OSError, ValueError) as e:
            raise make_config_error(f"Invalid manifest: {e}", path) from e
        return False

    name = resolve_project_name(project_dir, project_name)
    try:
        path.write_text(default_manifest_content(name, template), encoding="utf-8")
    except OSError as e:
        raise make_config_error(f"Cannot write manifest: {e}", path) from e
    return True


def ensure_state_directory(project_dir: Path) -> Path:
    """Create the ``.stencil`` state directory."""
    state_dir = project_dir / STATE_DIRECTORY
    try:
        state_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise make_config_error(f"Cannot create state directory: {e}", state_dir) from e
    return state_dir
