"""
Executable-bit tracking across platforms.

Template files marked executable must stay executable in the project. Where
the filesystem keeps execute bits they are set on the files themselves;
where it does not (e.g. Windows), they are recorded in the git index of the
project instead.

Two implementations share the ExecutableBits protocol:
- FilesystemExecutableBits: chmod on the file
- GitIndexExecutableBits: ``git update-index --chmod=+x``
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..errors import make_parse_error
from ..git import GitCli
from .templates import METADATA_DIRECTORIES, iter_files

logger = logging.getLogger(__name__)

# Git file mode for an executable regular file
EXECUTABLE_MODE = "100755"

EXECUTE_ALL = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


def parse_executable_files(staged_files_output: str) -> list[str]:
    """
    Extract executable file paths from ``git ls-files --stage`` output.

    Each record has the shape ``<mode> <object-id> <stage>\\t<path>``; only
    records whose mode is 100755 are kept. Records are NUL-terminated when
    the listing comes from ``-z`` (paths may then hold any character),
    otherwise one per line. Blank records are skipped.

    Returns:
        Paths in listing order

    Raises:
        PermissionParseError: If a record has no tab before the path
    """
    if "\0" in staged_files_output:
        records = staged_files_output.split("\0")
    else:
        records = staged_files_output.splitlines()

    executable_files: list[str] = []
    for line_number, line in enumerate(records, start=1):
        if not line.strip():
            continue

        meta, sep, path = line.partition("\t")
        if not sep:
            raise make_parse_error(
                line_number,
                line,
                "Invalid staged file listing: expected '<mode> <object> <stage>\\t<path>'",
            )

        mode = meta.split(" ", 1)[0]
        if mode == EXECUTABLE_MODE:
            executable_files.append(path)

    return executable_files


@runtime_checkable
class ExecutableBits(Protocol):
    """Reads and sets the executable flag of files under a project root."""

    def is_executable(self, relative_path: str) -> bool:
        """Check whether the file is executable."""
        ...

    def mark_executable(self, relative_path: str) -> None:
        """Make the file executable."""
        ...


class FilesystemExecutableBits:
    """Execute bits stored in file modes. Executable means executable by all."""

    def __init__(self, root: Path):
        self.root = root

    def is_executable(self, relative_path: str) -> bool:
        mode = (self.root / relative_path).stat().st_mode
        return mode & EXECUTE_ALL == EXECUTE_ALL

    def mark_executable(self, relative_path: str) -> None:
        path = self.root / relative_path
        mode = path.stat().st_mode
        os.chmod(path, stat.S_IMODE(mode) | EXECUTE_ALL)


class GitIndexExecutableBits:
    """Execute bits tracked as file modes in the project's git index."""

    def __init__(self, git: GitCli, root: Path):
        self.git = git
        self.root = root

    def is_executable(self, relative_path: str) -> bool:
        listing = self.git.list_staged_files(self.root)
        return relative_path in parse_executable_files(listing)

    def mark_executable(self, relative_path: str) -> None:
        self.git.add_file_exec_permission(self.root, relative_path)


def filesystem_supports_executable_bit(directory: Path) -> bool:
    """Probe whether files created in ``directory`` keep their execute bits."""
    if os.name == "nt":
        return False

    try:
        fd, probe = tempfile.mkstemp(prefix=".stencil-probe-", dir=directory)
    except OSError:
        logger.debug("Cannot create probe file in %s", directory, exc_info=True)
        return False

    try:
        os.close(fd)
        os.chmod(probe, 0o755)
        return os.stat(probe).st_mode & EXECUTE_ALL == EXECUTE_ALL
    except OSError:
        return False
    finally:
        os.unlink(probe)


def select_executable_bits(root: Path, git: GitCli) -> ExecutableBits:
    """Pick the ExecutableBits implementation that works for ``root``."""
    if filesystem_supports_executable_bit(root):
        return FilesystemExecutableBits(root)

    logger.debug("Filesystem under %s does not keep execute bits; using git index", root)
    return GitIndexExecutableBits(git, root)


def discover_executable_files(template_dir: Path, git: GitCli) -> list[str]:
    """
    List the template's executable files.

    Templates fetched with git report them from their index; plain directory
    templates report them from their file modes.
    """
    if (template_dir / ".git").exists():
        return parse_executable_files(git.list_staged_files(template_dir))

    if os.name == "nt":
        return []

    executable_files = []
    for rel_path in iter_files(template_dir, METADATA_DIRECTORIES):
        if (template_dir / rel_path).stat().st_mode & stat.S_IXUSR:
            executable_files.append(rel_path)
    return executable_files


def restore_executable_bits(bits: ExecutableBits, relative_paths: Iterable[str]) -> int:
    """Mark every path executable. Returns the number of paths marked."""
    count = 0
    for rel_path in relative_paths:
        bits.mark_executable(rel_path)
        count += 1
    return count


def missing_executable_bits(bits: ExecutableBits, relative_paths: Iterable[str]) -> list[str]:
    """Return the paths that are not executable according to ``bits``."""
    return [rel_path for rel_path in relative_paths if not bits.is_executable(rel_path)]
