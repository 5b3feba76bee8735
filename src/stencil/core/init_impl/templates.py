"""
Template tree comparison and copying.

Handles detecting files a template would overwrite and copying a fetched
template into the project directory.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Collection, Iterator
from pathlib import Path, PurePosixPath

from ..errors import DuplicateScanError, InitError

logger = logging.getLogger(__name__)

# Directories owned by the fetch tool, never part of the template's files
METADATA_DIRECTORIES = frozenset({".git"})


def _raise_scan_error(error: OSError) -> None:
    raise DuplicateScanError(f"Cannot scan {error.filename}: {error.strerror}") from error


def iter_files(root: Path, exclude: Collection[str] = ()) -> Iterator[str]:
    """
    Yield posix-style paths of regular files under ``root``, relative to it.

    Directories named in ``exclude`` are pruned at any depth.

    Raises:
        DuplicateScanError: If any part of the tree cannot be read
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_scan_error):
        dirnames[:] = [d for d in dirnames if d not in exclude]
        base = Path(dirpath)
        for name in filenames:
            path = base / name
            if path.is_file():
                yield path.relative_to(root).as_posix()


def determine_duplicates(
    source_dir: Path,
    target_dir: Path,
    exclude: Collection[str] = (),
) -> list[str]:
    """
    Find relative file paths present in both ``source_dir`` and ``target_dir``.

    Only path names are compared, never content. Directories are not reported;
    a symlink counts as a file unless it resolves to a directory.

    Args:
        source_dir: Fetched template tree
        target_dir: Project directory (may not exist yet)
        exclude: Directory names to skip in the template tree

    Returns:
        Sorted, de-duplicated posix-style relative paths

    Raises:
        DuplicateScanError: If either tree cannot be walked
    """
    if not source_dir.is_dir():
        raise DuplicateScanError(f"Template directory not found: {source_dir}")

    if not target_dir.exists():
        return []
    if not target_dir.is_dir():
        raise DuplicateScanError(f"Project path is not a directory: {target_dir}")

    duplicates: set[str] = set()
    for rel_path in iter_files(source_dir, exclude):
        target_path = target_dir / rel_path
        try:
            if target_path.is_file() or (
                target_path.is_symlink() and not target_path.is_dir()
            ):
                duplicates.add(rel_path)
        except OSError as e:
            raise DuplicateScanError(f"Cannot inspect {target_path}: {e}") from e

    return sorted(duplicates)


def _is_directory(path: Path) -> bool:
    return path.is_dir() and not path.is_symlink()


def find_path_conflicts(
    source_dir: Path,
    target_dir: Path,
    exclude: Collection[str] = (),
) -> list[str]:
    """
    Find template files that cannot replace what the project has at their path.

    A template file conflicts when the project has a directory at the same
    relative path, or when one of its parent components exists in the project
    as something other than a real directory (a file, or a symlink that would
    redirect the write outside the project).

    Returns:
        Sorted posix-style relative paths of the conflicting template files

    Raises:
        DuplicateScanError: If either tree cannot be walked
    """
    if not target_dir.is_dir():
        return []

    conflicts: set[str] = set()
    for rel_path in iter_files(source_dir, exclude):
        target_path = target_dir / rel_path
        try:
            if target_path.is_dir():
                conflicts.add(rel_path)
                continue
            for parent in PurePosixPath(rel_path).parents:
                if parent == PurePosixPath("."):
                    continue
                parent_path = target_dir / parent
                if parent_path.is_symlink() or (
                    parent_path.exists() and not _is_directory(parent_path)
                ):
                    conflicts.add(rel_path)
                    break
        except OSError as e:
            raise DuplicateScanError(f"Cannot inspect {target_path}: {e}") from e

    return sorted(conflicts)


def copy_template(
    template_dir: Path,
    target_dir: Path,
    exclude: Collection[str] = METADATA_DIRECTORIES,
) -> list[str]:
    """
    Copy every template file into ``target_dir``, overwriting existing files.

    Mode bits are copied along with content; intermediate directories are
    created as needed. A symlink at a destination path is replaced by the
    template file, never written through. The copy is not transactional.

    Args:
        template_dir: Fetched template tree
        target_dir: Project directory (created if missing)
        exclude: Directory names not to copy

    Returns:
        Relative paths of the copied files

    Raises:
        InitError: If a file cannot be copied, or a directory occupies its path
    """
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        copied = []
        for rel_path in iter_files(template_dir, exclude):
            dst_path = target_dir / rel_path
            dst_path.parent.mkdir(parents=True, exist_ok=True)
            if dst_path.is_symlink():
                dst_path.unlink()
            elif dst_path.is_dir():
                raise InitError(
                    f"Failed to copy template: {rel_path} is a directory in {target_dir}"
                )
            shutil.copy2(template_dir / rel_path, dst_path)
            copied.append(rel_path)
    except (DuplicateScanError, OSError) as e:
        raise InitError(f"Failed to copy template: {e}") from e

    logger.debug("Copied %d file(s) from %s to %s", len(copied), template_dir, target_dir)
    return copied
