"""
Main project initialization logic.

Handles materializing a template into a project directory and scaffolding
the project's configuration.

Flow of ``ProjectInitializer.initialize``:

    START -> FETCHING -> DUPLICATE_CHECK -> CONFIRMING (only with duplicates)
          -> APPLYING -> FIXING_PERMISSIONS -> SCAFFOLDING -> DONE

A declined overwrite ends in ABORTED with the project directory untouched.
Any other failure is raised as soon as it happens; nothing is retried.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any, Protocol

from ..errors import FetchCancelled, InitError, OverwriteDeclined, PathConflictError
from ..git import GitCli
from ..manifest import TemplateInfo, load_manifest
from .fetch import TemplateFetcher, fetcher_for
from .permissions import (
    GitIndexExecutableBits,
    discover_executable_files,
    restore_executable_bits,
    select_executable_bits,
)
from .scaffold import ensure_ignore_file, ensure_manifest, ensure_state_directory
from .templates import (
    METADATA_DIRECTORIES,
    copy_template,
    determine_duplicates,
    find_path_conflicts,
)
from .validation import resolve_project_name

logger = logging.getLogger(__name__)

OVERWRITE_PROMPT = "Overwrite files with versions from template?"


class InitState(StrEnum):
    """Stages of an initialization run."""

    START = "start"
    FETCHING = "fetching"
    DUPLICATE_CHECK = "duplicate_check"
    CONFIRMING = "confirming"
    APPLYING = "applying"
    FIXING_PERMISSIONS = "fixing_permissions"
    SCAFFOLDING = "scaffolding"
    DONE = "done"
    ABORTED = "aborted"


class Console(Protocol):
    """Interactive capability used to ask before overwriting files."""

    def message(self, text: str) -> None:
        """Show a line of text to the user."""
        ...

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask a yes/no question."""
        ...


@dataclass
class InitResult:
    """What an initialization run did to the project directory."""

    project_dir: Path
    copied_files: list[str] = field(default_factory=list)
    duplicates: list[str] = field(default_factory=list)
    executable_files: list[str] = field(default_factory=list)
    manifest_created: bool = False
    ignore_file_updated: bool = False
    repository_created: bool = False


class ProjectInitializer:
    """
    Initializes projects from templates.

    Args:
        console: Used to confirm overwriting existing files
        git: Git command runner (defaults to the ``git`` on PATH)
        fetcher: Template fetcher; chosen per source when None
        load: Manifest loader used to validate an existing stencil.toml
        progress_callback: Optional callback for progress messages
    """

    def __init__(
        self,
        console: Console,
        git: GitCli | None = None,
        fetcher: TemplateFetcher | None = None,
        load: Callable[[Path], Any] = load_manifest,
        progress_callback: Callable[[str], None] | None = None,
    ):
        self.console = console
        self.git = git or GitCli()
        self.fetcher = fetcher
        self.load = load
        self.progress_callback = progress_callback
        self.state = InitState.START

    def _log(self, msg: str) -> None:
        """Log progress message if callback provided."""
        if self.progress_callback:
            self.progress_callback(msg)

    def _transition(self, state: InitState) -> None:
        logger.debug("Initializer state %s -> %s", self.state, state)
        self.state = state

    def initialize(
        self,
        target_dir: Path,
        source: str,
        ref: str | None = None,
        *,
        project_name: str | None = None,
        force: bool = False,
        no_git: bool = False,
        timeout: float | None = None,
    ) -> InitResult:
        """
        Materialize the template at ``source`` into ``target_dir``.

        Args:
            target_dir: Project directory (created if missing)
            source: Template locator (local directory, git URL or owner/repo)
            ref: Branch or tag to fetch
            project_name: Name for a newly created manifest
            force: Overwrite existing files without asking
            no_git: Skip git repository initialization
            timeout: Seconds to wait for the fetch

        Raises:
            FetchError: If the template cannot be fetched
            FetchCancelled: If the fetch deadline expires
            PermissionParseError: If the template's file listing is malformed
            DuplicateScanError: If a directory tree cannot be walked
            PathConflictError: If a template file collides with a project
                directory, or with a file or symlink on its parent path
            OverwriteDeclined: If the user declines overwriting files
            ConfigError: If the project configuration is invalid
            InitError: If the project name is invalid or copying fails
        """
        if project_name is not None:
            resolve_project_name(target_dir, project_name)

        result = InitResult(project_dir=target_dir)
        fetcher = self.fetcher or fetcher_for(source, self.git)

        self._transition(InitState.FETCHING)
        self._log(f"Fetching template {source}" + (f" ({ref})" if ref else "") + "...")
        staging_dir = Path(tempfile.mkdtemp(prefix="stencil-template-"))
        remove_staging = True
        try:
            try:
                fetcher.fetch(source, ref, staging_dir, timeout=timeout)
            except FetchCancelled:
                # Partially staged files are left for the caller to inspect
                remove_staging = False
                raise

            result.executable_files = discover_executable_files(staging_dir, self.git)

            self._transition(InitState.DUPLICATE_CHECK)
            result.duplicates = determine_duplicates(
                staging_dir, target_dir, exclude=METADATA_DIRECTORIES
            )
            conflicts = find_path_conflicts(
                staging_dir, target_dir, exclude=METADATA_DIRECTORIES
            )
            if conflicts:
                self._transition(InitState.ABORTED)
                raise PathConflictError(conflicts)

            if result.duplicates and not force:
                self._transition(InitState.CONFIRMING)
                if not self._confirm_overwrite(result.duplicates):
                    self._transition(InitState.ABORTED)
                    raise OverwriteDeclined(result.duplicates)

            self._transition(InitState.APPLYING)
            self._log(f"  Copying template files to {target_dir}...")
            result.copied_files = copy_template(staging_dir, target_dir)
            self._log(f"  {len(result.copied_files)} file(s) copied")

            self._transition(InitState.FIXING_PERMISSIONS)
            if not no_git:
                result.repository_created = self._ensure_repository(target_dir)
            self._fix_permissions(target_dir, result.executable_files, no_git)

            self._transition(InitState.SCAFFOLDING)
            self._scaffold(target_dir, result, project_name, TemplateInfo(source=source, ref=ref))
        finally:
            if remove_staging:
                shutil.rmtree(staging_dir, ignore_errors=True)

        self._transition(InitState.DONE)
        return result

    def initialize_empty(self, target_dir: Path, project_name: str | None = None) -> InitResult:
        """
        Scaffold configuration in an existing directory without a template.

        Raises:
            InitError: If ``target_dir`` is not a directory
            ConfigError: If the project configuration is invalid
        """
        if not target_dir.is_dir():
            raise InitError(f"Directory does not exist: {target_dir}")

        result = InitResult(project_dir=target_dir)
        self._transition(InitState.SCAFFOLDING)
        self._scaffold(target_dir, result, project_name, None)
        self._transition(InitState.DONE)
        return result

    def _confirm_overwrite(self, duplicates: list[str]) -> bool:
        self.console.message(
            f"The following {len(duplicates)} file(s) already exist in the project directory:"
        )
        for rel_path in duplicates:
            self.console.message(f"  * {rel_path}")
        return self.console.confirm(OVERWRITE_PROMPT, default=False)

    def _ensure_repository(self, target_dir: Path) -> bool:
        """Run ``git init`` unless ``target_dir`` already is a repository."""
        if self.git.is_repository(target_dir):
            return False

        self._log("  Initializing git repository...")
        self.git.init(target_dir)
        self.git.add_all(target_dir)
        return True

    def _fix_permissions(self, target_dir: Path, executable_files: list[str], no_git: bool) -> None:
        if not executable_files:
            return

        bits = select_executable_bits(target_dir, self.git)
        if no_git and isinstance(bits, GitIndexExecutableBits):
            logger.warning(
                "Cannot record %d executable file(s): filesystem has no execute bits "
                "and git initialization is disabled",
                len(executable_files),
            )
            return

        try:
            count = restore_executable_bits(bits, executable_files)
        except OSError as e:
            raise InitError(f"Failed to restore executable permissions: {e}") from e
        self._log(f"  Marked {count} file(s) executable")

    def _scaffold(
        self,
        target_dir: Path,
        result: InitResult,
        project_name: str | None,
        template: TemplateInfo | None,
    ) -> None:
        result.manifest_created = ensure_manifest(
            target_dir, project_name=project_name, template=template, load=self.load
        )
        if result.manifest_created:
            self._log("  Created stencil.toml")

        result.ignore_file_updated = ensure_ignore_file(target_dir)
        if result.ignore_file_updated:
            self._log("  Updated .gitignore")

        ensure_state_directory(target_dir)
