"""
Project initialization utilities for stencil.

This package contains modular implementations for project initialization:
- validation.py - Project name validation and defaults
- templates.py - Duplicate detection and template copying
- permissions.py - Executable-bit tracking across platforms
- scaffold.py - stencil.toml and .gitignore scaffolding
- fetch.py - Template fetchers (git clone, local directory)
- project.py - Main initialization flow
"""

from __future__ import annotations

from .fetch import (
    GitTemplateFetcher,
    LocalTemplateFetcher,
    TemplateFetcher,
    fetcher_for,
    resolve_template_url,
)
from .permissions import (
    ExecutableBits,
    FilesystemExecutableBits,
    GitIndexExecutableBits,
    discover_executable_files,
    missing_executable_bits,
    parse_executable_files,
    restore_executable_bits,
    select_executable_bits,
)
from .project import (
    OVERWRITE_PROMPT,
    Console,
    InitResult,
    InitState,
    ProjectInitializer,
)
from .scaffold import (
    IGNORE_ENTRIES,
    IGNORE_FILENAME,
    STATE_DIRECTORY,
    IgnoreFile,
    ensure_ignore_file,
    ensure_manifest,
    merge_ignore_entries,
)
from .templates import (
    METADATA_DIRECTORIES,
    copy_template,
    determine_duplicates,
    find_path_conflicts,
)
from .validation import (
    RESERVED_NAMES,
    default_project_name,
    sanitize_name,
    validate_project_name,
)

__all__ = [
    # Validation
    "RESERVED_NAMES",
    "validate_project_name",
    "sanitize_name",
    "default_project_name",
    # Templates
    "METADATA_DIRECTORIES",
    "determine_duplicates",
    "find_path_conflicts",
    "copy_template",
    # Permissions
    "ExecutableBits",
    "FilesystemExecutableBits",
    "GitIndexExecutableBits",
    "parse_executable_files",
    "discover_executable_files",
    "select_executable_bits",
    "restore_executable_bits",
    "missing_executable_bits",
    # Scaffolding
    "IGNORE_ENTRIES",
    "IGNORE_FILENAME",
    "STATE_DIRECTORY",
    "IgnoreFile",
    "merge_ignore_entries",
    "ensure_ignore_file",
    "ensure_manifest",
    # Fetching
    "TemplateFetcher",
    "GitTemplateFetcher",
    "LocalTemplateFetcher",
    "fetcher_for",
    "resolve_template_url",
    # Project init
    "OVERWRITE_PROMPT",
    "Console",
    "InitResult",
    "InitState",
    "ProjectInitializer",
]
