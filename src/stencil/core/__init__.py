"""Core stencil functionality: manifest, errors, git, project initialization."""

from .errors import (
    ConfigError,
    DuplicateScanError,
    ErrorContext,
    FetchCancelled,
    FetchError,
    GitError,
    InitError,
    OverwriteDeclined,
    PathConflictError,
    PermissionParseError,
    StencilError,
)
from .git import GitCli
from .init_impl import (
    InitResult,
    InitState,
    ProjectInitializer,
    determine_duplicates,
    merge_ignore_entries,
    parse_executable_files,
)
from .manifest import ProjectManifest, TemplateInfo, load_manifest

__all__ = [
    "StencilError",
    "InitError",
    "FetchError",
    "FetchCancelled",
    "DuplicateScanError",
    "OverwriteDeclined",
    "PathConflictError",
    "PermissionParseError",
    "ConfigError",
    "GitError",
    "ErrorContext",
    "GitCli",
    "ProjectManifest",
    "TemplateInfo",
    "load_manifest",
    "InitResult",
    "InitState",
    "ProjectInitializer",
    "determine_duplicates",
    "merge_ignore_entries",
    "parse_executable_files",
]
