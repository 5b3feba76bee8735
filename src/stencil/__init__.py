"""
stencil - Bootstrap projects from templates.

Fetches a template into a staging area, reconciles it with an existing
project directory, and scaffolds the project's stencil.toml and .gitignore.
"""

from __future__ import annotations

from ._version import get_version
from .core.errors import (
    ConfigError,
    FetchError,
    InitError,
    OverwriteDeclined,
    StencilError,
)
from .core.init_impl import ProjectInitializer

__version__ = get_version()

__all__ = [
    "__version__",
    "StencilError",
    "InitError",
    "FetchError",
    "OverwriteDeclined",
    "ConfigError",
    "ProjectInitializer",
]
