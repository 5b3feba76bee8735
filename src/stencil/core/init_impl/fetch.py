"""
Template fetchers.

A fetcher materializes a template's files into an empty staging directory.
Git fetchers leave the clone's ``.git`` directory in place so the template's
tracked file modes can be read back afterwards.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..errors import FetchError
from ..git import GitCli

logger = logging.getLogger(__name__)

GITHUB_URL = "https://github.com"

# owner/repo shorthand for GitHub templates
_SHORTHAND_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


@runtime_checkable
class TemplateFetcher(Protocol):
    """Materializes a template into a staging directory."""

    def fetch(
        self,
        source: str,
        ref: str | None,
        staging_dir: Path,
        timeout: float | None = None,
    ) -> None:
        """
        Populate ``staging_dir`` with the template's files.

        Raises:
            FetchError: If the template cannot be fetched
            FetchCancelled: If ``timeout`` expires first
        """
        ...


class GitTemplateFetcher:
    """Shallow-clones a git repository."""

    def __init__(self, git: GitCli):
        self.git = git

    def fetch(
        self,
        source: str,
        ref: str | None,
        staging_dir: Path,
        timeout: float | None = None,
    ) -> None:
        url = resolve_template_url(source)
        logger.debug("Cloning %s (ref=%s) into %s", url, ref or "<default>", staging_dir)
        self.git.shallow_clone(url, ref, staging_dir, timeout=timeout)


class LocalTemplateFetcher:
    """Copies a template from a local directory."""

    def fetch(
        self,
        source: str,
        ref: str | None,
        staging_dir: Path,
        timeout: float | None = None,
    ) -> None:
        template_dir = Path(source).expanduser()
        if not template_dir.is_dir():
            raise FetchError(f"Template not found: {template_dir}")
        if ref:
            logger.warning("Ignoring ref %r for local template %s", ref, template_dir)

        try:
            shutil.copytree(template_dir, staging_dir, symlinks=True, dirs_exist_ok=True)
        except OSError as e:
            raise FetchError(f"Failed to copy template {template_dir}: {e}") from e


def resolve_template_url(source: str) -> str:
    """
    Expand a template locator to something ``git clone`` accepts.

    Examples:
        resolve_template_url("acme/service-template")
        # -> "https://github.com/acme/service-template"
        resolve_template_url("git@example.com:acme/t.git")
        # -> unchanged
    """
    if _SHORTHAND_PATTERN.match(source) and not Path(source).exists():
        return f"{GITHUB_URL}/{source}"
    return source


def fetcher_for(source: str, git: GitCli) -> TemplateFetcher:
    """Pick the fetcher for ``source``: local directories are copied, anything else cloned."""
    if Path(source).expanduser().is_dir():
        return LocalTemplateFetcher()
    return GitTemplateFetcher(git)
