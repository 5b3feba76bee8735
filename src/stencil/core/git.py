"""
Thin wrapper around the git command line.

Every call runs git as a subprocess and waits for it; failures surface as
GitError (or FetchError/FetchCancelled for clones).
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .environment import get_git_executable
from .errors import FetchCancelled, FetchError, GitError

logger = logging.getLogger(__name__)


class GitCli:
    """Runs git commands against a working directory."""

    def __init__(self, executable: str | None = None):
        self.executable = executable or get_git_executable()

    def _run(
        self,
        args: list[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> subprocess.CompletedProcess[str]:
        cmd = [self.executable, *args]
        logger.debug("Running %s (cwd=%s)", " ".join(cmd), cwd)
        return subprocess.run(
            cmd,
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
            timeout=timeout,
        )

    def run(self, path: Path, *args: str) -> str:
        """Run ``git -C <path> <args>`` and return stdout."""
        try:
            result = self._run(["-C", str(path), *args])
        except FileNotFoundError as e:
            raise GitError(f"git executable not found: {self.executable}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise GitError(
                f"git {' '.join(args)} failed with exit code {e.returncode}"
                + (f": {stderr}" if stderr else "")
            ) from e
        return result.stdout

    def shallow_clone(
        self,
        url: str,
        ref: str | None,
        destination: Path,
        timeout: float | None = None,
    ) -> None:
        """
        Clone ``url`` at ``ref`` (default branch when None) into ``destination``.

        Raises:
            FetchCancelled: If ``timeout`` seconds elapse first
            FetchError: If git is missing or the clone fails
        """
        args = ["clone", "--depth", "1"]
        if ref:
            args += ["--branch", ref]
        args += [url, str(destination)]

        try:
            self._run(args, timeout=timeout)
        except subprocess.TimeoutExpired as e:
            raise FetchCancelled(
                f"Fetching template {url} did not finish within {timeout:g}s"
            ) from e
        except FileNotFoundError as e:
            raise FetchError(f"git executable not found: {self.executable}") from e
        except subprocess.CalledProcessError as e:
            stderr = (e.stderr or "").strip()
            raise FetchError(
                f"Failed to clone template {url}" + (f": {stderr}" if stderr else "")
            ) from e

    def list_staged_files(self, path: Path) -> str:
        """
        Raw ``git ls-files --stage -z`` output.

        Records are ``<mode> <oid> <stage>\\t<path>`` terminated by NUL, with
        paths verbatim (no C-style quoting).
        """
        return self.run(path, "ls-files", "--stage", "-z")

    def is_repository(self, path: Path) -> bool:
        """Check whether ``path`` is inside a git work tree."""
        try:
            output = self.run(path, "rev-parse", "--is-inside-work-tree")
        except GitError:
            return False
        return output.strip() == "true"

    def init(self, path: Path) -> None:
        self.run(path, "init")

    def add_all(self, path: Path) -> None:
        self.run(path, "add", "--all")

    def add_file_exec_permission(self, path: Path, file: str) -> None:
        """Record ``file`` as executable (mode 100755) in the index of ``path``."""
        self.run(path, "update-index", "--add", "--chmod=+x", "--", file)
