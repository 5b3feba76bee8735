"""Shared pytest fixtures for stencil tests."""

import os
import shutil
import subprocess
from collections.abc import Callable
from pathlib import Path

import pytest

GIT = shutil.which("git")

posix_only = pytest.mark.skipif(os.name == "nt", reason="requires POSIX file modes")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Skip tests marked ``requires_git`` when git is unavailable."""
    for item in items:
        if item.get_closest_marker("requires_git") and GIT is None:
            item.add_marker(pytest.mark.skip(reason="git is not installed"))


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
    return root


def snapshot_tree(root: Path) -> dict[str, bytes]:
    """Map every file under ``root`` to its bytes."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


def run_git(cwd: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", "-c", "user.name=stencil", "-c", "user.email=stencil@example.com", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )
    return result.stdout


class ScriptedConsole:
    """Console that answers confirmations from a fixed list and records messages."""

    def __init__(self, answers: list[bool] | None = None):
        self.answers = list(answers or [])
        self.messages: list[str] = []
        self.prompts: list[tuple[str, bool]] = []

    def message(self, text: str) -> None:
        self.messages.append(text)

    def confirm(self, message: str, default: bool = False) -> bool:
        self.prompts.append((message, default))
        if not self.answers:
            raise AssertionError(f"Unexpected confirmation: {message}")
        return self.answers.pop(0)


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, dict[str, str]], Path]:
    """Factory creating a directory ``tmp_path/<name>`` holding ``files``."""

    def _make(name: str, files: dict[str, str]) -> Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        return write_tree(root, files)

    return _make


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """An empty, existing project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path
