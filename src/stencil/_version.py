"""Version lookup for stencil."""

import tomllib
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def get_version() -> str:
    """Version from the source checkout's pyproject.toml, else from the installed distribution."""
    if _PYPROJECT.is_file():
        with _PYPROJECT.open("rb") as f:
            project = tomllib.load(f).get("project", {})
        if project.get("name") == "stencil" and "version" in project:
            return str(project["version"])
    try:
        return version("stencil")
    except PackageNotFoundError:
        return "0.0.0"
