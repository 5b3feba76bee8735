import json
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .errors import make_config_error

MANIFEST_FILENAME = "stencil.toml"

DEFAULT_VERSION = "0.1.0"


@dataclass
class TemplateInfo:
    """Where the project was materialized from."""

    source: str
    ref: str | None = None


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from stencil.toml.

    Examples in stencil.toml:

        [project]
        name = "my-service"
        version = "0.1.0"

        [template]
        source = "https://github.com/acme/service-template"
        ref = "main"
    """

    name: str
    version: str = DEFAULT_VERSION
    description: str | None = None
    template: TemplateInfo | None = None


def _require_str(data: dict[str, Any], key: str, section: str, path: Path) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise make_config_error(
            f"[{section}].{key} must be a string, got {type(value).__name__}", path
        )
    return value


def load_manifest(path: Path) -> ProjectManifest:
    """
    Load and validate a stencil.toml manifest.

    Raises:
        ConfigError: If the file is unreadable, not valid TOML, or does not
            describe a project.
    """
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise make_config_error(f"Cannot read manifest: {e}", path) from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise make_config_error(f"Invalid manifest: {e}", path) from e

    project = data.get("project")
    if not isinstance(project, dict):
        raise make_config_error("Manifest is missing the [project] table", path)

    name = _require_str(project, "name", "project", path)
    if not name or not name.strip():
        raise make_config_error("[project].name must be a non-empty string", path)

    version = _require_str(project, "version", "project", path) or DEFAULT_VERSION
    description = _require_str(project, "description", "project", path)

    # Parse template provenance if present
    template_info = None
    template_data = data.get("template")
    if template_data is not None:
        if not isinstance(template_data, dict):
            raise make_config_error("[template] must be a table", path)
        source = _require_str(template_data, "source", "template", path)
        if not source:
            raise make_config_error("[template].source must be a non-empty string", path)
        template_info = TemplateInfo(
            source=source,
            ref=_require_str(template_data, "ref", "template", path),
        )

    return ProjectManifest(
        name=name,
        version=version,
        description=description,
        template=template_info,
    )


def _toml_string(value: str) -> str:
    # JSON string escapes are a subset of TOML basic-string escapes
    return json.dumps(value, ensure_ascii=False)


def render_manifest(manifest: ProjectManifest) -> str:
    """Render a manifest as stencil.toml content."""
    lines = [
        "[project]",
        f"name = {_toml_string(manifest.name)}",
        f"version = {_toml_string(manifest.version)}",
    ]
    if manifest.description:
        lines.append(f"description = {_toml_string(manifest.description)}")

    if manifest.template:
        lines.append("")
        lines.append("[template]")
        lines.append(f"source = {_toml_string(manifest.template.source)}")
        if manifest.template.ref:
            lines.append(f"ref = {_toml_string(manifest.template.ref)}")

    return "\n".join(lines) + "\n"


def default_manifest_content(project_name: str, template: TemplateInfo | None = None) -> str:
    """Content written to stencil.toml when a project directory has none."""
    return render_manifest(ProjectManifest(name=project_name, template=template))
