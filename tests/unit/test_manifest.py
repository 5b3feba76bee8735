"""Tests for stencil.toml loading and rendering."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from stencil.core.errors import ConfigError
from stencil.core.manifest import (
    DEFAULT_VERSION,
    ProjectManifest,
    TemplateInfo,
    default_manifest_content,
    load_manifest,
    render_manifest,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_toml(tmp_path: Path, content: str) -> Path:
    p = tmp_path / "stencil.toml"
    p.write_text(textwrap.dedent(content), encoding="utf-8")
    return p


# ---------------------------------------------------------------------------
# load_manifest
# ---------------------------------------------------------------------------


class TestLoadManifest:
    def test_minimal(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path,
            """\
            [project]
            name = "svc"
            """,
        )

        manifest = load_manifest(path)

        assert manifest == ProjectManifest(name="svc", version=DEFAULT_VERSION)

    def test_full(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path,
            """\
            [project]
            name = "svc"
            version = "2.0.0"
            description = "Billing service"

            [template]
            source = "https://github.com/acme/service-template"
            ref = "main"
            """,
        )

        manifest = load_manifest(path)

        assert manifest.version == "2.0.0"
        assert manifest.description == "Billing service"
        assert manifest.template == TemplateInfo(
            source="https://github.com/acme/service-template", ref="main"
        )

    def test_unknown_tables_are_ignored(self, tmp_path: Path) -> None:
        path = _write_toml(
            tmp_path,
            """\
            [project]
            name = "svc"

            [tool.custom]
            enabled = true
            """,
        )

        assert load_manifest(path).name == "svc"

    @pytest.mark.parametrize(
        ("content", "message"),
        [
            pytest.param("name = 'svc'\n", "missing the \\[project\\] table", id="no-project"),
            pytest.param("project = 1\n", "missing the \\[project\\] table", id="project-not-table"),
            pytest.param("[project]\nversion = '1'\n", "non-empty string", id="no-name"),
            pytest.param("[project]\nname = '  '\n", "non-empty string", id="blank-name"),
            pytest.param("[project]\nname = 3\n", "must be a string, got int", id="int-name"),
            pytest.param(
                "[project]\nname = 'a'\nversion = 1.0\n", "version must be a string", id="version"
            ),
            pytest.param(
                "template = 'x'\n[project]\nname = 'a'\n", "must be a table", id="template-scalar"
            ),
            pytest.param(
                "[project]\nname = 'a'\n[template]\nref = 'main'\n",
                "source must be a non-empty string",
                id="template-no-source",
            ),
        ],
    )
    def test_invalid(self, tmp_path: Path, content: str, message: str) -> None:
        path = tmp_path / "stencil.toml"
        path.write_text(content, encoding="utf-8")

        with pytest.raises(ConfigError, match=message) as exc_info:
            load_manifest(path)
        assert exc_info.value.context is not None
        assert exc_info.value.context.file == path

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = _write_toml(tmp_path, "[project\n")

        with pytest.raises(ConfigError, match="Invalid manifest"):
            load_manifest(path)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read manifest"):
            load_manifest(tmp_path / "stencil.toml")


# ---------------------------------------------------------------------------
# render_manifest
# ---------------------------------------------------------------------------


class TestRenderManifest:
    def test_default_content(self) -> None:
        assert default_manifest_content("svc") == textwrap.dedent("""\
            [project]
            name = "svc"
            version = "0.1.0"
        """)

    def test_with_template(self) -> None:
        content = default_manifest_content("svc", TemplateInfo(source="acme/t", ref="v1"))

        assert content == textwrap.dedent("""\
            [project]
            name = "svc"
            version = "0.1.0"

            [template]
            source = "acme/t"
            ref = "v1"
        """)

    def test_escapes_strings(self, tmp_path: Path) -> None:
        manifest = ProjectManifest(
            name="svc",
            description='Says "hi" \\ unicode ✓',
            template=TemplateInfo(source="C:\\templates\\svc"),
        )
        path = tmp_path / "stencil.toml"
        path.write_text(render_manifest(manifest), encoding="utf-8")

        assert load_manifest(path) == manifest
