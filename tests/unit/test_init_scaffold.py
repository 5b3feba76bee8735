"""Tests for stencil.toml and .gitignore scaffolding."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from stencil.core.errors import ConfigError, InitError
from stencil.core.init_impl.scaffold import (
    IGNORE_ENTRIES,
    IgnoreFile,
    ensure_ignore_file,
    ensure_manifest,
    ensure_state_directory,
    merge_ignore_entries,
)
from stencil.core.manifest import TemplateInfo, load_manifest

# ---------------------------------------------------------------------------
# IgnoreFile
# ---------------------------------------------------------------------------


class TestIgnoreFile:
    @pytest.mark.parametrize(
        "content",
        [
            "",
            "\n",
            "node_modules",
            "node_modules\n",
            "a\r\nb\r\n",
            "a\r\nb",
            "a\n\nb\n",
            "# comment\n\n",
            "a\r\nb\nc\r\n",
            "a\nb\r\nc",
        ],
    )
    def test_parse_render_is_identity(self, content: str) -> None:
        assert IgnoreFile.parse(content).render() == content

    def test_detects_crlf(self) -> None:
        ignore = IgnoreFile.parse("a\r\nb\r\n")

        assert ignore.newline == "\r\n"
        assert ignore.lines == ["a", "b"]
        assert ignore.trailing_newline

    def test_detects_missing_trailing_newline(self) -> None:
        ignore = IgnoreFile.parse("a\nb")

        assert ignore.lines == ["a", "b"]
        assert not ignore.trailing_newline

    def test_missing_requires_exact_line(self) -> None:
        ignore = IgnoreFile.parse(".stencil/\n .env\n")

        assert ignore.missing([".stencil", ".env"]) == [".stencil", ".env"]

    def test_missing_deduplicates_entries(self) -> None:
        assert IgnoreFile().missing([".env", ".env"]) == [".env"]

    def test_with_entries_returns_self_when_complete(self) -> None:
        ignore = IgnoreFile.parse(".stencil\n.env")

        assert ignore.with_entries(IGNORE_ENTRIES) is ignore

    def test_mixed_line_endings_strip_carriage_returns(self) -> None:
        ignore = IgnoreFile.parse(".stencil\r\n.env\nbuild\r\n")

        assert ignore.lines == [".stencil", ".env", "build"]
        assert ignore.newline == "\r\n"
        assert ignore.missing(IGNORE_ENTRIES) == []


class TestMergeIgnoreEntries:
    @pytest.mark.parametrize(
        ("content", "expected"),
        [
            pytest.param("", ".stencil\n.env\n", id="empty"),
            pytest.param("node_modules\n", "node_modules\n.stencil\n.env\n", id="append"),
            pytest.param("node_modules", "node_modules\n.stencil\n.env\n", id="no-trailing"),
            pytest.param(
                "node_modules\r\n", "node_modules\r\n.stencil\r\n.env\r\n", id="crlf"
            ),
            pytest.param(
                "a\r\nnode_modules",
                "a\r\nnode_modules\r\n.stencil\r\n.env\r\n",
                id="crlf-no-trailing",
            ),
            pytest.param(".env\n", ".env\n.stencil\n", id="partial"),
            pytest.param(".stencil\n.env\n", ".stencil\n.env\n", id="unmodified"),
            pytest.param(".env\r\n.stencil", ".env\r\n.stencil", id="unmodified-crlf-no-trailing"),
            pytest.param(".stencil\r\n.env\n", ".stencil\r\n.env\n", id="unmodified-mixed"),
            pytest.param(
                "dist\r\n.env\nbuild", "dist\r\n.env\nbuild\r\n.stencil\r\n", id="mixed-partial"
            ),
            pytest.param("dist\n.env\r\n", "dist\n.env\r\n.stencil\n", id="mixed-lf-first"),
        ],
    )
    def test_merge(self, content: str, expected: str) -> None:
        assert merge_ignore_entries(content) == expected

    def test_idempotent(self) -> None:
        once = merge_ignore_entries("dist\r\nbuild")
        assert merge_ignore_entries(once) == once

    def test_custom_entries(self) -> None:
        assert merge_ignore_entries("a\n", ["b"]) == "a\nb\n"


class TestEnsureIgnoreFile:
    def test_creates_file(self, project_dir: Path) -> None:
        assert ensure_ignore_file(project_dir) is True
        assert (project_dir / ".gitignore").read_bytes() == b".stencil\n.env\n"

    def test_appends_preserving_crlf(self, project_dir: Path) -> None:
        path = project_dir / ".gitignore"
        path.write_bytes(b"node_modules\r\n*.log")

        assert ensure_ignore_file(project_dir) is True
        assert path.read_bytes() == b"node_modules\r\n*.log\r\n.stencil\r\n.env\r\n"

    def test_conformant_file_is_not_rewritten(self, project_dir: Path) -> None:
        path = project_dir / ".gitignore"
        original = b"dist\r\n.env\r\n.stencil"
        path.write_bytes(original)
        mtime = path.stat().st_mtime_ns

        assert ensure_ignore_file(project_dir) is False
        assert path.read_bytes() == original
        assert path.stat().st_mtime_ns == mtime

    def test_mixed_line_endings_are_not_duplicated(self, project_dir: Path) -> None:
        path = project_dir / ".gitignore"
        original = b".stencil\r\n.env\n"
        path.write_bytes(original)

        assert ensure_ignore_file(project_dir) is False
        assert path.read_bytes() == original

    def test_second_run_is_a_no_op(self, project_dir: Path) -> None:
        (project_dir / ".gitignore").write_text("venv\n")

        assert ensure_ignore_file(project_dir) is True
        assert ensure_ignore_file(project_dir) is False

    def test_non_utf8_file_raises_config_error(self, project_dir: Path) -> None:
        (project_dir / ".gitignore").write_bytes(b"\xff\xfe\x00")

        with pytest.raises(ConfigError, match="Cannot read ignore file"):
            ensure_ignore_file(project_dir)

    def test_missing_directory_raises_config_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot write ignore file"):
            ensure_ignore_file(tmp_path / "missing")


# ---------------------------------------------------------------------------
# ensure_manifest
# ---------------------------------------------------------------------------


class TestEnsureManifest:
    def test_creates_manifest_named_after_directory(self, tmp_path: Path) -> None:
        project_dir = tmp_path / "My Service"
        project_dir.mkdir()

        assert ensure_manifest(project_dir) is True

        manifest = load_manifest(project_dir / "stencil.toml")
        assert manifest.name == "my-service"
        assert manifest.version == "0.1.0"
        assert manifest.template is None

    def test_records_template_and_explicit_name(self, project_dir: Path) -> None:
        template = TemplateInfo(source="acme/service-template", ref="v2")

        ensure_manifest(project_dir, project_name="billing", template=template)

        manifest = load_manifest(project_dir / "stencil.toml")
        assert manifest.name == "billing"
        assert manifest.template == template

    def test_invalid_explicit_name_raises(self, project_dir: Path) -> None:
        with pytest.raises(InitError, match="reserved"):
            ensure_manifest(project_dir, project_name="stencil")
        assert not (project_dir / "stencil.toml").exists()

    def test_existing_manifest_is_validated_not_rewritten(self, project_dir: Path) -> None:
        content = textwrap.dedent("""\
            # hand-written
            [project]
            name = "kept"
        """)
        (project_dir / "stencil.toml").write_text(content)

        assert ensure_manifest(project_dir, project_name="other") is False
        assert (project_dir / "stencil.toml").read_text() == content

    def test_existing_invalid_manifest_raises(self, project_dir: Path) -> None:
        (project_dir / "stencil.toml").write_text("[project\nname=")

        with pytest.raises(ConfigError, match="Invalid manifest"):
            ensure_manifest(project_dir)

    def test_loader_value_error_becomes_config_error(self, project_dir: Path) -> None:
        (project_dir / "stencil.toml").write_text("")

        def strict_load(path: Path) -> None:
            raise ValueError("unsupported schema")

        with pytest.raises(ConfigError, match="unsupported schema") as exc_info:
            ensure_manifest(project_dir, load=strict_load)
        assert exc_info.value.context is not None
        assert exc_info.value.context.file == project_dir / "stencil.toml"


def test_ensure_state_directory_is_idempotent(project_dir: Path) -> None:
    first = ensure_state_directory(project_dir)
    second = ensure_state_directory(project_dir)

    assert first == second == project_dir / ".stencil"
    assert first.is_dir()
