"""End-to-end tests for the export pipeline."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from agentdocs.errors import ArtifactWriteError
from agentdocs.models import ExportContext
from agentdocs.pipeline import build_model, run_pipeline

if TYPE_CHECKING:
    from pathlib import Path

    from agentdocs.config import ExportConfig


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


class TestBuildModel:
    """Tests for build_model."""

    def test_docs_and_sections(self, context: ExportContext, export_config: ExportConfig) -> None:
        """The model holds every document and its sections."""
        model = build_model(context, export_config)
        assert len(model.docs) == 7
        assert sum(len(section.items) for section in model.sections) == 7
        guides = model.section("guides")
        assert guides is not None
        assert [item.title for item in guides] == ["Guides", "Alpha", "Beta"]
        assert model.section("missing") is None

    def test_route_prefix(
        self, docs_tree: Path, out_dir: Path, export_config: ExportConfig
    ) -> None:
        """The route prefix reaches document and section URLs."""
        context = ExportContext(docs_dir=docs_tree, out_dir=out_dir, route_prefix="docs")
        model = build_model(context, export_config)
        guides = model.section("guides")
        assert guides is not None
        assert guides.url == "/docs/guides"
        assert guides.items[1].url == "/docs/guides/a"


class TestRunPipeline:
    """Tests for run_pipeline."""

    def test_full_export(self, context: ExportContext, out_dir: Path) -> None:
        """A full run writes every artifact family."""
        written = run_pipeline(context)
        assert _relative(written, out_dir) == [
            "llms.txt",
            "api/docs.json",
            "api/schema/table.json",
            "api/schema/relation.json",
            "api/schema/project.json",
            "api/schema/datasources.json",
            "api/schema/migration.json",
            "api/schema/test.json",
            "api/getting-started.json",
            "api/guides.json",
            "api/reference.json",
            "api/api.json",
            "api/root.json",
            "api/sections.json",
            "api/cli/commands.json",
        ]
        assert all(path.is_file() for path in written)

    def test_advertised_paths_exist(self, context: ExportContext, out_dir: Path) -> None:
        """Every path in the discovery index points at a written file."""
        run_pipeline(context)
        index = json.loads((out_dir / "api" / "docs.json").read_text(encoding="utf-8"))
        advertised = [entry["schema"] for entry in index["semantic_objects"].values()]
        advertised.append(index["full_knowledge"])
        for site_path in advertised:
            assert (out_dir / site_path.lstrip("/")).is_file()

    def test_artifact_selection(self, context: ExportContext, out_dir: Path) -> None:
        """Only the named artifact families are written."""
        written = run_pipeline(context, artifacts=["knowledge"])
        assert _relative(written, out_dir) == ["llms.txt"]
        assert not (out_dir / "api").exists()

    def test_unknown_artifact(self, context: ExportContext) -> None:
        """Unknown artifact names are rejected before anything is written."""
        with pytest.raises(ValueError, match="Unknown artifact"):
            run_pipeline(context, artifacts=["pdf"])

    def test_missing_docs_root(self, tmp_path: Path) -> None:
        """A missing document root still yields well-formed artifacts."""
        out_dir = tmp_path / "out"
        context = ExportContext(docs_dir=tmp_path / "absent", out_dir=out_dir)
        run_pipeline(context)
        assert (out_dir / "llms.txt").is_file()
        sections = json.loads((out_dir / "api" / "sections.json").read_text(encoding="utf-8"))
        assert sections == {"sections": []}

    def test_idempotent(self, context: ExportContext) -> None:
        """Re-running over unchanged input produces identical files."""
        first = {path: path.read_bytes() for path in run_pipeline(context)}
        second = {path: path.read_bytes() for path in run_pipeline(context)}
        assert first == second

    def test_write_failure_propagates(self, docs_tree: Path, tmp_path: Path) -> None:
        """An unwritable output root aborts the run."""
        blocker = tmp_path / "blocked"
        blocker.write_text("", encoding="utf-8")
        with pytest.raises(ArtifactWriteError):
            run_pipeline(ExportContext(docs_dir=docs_tree, out_dir=blocker))

    def test_logs_share_correlation_id(
        self, context: ExportContext, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Records of one run carry the same correlation id."""
        caplog.set_level(logging.INFO, logger="agentdocs")
        run_pipeline(context)
        records = [r for r in caplog.records if r.name.startswith("agentdocs.")]
        ids = {getattr(record, "correlation_id", None) for record in records}
        assert len(records) >= 5
        assert len(ids) == 1
        assert None not in ids
        assert {getattr(record, "operation", None) for record in records} >= {
            "export",
            "knowledge",
            "bundles",
        }
