"""Tests for the JSON report renderer."""
import json
from pathlib import Path

from license_report.constants import LEGAL_DISCLAIMER
from license_report.models.report import Report
from license_report.output.json_report import JsonReportRenderer


def _render(tmp_path: Path, report: Report, **kwargs) -> dict:
    renderer = JsonReportRenderer(tmp_path / "index.json", **kwargs)
    return json.loads(renderer.render(report))


class TestJsonReportRenderer:
    """Tests for JsonReportRenderer."""

    def test_top_level_sections(self, tmp_path: Path, sample_report: Report) -> None:
        """Test that the document has metadata, summary and dependencies."""
        data = _render(tmp_path, sample_report)

        assert set(data) == {"report_metadata", "summary", "dependencies"}

    def test_report_metadata(self, tmp_path: Path, sample_report: Report) -> None:
        """Test run metadata, counters and the disclaimer."""
        metadata = _render(tmp_path, sample_report)["report_metadata"]

        assert metadata["project_name"] == "Backend"
        assert metadata["generated_at"] == "2026-01-15T12:00:00Z"
        assert metadata["tool_version"] == "0.1.0"
        assert metadata["requested_scopes"] == ["runtime"]
        assert metadata["disclaimer"] == LEGAL_DISCLAIMER
        assert metadata["counters"]["skipped_import_records"] == 1
        assert metadata["counters"]["failed_importers"] == 0
        assert metadata["warnings"] == ["1 malformed record(s) skipped in report 'Front End'"]

    def test_summary(self, tmp_path: Path, sample_report: Report) -> None:
        """Test summary counts and the license histogram."""
        summary = _render(tmp_path, sample_report)["summary"]

        assert summary["total_dependencies"] == 5
        assert summary["allowed"] == 3
        assert summary["violations"] == 1
        assert summary["unknown"] == 1
        assert summary["fail_on"] == ["violation"]
        assert summary["status"] == "fail"
        assert summary["licenses"] == {
            "Apache-2.0": 1,
            "GPL-3.0-only": 1,
            "MIT": 3,
            "Unknown": 1,
        }
        assert list(summary["licenses"])[-1] == "Unknown"

    def test_status_follows_fail_on(self, tmp_path: Path, sample_report: Report) -> None:
        """Test that the status uses the same outcomes that fail the run."""
        report = sample_report.model_copy(
            update={"verdicts": tuple(v for v in sample_report.verdicts if not v.is_violation)}
        )

        default = _render(tmp_path, report)["summary"]
        strict = _render(tmp_path, report, fail_on=["violation", "unknown"])["summary"]

        assert default["status"] == "pass"
        assert strict["fail_on"] == ["violation", "unknown"]
        assert strict["status"] == "fail"

    def test_dependencies_grouped_by_scope(self, tmp_path: Path, sample_report: Report) -> None:
        """Test dependency order follows scope grouping and coordinates."""
        deps = _render(tmp_path, sample_report)["dependencies"]

        assert [(d["scope"], d["name"]) for d in deps] == [
            ("runtime", "bar"),
            ("runtime", "dual"),
            ("runtime", "foo"),
            ("runtime", "readline"),
            ("Front End", "react"),
        ]

    def test_dependency_entry(self, tmp_path: Path, sample_report: Report) -> None:
        """Test the fields of one dependency entry."""
        deps = _render(tmp_path, sample_report)["dependencies"]
        foo = next(d for d in deps if d["name"] == "foo")
        readline = next(d for d in deps if d["name"] == "readline")

        assert foo["licenses"] == [
            {"id": "MIT", "name": "MIT License", "url": "https://opensource.org/licenses/MIT"}
        ]
        assert foo["raw_licenses"] == ["The MIT License"]
        assert foo["verdict"] == "allowed"
        assert foo["reason"] is None
        assert foo["override"] is None
        assert foo["origin"] == "local"
        assert readline["verdict"] == "violation"
        assert readline["reason"] == "License 'GPL-3.0-only' not in allowed list"

    def test_one_license_per_module(self, tmp_path: Path, sample_report: Report) -> None:
        """Test that only the first license is emitted when requested."""
        deps = _render(tmp_path, sample_report, one_license_per_module=True)["dependencies"]
        dual = next(d for d in deps if d["name"] == "dual")

        assert [lic["id"] for lic in dual["licenses"]] == ["MIT"]
        assert dual["raw_licenses"] == ["MIT", "Apache-2.0"]

    def test_all_licenses_by_default(self, tmp_path: Path, sample_report: Report) -> None:
        """Test that multi-licensed modules list every license by default."""
        deps = _render(tmp_path, sample_report)["dependencies"]
        dual = next(d for d in deps if d["name"] == "dual")

        assert [lic["id"] for lic in dual["licenses"]] == ["MIT", "Apache-2.0"]
        assert dual["origin"] == "merged"
        assert dual["import_source"] == "Front End"

    def test_write_produces_valid_json(self, tmp_path: Path, sample_report: Report) -> None:
        """Test that the written file parses as JSON."""
        output = tmp_path / "reports" / "index.json"

        artifact = JsonReportRenderer(output).write(sample_report)

        assert artifact.renderer == "json"
        assert json.loads(output.read_text())["summary"]["total_dependencies"] == 5
