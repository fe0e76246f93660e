"""Tests for renderer dispatch."""
import json
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from license_report.models.config import (
    InventoryHtmlRendererConfig,
    JsonRendererConfig,
    MarkdownRendererConfig,
)
from license_report.models.report import Report
from license_report.output.base import ReportRenderer
from license_report.output.dispatch import build_renderers, render
from license_report.output.inventory_html import InventoryHtmlRenderer
from license_report.output.json_report import JsonReportRenderer
from license_report.output.markdown import MarkdownReportRenderer


class _BrokenRenderer(ReportRenderer):
    name = "broken"

    def render(self, report: Report) -> str:
        raise ValueError("bug in renderer")


class TestBuildRenderers:
    """Tests for build_renderers function."""

    def test_builds_in_configured_order(self, tmp_path: Path) -> None:
        """Test that each config kind maps to its renderer."""
        renderers = build_renderers(
            [
                InventoryHtmlRendererConfig(output="out/index.html", title="Backend"),
                JsonRendererConfig(output="/abs/index.json", one_license_per_module=True),
                MarkdownRendererConfig(output="out/report.md"),
            ],
            tmp_path,
        )

        html, json_renderer, markdown = renderers
        assert isinstance(html, InventoryHtmlRenderer)
        assert html.title == "Backend"
        assert html.output_path == tmp_path / "out" / "index.html"
        assert isinstance(json_renderer, JsonReportRenderer)
        assert json_renderer.one_license_per_module is True
        assert json_renderer.output_path == Path("/abs/index.json")
        assert json_renderer.fail_on == ("violation",)
        assert isinstance(markdown, MarkdownReportRenderer)

    def test_fail_on_passed_to_json(self, tmp_path: Path) -> None:
        """Test that the run threshold reaches the JSON renderer."""
        (json_renderer,) = build_renderers(
            [JsonRendererConfig(output="index.json")], tmp_path, ["violation", "unknown"]
        )

        assert json_renderer.fail_on == ("violation", "unknown")

    def test_empty_config(self, tmp_path: Path) -> None:
        """Test that no configs yields no renderers."""
        assert build_renderers([], tmp_path) == []


class TestRender:
    """Tests for render function."""

    @pytest.mark.parametrize("parallel", [False, True])
    def test_all_renderers_write(
        self, tmp_path: Path, sample_report: Report, parallel: bool
    ) -> None:
        """Test that every renderer produces its artifact."""
        renderers = [
            InventoryHtmlRenderer(tmp_path / "index.html"),
            JsonReportRenderer(tmp_path / "index.json"),
            MarkdownReportRenderer(tmp_path / "report.md"),
        ]

        result = render(sample_report, renderers, parallel=parallel)

        assert not result.has_failures
        assert [a.renderer for a in result.artifacts] == ["inventory-html", "json", "markdown"]
        assert json.loads((tmp_path / "index.json").read_text())["summary"]["violations"] == 1

    @pytest.mark.parametrize("parallel", [False, True])
    def test_failure_does_not_stop_others(
        self, tmp_path: Path, sample_report: Report, parallel: bool
    ) -> None:
        """Test that one unwritable output is recorded and the rest still run."""
        blocked = tmp_path / "blocked"
        blocked.mkdir()
        renderers = [
            InventoryHtmlRenderer(blocked),
            JsonReportRenderer(tmp_path / "index.json"),
        ]

        with capture_logs() as logs:
            result = render(sample_report, renderers, parallel=parallel)

        assert result.has_failures
        assert len(result.failures) == 1
        failure = result.failures[0]
        assert failure.renderer == "inventory-html"
        assert failure.path == str(blocked)
        assert "Cannot write" in failure.error
        assert [a.renderer for a in result.artifacts] == ["json"]
        assert (tmp_path / "index.json").exists()
        assert any(
            e["event"] == "Renderer failed" and e["log_level"] == "error" for e in logs
        )

    def test_unexpected_errors_propagate(self, tmp_path: Path, sample_report: Report) -> None:
        """Test that non-render errors are not turned into failures."""
        with pytest.raises(ValueError, match="bug in renderer"):
            render(sample_report, [_BrokenRenderer(tmp_path / "x")])

    def test_unexpected_errors_propagate_in_parallel(
        self, tmp_path: Path, sample_report: Report
    ) -> None:
        """Test propagation when renderers run concurrently."""
        renderers = [JsonReportRenderer(tmp_path / "index.json"), _BrokenRenderer(tmp_path / "x")]

        with pytest.raises(ValueError, match="bug in renderer"):
            render(sample_report, renderers, parallel=True)

    def test_no_renderers(self, sample_report: Report) -> None:
        """Test that an empty renderer list yields an empty result."""
        result = render(sample_report, [], parallel=True)

        assert result.artifacts == ()
        assert not result.has_failures
