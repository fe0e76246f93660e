"""Tests for terminal formatter."""

from io import StringIO

from rich.console import Console

from license_report.models.report import (
    Artifact,
    DispatchResult,
    RendererFailure,
    Report,
    ReportMetadata,
    Verbosity,
)
from license_report.output.terminal import TerminalFormatter


def _format(report: Report, verbosity: Verbosity = Verbosity.NORMAL) -> str:
    string_io = StringIO()
    console = Console(file=string_io, width=200)
    TerminalFormatter(console=console, verbosity=verbosity).format_report(report)
    return string_io.getvalue()


class TestTerminalFormatter:
    """Tests for TerminalFormatter."""

    def test_executive_summary(self, sample_report: Report) -> None:
        """Test that the summary panel shows counts and status."""
        output = _format(sample_report)

        assert "EXECUTIVE SUMMARY" in output
        assert "Project: Backend" in output
        assert "Total Dependencies: 5" in output
        assert "Violations: 1" in output
        assert "Skipped Imported Records: 1" in output
        assert "Status: VIOLATIONS FOUND" in output
        assert "NOT LEGAL ADVICE" in output

    def test_lists_problems(self, sample_report: Report) -> None:
        """Test that violations and unknowns are listed with reasons."""
        output = _format(sample_report)

        assert "Problems (2)" in output
        assert "org.gnu:readline:8.0 (runtime): License 'GPL-3.0-only' not in allowed list" in output
        assert "org.example:bar:2.0 (runtime): No license declared" in output

    def test_normal_hides_scope_tables(self, sample_report: Report) -> None:
        """Test that per-scope tables need verbose output."""
        output = _format(sample_report)

        assert "Scope: runtime" not in output
        assert "Warnings" not in output

    def test_verbose_shows_scope_tables_and_warnings(self, sample_report: Report) -> None:
        """Test verbose output."""
        output = _format(sample_report, Verbosity.VERBOSE)

        assert "Scope: runtime" in output
        assert "Scope: Front End" in output
        assert "npm:react" in output
        assert "imported-only (Front End)" in output
        assert "Warnings" in output
        assert "1 malformed record(s) skipped in report 'Front End'" in output

    def test_quiet_violations(self, sample_report: Report) -> None:
        """Test quiet output lists only violations."""
        output = _format(sample_report, Verbosity.QUIET)

        assert "VIOLATIONS FOUND - 1 of 5 dependencies" in output
        assert "org.gnu:readline:8.0" in output
        assert "EXECUTIVE SUMMARY" not in output

    def test_quiet_pass(self) -> None:
        """Test quiet output for a clean run."""
        report = Report(metadata=ReportMetadata(project_name="P", tool_version="0.1.0"))

        output = _format(report, Verbosity.QUIET)

        assert output.strip() == "PASS - 0 dependencies checked"

    def test_empty_report(self) -> None:
        """Test the message for a report without dependencies."""
        report = Report(metadata=ReportMetadata(project_name="P", tool_version="0.1.0"))

        output = _format(report)

        assert "No dependencies reported" in output
        assert "Status: PASS" in output

    def test_markup_in_data_is_not_interpreted(self) -> None:
        """Test that project names are printed literally."""
        report = Report(metadata=ReportMetadata(project_name="[red]x[/red]", tool_version="0"))

        output = _format(report)

        assert "Project: [red]x[/red]" in output


class TestFormatDispatch:
    """Tests for TerminalFormatter.format_dispatch."""

    def _dispatch(self) -> DispatchResult:
        return DispatchResult(
            artifacts=(Artifact(renderer="json", path="/out/index.json", size_bytes=10),),
            failures=(
                RendererFailure(
                    renderer="markdown", path="/out/report.md", error="Cannot write to file"
                ),
            ),
        )

    def test_reports_artifacts_and_failures(self) -> None:
        """Test that written files and failures are shown."""
        string_io = StringIO()
        formatter = TerminalFormatter(console=Console(file=string_io, width=200))

        formatter.format_dispatch(self._dispatch())

        output = string_io.getvalue()
        assert "Wrote json report: /out/index.json" in output
        assert "Renderer 'markdown' failed: Cannot write to file" in output

    def test_quiet_shows_only_failures(self) -> None:
        """Test that quiet output omits written artifacts."""
        string_io = StringIO()
        formatter = TerminalFormatter(
            console=Console(file=string_io, width=200), verbosity=Verbosity.QUIET
        )

        formatter.format_dispatch(self._dispatch())

        output = string_io.getvalue()
        assert "Wrote" not in output
        assert "Renderer 'markdown' failed" in output
