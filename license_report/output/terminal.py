"""Terminal output formatter using Rich."""
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from license_report.constants import LEGAL_DISCLAIMER_SHORT
from license_report.models.policy import Verdict, VerdictOutcome
from license_report.models.report import DispatchResult, Report, Verbosity

OUTCOME_STYLE = {
    VerdictOutcome.ALLOWED: "green",
    VerdictOutcome.VIOLATION: "red",
    VerdictOutcome.UNKNOWN: "yellow",
}


class TerminalFormatter:
    """Format reports for terminal display using Rich.

    Shows an executive summary, the per-scope dependency tables and the
    artifacts written by the renderers. Terminal output is not a report
    artifact; it only summarizes the run for the person running it.
    """

    def __init__(
        self,
        console: Optional[Console] = None,
        verbosity: Verbosity = Verbosity.NORMAL,
    ) -> None:
        """Initialize the formatter with a Rich console.

        Args:
            console: Optional Rich Console instance. If not provided,
                a new Console will be created.
            verbosity: Output verbosity level.
        """
        self._console = console if console is not None else Console()
        self._verbosity = verbosity

    def format_report(self, report: Report) -> None:
        """Display the report summary.

        Args:
            report: The report to display.
        """
        if self._verbosity == Verbosity.QUIET:
            self._print_quiet_output(report)
            return

        self._print_executive_summary(report)
        self._print_disclaimer()

        if report.total_dependencies == 0:
            self._console.print("[yellow]No dependencies reported[/yellow]")
            return

        if self._verbosity == Verbosity.VERBOSE:
            for scope, verdicts in report.by_scope().items():
                self._print_scope_table(scope, verdicts)

        problems = report.violations + report.unknowns
        if problems:
            self._print_problems(problems)

        if self._verbosity == Verbosity.VERBOSE and report.metadata.warnings:
            self._console.print("")
            self._console.print("[bold yellow]Warnings[/bold yellow]")
            for warning in report.metadata.warnings:
                self._console.print(f"  - {escape(warning)}")

    def format_dispatch(self, dispatch: DispatchResult) -> None:
        """Display written artifacts and renderer failures.

        Args:
            dispatch: Result of renderer dispatch.
        """
        if self._verbosity != Verbosity.QUIET:
            for artifact in dispatch.artifacts:
                self._console.print(
                    f"[green]Wrote[/green] {artifact.renderer} report: "
                    f"{escape(artifact.path)}"
                )
        for failure in dispatch.failures:
            self._console.print(
                f"[red]Renderer '{failure.renderer}' failed:[/red] {escape(failure.error)}"
            )

    def _print_quiet_output(self, report: Report) -> None:
        if report.violations:
            self._console.print(
                f"[red]VIOLATIONS FOUND[/red] - "
                f"{len(report.violations)} of {report.total_dependencies} dependencies"
            )
            for verdict in report.violations:
                dep = verdict.dependency
                self._console.print(
                    f"  - {dep.coordinates}: [red]{escape(verdict.reason or '')}[/red]"
                )
        else:
            self._console.print(
                f"[green]PASS[/green] - {report.total_dependencies} dependencies checked"
            )

    def _print_disclaimer(self) -> None:
        panel = Panel(
            LEGAL_DISCLAIMER_SHORT,
            title="[bold yellow]NOT LEGAL ADVICE[/bold yellow]",
            border_style="yellow",
        )
        self._console.print(panel)
        self._console.print("")

    def _print_executive_summary(self, report: Report) -> None:
        """Print executive summary panel.

        Args:
            report: The report to summarize.
        """
        metadata = report.metadata
        violations = len(report.violations)
        if violations:
            status = "VIOLATIONS FOUND"
            status_color = "red"
        else:
            status = "PASS"
            status_color = "green"

        summary_lines = [
            f"Project: {escape(metadata.project_name)}",
            f"Scopes: {', '.join(metadata.requested_scopes)}",
            f"Total Dependencies: {report.total_dependencies}",
            f"Allowed: {len(report.allowed)}",
            f"Violations: {violations}",
            f"Unknown: {len(report.unknowns)}",
        ]
        if metadata.filtered_dependencies:
            summary_lines.append(f"Filtered Out: {metadata.filtered_dependencies}")
        if metadata.skipped_import_records:
            summary_lines.append(
                f"Skipped Imported Records: {metadata.skipped_import_records}"
            )
        if metadata.failed_importers:
            summary_lines.append(f"Failed Importers: {metadata.failed_importers}")

        summary_lines.extend(
            [
                "",
                f"Status: [{status_color}]{status}[/{status_color}]",
            ]
        )

        panel = Panel(
            "\n".join(summary_lines),
            title="[bold]EXECUTIVE SUMMARY[/bold]",
            border_style=status_color,
        )
        self._console.print(panel)
        self._console.print("")

    def _print_scope_table(self, scope: str, verdicts: list[Verdict]) -> None:
        table = Table(title=f"Scope: {scope}")
        table.add_column("Dependency", style="cyan", no_wrap=True)
        table.add_column("Version", style="magenta")
        table.add_column("License")
        table.add_column("Verdict")
        table.add_column("Origin")

        for verdict in verdicts:
            dep = verdict.dependency
            style = OUTCOME_STYLE[verdict.outcome]
            licenses = ", ".join(lic.id if not lic.is_unknown else lic.name
                                 for lic in verdict.licenses) or "Unknown"
            origin = dep.origin.value
            if dep.import_source:
                origin += f" ({dep.import_source})"
            table.add_row(
                dep.module_id,
                dep.version,
                escape(licenses),
                f"[{style}]{verdict.outcome.value}[/{style}]",
                escape(origin),
            )
        self._console.print(table)

    def _print_problems(self, problems: list[Verdict]) -> None:
        self._console.print(f"[bold red]Problems ({len(problems)})[/bold red]")
        for verdict in problems:
            dep = verdict.dependency
            style = OUTCOME_STYLE[verdict.outcome]
            self._console.print(
                f"  [{style}]![/{style}] {dep.coordinates} ({dep.scope}): "
                f"{escape(verdict.reason or '')}"
            )
