"""Markdown output renderer for dependency license reports."""

from license_report.constants import LEGAL_DISCLAIMER
from license_report.models.policy import Verdict
from license_report.models.report import Report
from license_report.output.base import ReportRenderer


def _license_cell(verdict: Verdict) -> str:
    if not verdict.licenses:
        return "⚠️ Unknown"
    parts = []
    for lic in verdict.licenses:
        if lic.is_unknown:
            parts.append(f"⚠️ {lic.name}")
        elif lic.url:
            parts.append(f"[{lic.id}]({lic.url})")
        else:
            parts.append(lic.id)
    return ", ".join(parts)


def _escape(text: str) -> str:
    return text.replace("|", "\\|")


class MarkdownReportRenderer(ReportRenderer):
    """Render a report as Markdown.

    Suitable for legal review and for attaching to release notes.
    """

    name = "markdown"

    def render(self, report: Report) -> str:
        """Format the report as a Markdown string.

        Args:
            report: The report to render.

        Returns:
            Markdown document.
        """
        lines: list[str] = []
        metadata = report.metadata

        lines.append(f"# {metadata.project_name} Third Party Dependency License Report")
        lines.append("")
        timestamp = metadata.generated_at.strftime("%Y-%m-%dT%H:%M:%SZ")
        lines.append(f"*Generated: {timestamp}*")
        lines.append("")

        lines.extend(self._format_executive_summary(report))
        lines.append("")

        lines.extend(self._format_disclaimer())
        lines.append("")

        if report.violations:
            lines.extend(
                self._format_verdicts(
                    "Policy Violations",
                    "violate license policy",
                    report.violations,
                )
            )
            lines.append("")

        if report.unknowns:
            lines.extend(
                self._format_verdicts(
                    "Unknown Licenses",
                    "declare no license",
                    report.unknowns,
                )
            )
            lines.append("")

        for scope, verdicts in report.by_scope().items():
            lines.extend(self._format_scope(scope, verdicts))
            lines.append("")

        if metadata.warnings:
            lines.append("## Warnings")
            lines.append("")
            lines.extend(f"- {warning}" for warning in metadata.warnings)
            lines.append("")

        return "\n".join(lines)

    def _format_executive_summary(self, report: Report) -> list[str]:
        violations = len(report.violations)
        if violations:
            status = "⚠️ VIOLATIONS FOUND"
            message = f"**{violations} dependency(ies) violate license policy**"
        else:
            status = "✅ PASS"
            message = "All dependencies satisfy the license policy"

        return [
            "## Executive Summary",
            "",
            "| Metric | Value |",
            "|--------|-------|",
            f"| Total Dependencies | {report.total_dependencies} |",
            f"| Allowed | {len(report.allowed)} |",
            f"| Violations | {violations} |",
            f"| Unknown | {len(report.unknowns)} |",
            f"| **Status** | **{status}** |",
            "",
            f"> {message}",
        ]

    def _format_disclaimer(self) -> list[str]:
        return [
            "> **NOT LEGAL ADVICE**",
            ">",
            f"> {LEGAL_DISCLAIMER}",
        ]

    def _format_verdicts(
        self, title: str, summary: str, verdicts: list[Verdict]
    ) -> list[str]:
        """Format a section listing verdicts with their reasons.

        Args:
            title: Section heading.
            summary: Text completing "N dependency(ies) ...".
            verdicts: Verdicts to list.

        Returns:
            List of Markdown lines.
        """
        lines = [
            f"## {title}",
            "",
            f"> **{len(verdicts)} dependency(ies) {summary}**",
            "",
            "| Dependency | Version | License | Reason |",
            "|------------|---------|---------|--------|",
        ]
        for verdict in sorted(verdicts, key=lambda v: v.dependency.coordinates.lower()):
            dep = verdict.dependency
            lines.append(
                f"| {dep.module_id} | {dep.version} | {_license_cell(verdict)} | "
                f"{_escape(verdict.reason or '')} |"
            )
        return lines

    def _format_scope(self, scope: str, verdicts: list[Verdict]) -> list[str]:
        lines = [
            f"## Scope: {scope}",
            "",
            "| Group | Name | Version | License | Verdict | Origin |",
            "|-------|------|---------|---------|---------|--------|",
        ]
        for verdict in verdicts:
            dep = verdict.dependency
            origin = dep.origin.value
            if dep.import_source:
                origin += f" ({dep.import_source})"
            lines.append(
                f"| {dep.group} | {dep.name} | {dep.version} | "
                f"{_license_cell(verdict)} | {verdict.outcome.value} | {origin} |"
            )
        return lines
