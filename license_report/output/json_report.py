"""JSON output renderer for dependency license reports."""
import json
from pathlib import Path
from collections.abc import Sequence
from typing import Any

from license_report.constants import LEGAL_DISCLAIMER
from license_report.models.policy import Verdict
from license_report.models.report import Report
from license_report.output.base import ReportRenderer


class JsonReportRenderer(ReportRenderer):
    """Render a report as JSON.

    Provides a machine-readable representation of the policy-annotated
    dependency set for CI/CD integration and downstream tooling.
    """

    name = "json"

    def __init__(
        self,
        output_path: Path,
        one_license_per_module: bool = False,
        fail_on: Sequence[str] = ("violation",),
    ) -> None:
        """Initialize the renderer.

        Args:
            output_path: File the report is written to.
            one_license_per_module: If True, emit only the first canonical
                license of each dependency.
            fail_on: Verdict outcomes that fail the run; decides the
                summary status.
        """
        super().__init__(output_path)
        self.one_license_per_module = one_license_per_module
        self.fail_on = tuple(fail_on)

    def render(self, report: Report) -> str:
        """Format the report as a JSON string.

        Args:
            report: The report to render.

        Returns:
            JSON document with metadata, summary and dependencies.
        """
        output = self._build_output(report)
        return json.dumps(output, indent=2)

    def _build_output(self, report: Report) -> dict[str, Any]:
        return {
            "report_metadata": self._build_report_metadata(report),
            "summary": self._build_summary(report),
            "dependencies": self._build_dependencies(report),
        }

    def _build_report_metadata(self, report: Report) -> dict[str, Any]:
        """Build report metadata section.

        Returns:
            Dictionary with run metadata, skip counters and disclaimer.
        """
        metadata = report.metadata
        return {
            "project_name": metadata.project_name,
            "generated_at": metadata.generated_at.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "tool_version": metadata.tool_version,
            "requested_scopes": list(metadata.requested_scopes),
            "disclaimer": LEGAL_DISCLAIMER,
            "disclaimer_type": "informational",
            "counters": {
                "filtered_dependencies": metadata.filtered_dependencies,
                "duplicate_dependencies": metadata.duplicate_dependencies,
                "skipped_import_records": metadata.skipped_import_records,
                "failed_importers": metadata.failed_importers,
                "unrecognized_licenses": metadata.unrecognized_licenses,
            },
            "warnings": list(metadata.warnings),
        }

    def _build_summary(self, report: Report) -> dict[str, Any]:
        violations = len(report.violations)
        unknowns = len(report.unknowns)
        return {
            "total_dependencies": report.total_dependencies,
            "allowed": len(report.allowed),
            "violations": violations,
            "unknown": unknowns,
            "licenses": {
                license_id: len(verdicts)
                for license_id, verdicts in report.license_inventory().items()
            },
            "fail_on": list(self.fail_on),
            "status": "fail" if report.exceeds_threshold(self.fail_on) else "pass",
        }

    def _build_dependencies(self, report: Report) -> list[dict[str, Any]]:
        """Build dependencies array.

        Args:
            report: The report.

        Returns:
            Dependency dictionaries grouped by scope, sorted by coordinates.
        """
        return [
            self._build_dependency(verdict)
            for verdicts in report.by_scope().values()
            for verdict in verdicts
        ]

    def _build_dependency(self, verdict: Verdict) -> dict[str, Any]:
        dep = verdict.dependency
        licenses = list(verdict.licenses)
        if self.one_license_per_module:
            licenses = licenses[:1]

        return {
            "group": dep.group,
            "name": dep.name,
            "version": dep.version,
            "scope": dep.scope,
            "url": dep.url,
            "licenses": [
                {"id": lic.id, "name": lic.name, "url": lic.url} for lic in licenses
            ],
            "raw_licenses": list(dep.licenses),
            "verdict": verdict.outcome.value,
            "reason": verdict.reason,
            "override": verdict.override.decision.value if verdict.override else None,
            "origin": dep.origin.value,
            "import_source": dep.import_source,
        }
