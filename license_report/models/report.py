"""Report and rendering result models."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from license_report.models.license import UNKNOWN_LICENSE_ID
from license_report.models.policy import Verdict, VerdictOutcome


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Verbosity(Enum):
    """Terminal output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class ReportMetadata(BaseModel):
    """Run metadata attached to a report.

    Every record the run skipped is counted here and described in
    ``warnings``.
    """

    model_config = {"extra": "forbid", "frozen": True}

    project_name: str = Field(description="Name of the reported project")
    generated_at: datetime = Field(
        default_factory=_utcnow,
        description="Generation timestamp (UTC)",
    )
    tool_version: str = Field(description="license-report version")
    requested_scopes: tuple[str, ...] = Field(
        default=(),
        description="Scopes requested for the run, after inheritance expansion",
    )
    warnings: tuple[str, ...] = Field(
        default=(),
        description="Human-readable warnings collected during the run",
    )
    filtered_dependencies: int = Field(
        default=0, ge=0, description="Records removed by the filter chain"
    )
    duplicate_dependencies: int = Field(
        default=0, ge=0, description="Duplicate input records dropped"
    )
    skipped_import_records: int = Field(
        default=0, ge=0, description="Malformed imported records skipped"
    )
    failed_importers: int = Field(
        default=0, ge=0, description="Importers whose file could not be read"
    )
    unrecognized_licenses: int = Field(
        default=0, ge=0, description="License strings that matched no alias"
    )


class Report(BaseModel):
    """Policy-annotated dependency report produced by one run."""

    model_config = {"extra": "forbid", "frozen": True}

    metadata: ReportMetadata = Field(description="Run metadata")
    verdicts: tuple[Verdict, ...] = Field(
        default=(),
        description="One verdict per reported dependency",
    )

    @property
    def total_dependencies(self) -> int:
        return len(self.verdicts)

    @property
    def allowed(self) -> list[Verdict]:
        return self._with_outcome(VerdictOutcome.ALLOWED)

    @property
    def violations(self) -> list[Verdict]:
        return self._with_outcome(VerdictOutcome.VIOLATION)

    @property
    def unknowns(self) -> list[Verdict]:
        return self._with_outcome(VerdictOutcome.UNKNOWN)

    def _with_outcome(self, outcome: VerdictOutcome) -> list[Verdict]:
        return [v for v in self.verdicts if v.outcome == outcome]

    def by_scope(self) -> dict[str, list[Verdict]]:
        """Group verdicts by dependency scope.

        Scopes keep first-seen order; verdicts inside a scope are sorted by
        coordinates (case-insensitive) for deterministic output.

        Returns:
            Dict mapping scope name to its verdicts.
        """
        grouped: dict[str, list[Verdict]] = {}
        for verdict in self.verdicts:
            grouped.setdefault(verdict.dependency.scope, []).append(verdict)
        return {
            scope: sorted(items, key=lambda v: v.dependency.coordinates.lower())
            for scope, items in grouped.items()
        }

    def license_inventory(self) -> dict[str, list[Verdict]]:
        """Group verdicts by canonical license ID.

        A multi-licensed dependency appears under each of its licenses;
        dependencies without licenses are listed under ``Unknown``.

        Returns:
            Dict sorted by license ID, ``Unknown`` last.
        """
        inventory: dict[str, list[Verdict]] = {}
        for verdict in self.verdicts:
            ids = [lic.id for lic in verdict.licenses] or [UNKNOWN_LICENSE_ID]
            for license_id in dict.fromkeys(ids):
                inventory.setdefault(license_id, []).append(verdict)
        return dict(
            sorted(
                inventory.items(),
                key=lambda item: (item[0] == UNKNOWN_LICENSE_ID, item[0].lower()),
            )
        )

    def exceeds_threshold(self, fail_on: Iterable[str]) -> bool:
        """Check whether the run should fail.

        Args:
            fail_on: Outcome names that fail the run ("violation", "unknown").

        Returns:
            True if any verdict has one of the listed outcomes.
        """
        failing = set(fail_on)
        return any(v.outcome.value in failing for v in self.verdicts)


class Artifact(BaseModel):
    """A report file written by a renderer."""

    model_config = {"extra": "forbid", "frozen": True}

    renderer: str = Field(description="Renderer name")
    path: str = Field(description="Path of the written file")
    size_bytes: int = Field(ge=0, description="Size of the written content")


class RendererFailure(BaseModel):
    """A renderer that could not produce its artifact."""

    model_config = {"extra": "forbid", "frozen": True}

    renderer: str = Field(description="Renderer name")
    path: Optional[str] = Field(default=None, description="Intended output path")
    error: str = Field(description="Error message")


class DispatchResult(BaseModel):
    """Aggregated outcome of running all configured renderers."""

    model_config = {"extra": "forbid", "frozen": True}

    artifacts: tuple[Artifact, ...] = Field(default=())
    failures: tuple[RendererFailure, ...] = Field(default=())

    @property
    def has_failures(self) -> bool:
        return len(self.failures) > 0
