"""Pydantic data models for license-report."""

from license_report.models.config import (
    LicenseEntry,
    LicenseOverride,
    ReportConfig,
)
from license_report.models.dependency import Dependency, Origin
from license_report.models.license import (
    UNKNOWN_LICENSE_ID,
    AliasTable,
    CanonicalLicense,
)
from license_report.models.policy import (
    Decision,
    ModuleLicenseAllowance,
    Policy,
    PolicyOverride,
    Verdict,
    VerdictOutcome,
)
from license_report.models.report import (
    Artifact,
    DispatchResult,
    RendererFailure,
    Report,
    ReportMetadata,
    Verbosity,
)

__all__ = [
    "UNKNOWN_LICENSE_ID",
    "AliasTable",
    "Artifact",
    "CanonicalLicense",
    "Decision",
    "Dependency",
    "DispatchResult",
    "LicenseEntry",
    "LicenseOverride",
    "ModuleLicenseAllowance",
    "Origin",
    "Policy",
    "PolicyOverride",
    "RendererFailure",
    "Report",
    "ReportConfig",
    "ReportMetadata",
    "Verdict",
    "VerdictOutcome",
    "Verbosity",
]
