"""Policy and verdict Pydantic models for license-report."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from license_report.models.dependency import Dependency
from license_report.models.license import CanonicalLicense


class Decision(Enum):
    """Explicit per-dependency policy decision."""

    ALLOW = "allow"
    DENY = "deny"


class PolicyOverride(BaseModel):
    """Explicit allow/deny for one module, regardless of its licenses."""

    model_config = {"extra": "forbid", "frozen": True}

    group: str = Field(description="Group coordinate of the module")
    name: str = Field(description="Name of the module")
    version: Optional[str] = Field(
        default=None,
        description="Restrict the override to one version (None = any version)",
    )
    decision: Decision = Field(description="Allow or deny the module")
    reason: str = Field(description="Why the decision was made")

    def matches(self, dependency: Dependency) -> bool:
        """Check whether this override applies to a dependency."""
        if (self.group, self.name) != dependency.module_key:
            return False
        return self.version is None or self.version == dependency.version


class ModuleLicenseAllowance(BaseModel):
    """Licenses allowed for one module only."""

    model_config = {"extra": "forbid", "frozen": True}

    group: str = Field(description="Group coordinate of the module")
    name: str = Field(description="Name of the module")
    version: Optional[str] = Field(
        default=None,
        description="Restrict the allowance to one version (None = any version)",
    )
    licenses: frozenset[str] = Field(description="Canonical license IDs allowed for the module")

    def matches(self, dependency: Dependency) -> bool:
        """Check whether this allowance applies to a dependency."""
        if (self.group, self.name) != dependency.module_key:
            return False
        return self.version is None or self.version == dependency.version


class Policy(BaseModel):
    """Allow-list policy.

    ``allowed_licenses`` of None means no allow-list is configured: every
    dependency with at least one resolved license passes.
    """

    model_config = {"extra": "forbid", "frozen": True}

    allowed_licenses: Optional[frozenset[str]] = Field(
        default=None,
        description="Allowed canonical license IDs",
    )
    overrides: tuple[PolicyOverride, ...] = Field(
        default=(),
        description="Per-dependency decisions, first match wins",
    )
    module_licenses: tuple[ModuleLicenseAllowance, ...] = Field(
        default=(),
        description="Licenses allowed only for specific modules",
    )

    def find_override(self, dependency: Dependency) -> Optional[PolicyOverride]:
        """Return the first override matching the dependency, if any."""
        for override in self.overrides:
            if override.matches(dependency):
                return override
        return None

    def allowed_for(self, dependency: Dependency) -> Optional[frozenset[str]]:
        """Return the license IDs allowed for a dependency.

        The global allow-list plus every module allowance matching the
        dependency. None when no allow-list is configured.
        """
        if self.allowed_licenses is None:
            return None
        allowed = set(self.allowed_licenses)
        for allowance in self.module_licenses:
            if allowance.matches(dependency):
                allowed.update(allowance.licenses)
        return frozenset(allowed)


class VerdictOutcome(Enum):
    """Outcome of evaluating one dependency."""

    ALLOWED = "allowed"
    VIOLATION = "violation"
    UNKNOWN = "unknown"


class Verdict(BaseModel):
    """Policy outcome for one dependency."""

    model_config = {"extra": "forbid", "frozen": True}

    dependency: Dependency = Field(description="The evaluated dependency")
    licenses: tuple[CanonicalLicense, ...] = Field(
        default=(),
        description="Normalized license candidates",
    )
    outcome: VerdictOutcome = Field(description="Allowed, violation or unknown")
    reason: Optional[str] = Field(
        default=None,
        description="Why the dependency is not allowed, or the override reason",
    )
    override: Optional[PolicyOverride] = Field(
        default=None,
        description="The override that decided the verdict, if any",
    )

    @property
    def is_allowed(self) -> bool:
        return self.outcome == VerdictOutcome.ALLOWED

    @property
    def is_violation(self) -> bool:
        return self.outcome == VerdictOutcome.VIOLATION

    @property
    def is_unknown(self) -> bool:
        return self.outcome == VerdictOutcome.UNKNOWN
