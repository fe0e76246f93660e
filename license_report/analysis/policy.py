"""License policy evaluation against the allow-list."""
from __future__ import annotations

from collections.abc import Sequence

from license_report.analysis.normalizer import normalize
from license_report.models.dependency import Dependency
from license_report.models.license import AliasTable, CanonicalLicense
from license_report.models.policy import Decision, Policy, Verdict, VerdictOutcome


def _violation_reason(license_: CanonicalLicense) -> str:
    if license_.is_unknown:
        return f"Unrecognized license '{license_.name}'"
    return f"License '{license_.id}' not in allowed list"


def evaluate(
    dep: Dependency,
    licenses: Sequence[CanonicalLicense],
    policy: Policy,
) -> Verdict:
    """Evaluate one dependency against the policy.

    Order of evaluation:
    1. An explicit per-dependency override decides outright.
    2. No licenses resolved -> UNKNOWN.
    3. ALLOWED only if every license candidate is in the allow-set (the
       global list plus module allowances matching the dependency); a
       multi-licensed dependency with one disallowed option is a VIOLATION
       naming the first disallowed license.

    With no allow-list configured, any resolved license is ALLOWED.

    Args:
        dep: The dependency being evaluated.
        licenses: Its normalized license candidates.
        policy: The run's policy.

    Returns:
        Verdict for the dependency.
    """
    candidates = tuple(licenses)

    override = policy.find_override(dep)
    if override is not None:
        outcome = (
            VerdictOutcome.ALLOWED
            if override.decision == Decision.ALLOW
            else VerdictOutcome.VIOLATION
        )
        return Verdict(
            dependency=dep,
            licenses=candidates,
            outcome=outcome,
            reason=override.reason,
            override=override,
        )

    if not candidates:
        return Verdict(
            dependency=dep,
            licenses=candidates,
            outcome=VerdictOutcome.UNKNOWN,
            reason="No license declared",
        )

    allowed = policy.allowed_for(dep)
    if allowed is None:
        return Verdict(dependency=dep, licenses=candidates, outcome=VerdictOutcome.ALLOWED)

    for candidate in candidates:
        if candidate.is_unknown or candidate.id not in allowed:
            return Verdict(
                dependency=dep,
                licenses=candidates,
                outcome=VerdictOutcome.VIOLATION,
                reason=_violation_reason(candidate),
            )

    return Verdict(dependency=dep, licenses=candidates, outcome=VerdictOutcome.ALLOWED)


def evaluate_all(
    deps: Sequence[Dependency],
    table: AliasTable,
    policy: Policy,
) -> list[Verdict]:
    """Normalize and evaluate each dependency.

    Args:
        deps: Dependencies to evaluate.
        table: Alias table for normalization.
        policy: The run's policy.

    Returns:
        One verdict per dependency, in input order.
    """
    return [evaluate(dep, normalize(dep, table), policy) for dep in deps]
