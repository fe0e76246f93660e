"""Report pipeline: resolved dependencies to a policy-annotated report.

Stages run in a fixed order: normalize, filter, import and merge, evaluate,
then renderer dispatch. Each stage consumes the previous stage's output and
never mutates it.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import NamedTuple, Optional

import structlog

from license_report import __version__
from license_report.analysis.filtering import (
    FilterPredicate,
    ScopeFilter,
    build_filters,
    filter_dependencies,
)
from license_report.analysis.merge import merge
from license_report.analysis.normalizer import normalize
from license_report.analysis.policy import evaluate
from license_report.analysis.registry import build_alias_table
from license_report.config.policy_loader import load_policy
from license_report.constants import EXIT_ERROR, EXIT_ISSUES, EXIT_SUCCESS
from license_report.exceptions import PipelineError, ReportImportError
from license_report.importers import BaseImporter, build_importers
from license_report.models.config import ReportConfig
from license_report.models.dependency import Dependency, Origin
from license_report.models.license import AliasTable, CanonicalLicense
from license_report.models.policy import Policy
from license_report.models.report import DispatchResult, Report, ReportMetadata
from license_report.output.dispatch import build_renderers, render

logger = structlog.get_logger("pipeline")


class RunResult(NamedTuple):
    """Outcome of a full pipeline run.

    Attributes:
        report: The policy-annotated report.
        dispatch: Artifacts written and renderer failures.
        exit_code: Process exit code for the run.
    """

    report: Report
    dispatch: DispatchResult
    exit_code: int


def _deduplicate(
    dependencies: Sequence[Dependency],
) -> tuple[list[Dependency], int]:
    """Drop repeated records with the same (group, name, version, scope)."""
    seen: set[tuple[str, str, str, str]] = set()
    unique: list[Dependency] = []
    for dep in dependencies:
        if dep.key in seen:
            continue
        seen.add(dep.key)
        unique.append(dep)
    return unique, len(dependencies) - len(unique)


def build_report(
    dependencies: Sequence[Dependency],
    *,
    table: AliasTable,
    policy: Policy,
    filters: Sequence[FilterPredicate],
    importers: Sequence[BaseImporter],
    project_name: str,
    scopes: Sequence[str],
    scope_extends: Optional[Mapping[str, Sequence[str]]] = None,
    warnings: Optional[Sequence[str]] = None,
) -> Report:
    """Build the report for one run.

    Args:
        dependencies: Resolved dependency list from the build tool.
        table: Alias table for normalization.
        policy: The run's policy.
        filters: Configured filter chain (the scope filter is added first).
        importers: External report importers, in configured order.
        project_name: Name of the reported project.
        scopes: Requested scopes.
        scope_extends: Scope inheritance map.
        warnings: Warnings collected before the pipeline ran.

    Returns:
        The immutable Report.

    Raises:
        PipelineError: If no dependency falls in the requested scopes.
    """
    run_warnings: list[str] = list(warnings or [])

    local, duplicates = _deduplicate(dependencies)
    if duplicates:
        run_warnings.append(f"{duplicates} duplicate dependency record(s) ignored")

    scope_filter = ScopeFilter(scopes, scope_extends)
    if not any(scope_filter.accept(dep) for dep in local):
        raise PipelineError(
            f"No dependencies found in requested scopes: {', '.join(scope_filter.scopes)}"
        )

    normalized: dict[tuple[str, str, str, str], list[CanonicalLicense]] = {
        dep.key: normalize(dep, table) for dep in local
    }

    filtered = filter_dependencies(local, [scope_filter, *filters])
    if filtered.excluded_count:
        run_warnings.append(
            f"{filtered.excluded_count} dependency record(s) excluded by filters"
        )

    imported: list[Dependency] = []
    skipped_records = 0
    failed_importers = 0
    for importer in importers:
        try:
            result = importer.load()
        except ReportImportError as e:
            failed_importers += 1
            run_warnings.append(str(e))
            logger.warning("Importer failed", importer=importer.name, error=str(e))
            continue
        imported.extend(result.dependencies)
        if result.skipped:
            skipped_records += result.skipped
            run_warnings.append(
                f"{result.skipped} malformed record(s) skipped in report '{importer.name}'"
            )

    merged = merge(filtered.dependencies, imported)

    verdicts = []
    unrecognized = 0
    for dep in merged:
        if dep.origin == Origin.LOCAL:
            licenses = normalized[dep.key]
        else:
            licenses = normalize(dep, table)
        unrecognized += sum(1 for lic in licenses if lic.is_unknown)
        verdicts.append(evaluate(dep, licenses, policy))

    if unrecognized:
        run_warnings.append(f"{unrecognized} license string(s) matched no known license")

    metadata = ReportMetadata(
        project_name=project_name,
        tool_version=__version__,
        requested_scopes=tuple(scope_filter.scopes),
        warnings=tuple(run_warnings),
        filtered_dependencies=filtered.excluded_count,
        duplicate_dependencies=duplicates,
        skipped_import_records=skipped_records,
        failed_importers=failed_importers,
        unrecognized_licenses=unrecognized,
    )
    report = Report(metadata=metadata, verdicts=tuple(verdicts))
    logger.info(
        "Report built",
        dependencies=report.total_dependencies,
        violations=len(report.violations),
        unknown=len(report.unknowns),
    )
    return report


def determine_exit_code(
    report: Report,
    dispatch: DispatchResult,
    fail_on: Sequence[str],
) -> int:
    """Map the run outcome to a process exit code.

    Args:
        report: The built report.
        dispatch: Renderer dispatch result.
        fail_on: Verdict outcomes that fail the run.

    Returns:
        EXIT_ERROR if any renderer failed, EXIT_ISSUES if the threshold was
        reached, EXIT_SUCCESS otherwise.
    """
    if dispatch.has_failures:
        return EXIT_ERROR
    if report.exceeds_threshold(fail_on):
        return EXIT_ISSUES
    return EXIT_SUCCESS


def run(
    config: ReportConfig,
    dependencies: Sequence[Dependency],
    base_dir: Path,
    parallel: Optional[bool] = None,
) -> RunResult:
    """Run the full pipeline and render the report.

    Args:
        config: Validated run configuration.
        dependencies: Resolved dependency list.
        base_dir: Directory relative paths in the configuration resolve against.
        parallel: Override for ``config.parallel_renderers``.

    Returns:
        RunResult with the report, dispatch result and exit code.

    Raises:
        ConfigurationError: If aliases or the policy file are invalid.
        PolicyFileError: If a required policy file is missing.
        PipelineError: If no dependency falls in the requested scopes.
    """
    table = build_alias_table(
        extra_aliases=config.aliases,
        extra_licenses=config.licenses,
        module_overrides=config.license_overrides,
    )
    policy, policy_warnings = load_policy(
        config.policy_file,
        base_dir,
        required=config.policy_required,
        table=table,
    )

    report = build_report(
        dependencies,
        table=table,
        policy=policy,
        filters=build_filters(config.filters),
        importers=build_importers(config.importers, base_dir),
        project_name=config.project_name,
        scopes=config.scopes,
        scope_extends=config.scope_extends,
        warnings=policy_warnings,
    )

    if parallel is None:
        parallel = config.parallel_renderers
    renderers = build_renderers(config.renderers, base_dir, config.fail_on)
    dispatch = render(report, renderers, parallel=parallel)

    return RunResult(
        report=report,
        dispatch=dispatch,
        exit_code=determine_exit_code(report, dispatch, config.fail_on),
    )
