"""License analysis logic for license-report."""
from license_report.analysis.filtering import (
    DependencyListFilter,
    ExcludeWithoutArtifactsFilter,
    FilterPredicate,
    FilterResult,
    ScopeFilter,
    apply_filters,
    build_filters,
    expand_scopes,
    filter_dependencies,
)
from license_report.analysis.merge import merge
from license_report.analysis.normalizer import normalize, normalize_text
from license_report.analysis.policy import evaluate, evaluate_all
from license_report.analysis.registry import (
    DEFAULT_ALIASES,
    LICENSE_REGISTRY,
    build_alias_table,
)

__all__ = [
    "DEFAULT_ALIASES",
    "DependencyListFilter",
    "ExcludeWithoutArtifactsFilter",
    "FilterPredicate",
    "FilterResult",
    "LICENSE_REGISTRY",
    "ScopeFilter",
    "apply_filters",
    "build_alias_table",
    "build_filters",
    "evaluate",
    "evaluate_all",
    "expand_scopes",
    "filter_dependencies",
    "merge",
    "normalize",
    "normalize_text",
]
