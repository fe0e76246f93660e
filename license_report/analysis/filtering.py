"""Dependency filter chain."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, Sequence
from fnmatch import fnmatchcase
from typing import NamedTuple, Optional

import structlog

from license_report.models.config import (
    DependencyListFilterConfig,
    ExcludeWithoutArtifactsFilterConfig,
    FilterConfig,
)
from license_report.models.dependency import Dependency

logger = structlog.get_logger("filtering")


class FilterPredicate(ABC):
    """Capability deciding whether a dependency stays in the report.

    Predicates are independent and side-effect free; they never modify the
    dependencies they inspect.
    """

    name: str = "filter"

    @abstractmethod
    def accept(self, dep: Dependency) -> bool:
        """Return True to keep the dependency."""


class ExcludeWithoutArtifactsFilter(FilterPredicate):
    """Drop modules that ship no artifact, such as platforms and BOMs."""

    name = "exclude-without-artifacts"

    def accept(self, dep: Dependency) -> bool:
        return dep.has_artifact


class DependencyListFilter(FilterPredicate):
    """Custom allow/deny list of module patterns.

    Patterns are shell-style globs matched case-sensitively against
    ``group:name`` and ``group:name:version``. Deny wins over allow.
    """

    name = "dependency-list"

    def __init__(
        self,
        allow: Optional[Sequence[str]] = None,
        deny: Optional[Sequence[str]] = None,
    ) -> None:
        self._allow = tuple(allow) if allow is not None else None
        self._deny = tuple(deny or ())

    @staticmethod
    def _matches(dep: Dependency, patterns: Iterable[str]) -> bool:
        return any(
            fnmatchcase(dep.module_id, pattern) or fnmatchcase(dep.coordinates, pattern)
            for pattern in patterns
        )

    def accept(self, dep: Dependency) -> bool:
        if self._matches(dep, self._deny):
            return False
        if self._allow is None:
            return True
        return self._matches(dep, self._allow)


def expand_scopes(
    scopes: Iterable[str], extends: Optional[Mapping[str, Sequence[str]]] = None
) -> list[str]:
    """Expand requested scopes through their inheritance chain.

    Keeps adding extended scopes until the set stops growing, so cycles
    terminate.

    Args:
        scopes: Requested scope names.
        extends: Scope name to the scopes it extends.

    Returns:
        Requested scopes followed by inherited ones, without duplicates.
    """
    expanded = list(dict.fromkeys(scopes))
    extends = extends or {}
    index = 0
    while index < len(expanded):
        for parent in extends.get(expanded[index], ()):
            if parent not in expanded:
                expanded.append(parent)
        index += 1
    return expanded


class ScopeFilter(FilterPredicate):
    """Keep only dependencies in the requested scopes (with inheritance)."""

    name = "scope"

    def __init__(
        self,
        scopes: Iterable[str],
        extends: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        self.scopes = expand_scopes(scopes, extends)
        self._scope_set = frozenset(self.scopes)

    def accept(self, dep: Dependency) -> bool:
        return dep.scope in self._scope_set


class FilterResult(NamedTuple):
    """Result of running the filter chain.

    Attributes:
        dependencies: Surviving dependencies, in input order.
        excluded_count: Number of dependencies removed.
        excluded: (coordinates, filter name) for each removed dependency.
    """

    dependencies: list[Dependency]
    excluded_count: int
    excluded: list[tuple[str, str]]


def filter_dependencies(
    deps: Sequence[Dependency],
    filters: Sequence[FilterPredicate],
) -> FilterResult:
    """Run dependencies through the filters in declared order.

    Args:
        deps: Dependencies to filter.
        filters: Ordered filter chain.

    Returns:
        FilterResult with survivors and a record of what each filter removed.
        An empty chain returns every dependency.
    """
    if not filters:
        return FilterResult(dependencies=list(deps), excluded_count=0, excluded=[])

    kept: list[Dependency] = []
    excluded: list[tuple[str, str]] = []
    for dep in deps:
        rejected_by = next((f.name for f in filters if not f.accept(dep)), None)
        if rejected_by is None:
            kept.append(dep)
        else:
            excluded.append((dep.coordinates, rejected_by))
            logger.debug("Dependency filtered", dependency=dep.coordinates, filter=rejected_by)

    return FilterResult(dependencies=kept, excluded_count=len(excluded), excluded=excluded)


def apply_filters(
    deps: Sequence[Dependency],
    filters: Sequence[FilterPredicate],
) -> list[Dependency]:
    """Return the dependencies accepted by every filter, unchanged."""
    return filter_dependencies(deps, filters).dependencies


def build_filters(configs: Sequence[FilterConfig]) -> list[FilterPredicate]:
    """Create filter predicates from their typed configuration.

    Args:
        configs: Filter configurations in declared order.

    Returns:
        Filter predicates in the same order.
    """
    filters: list[FilterPredicate] = []
    for config in configs:
        if isinstance(config, ExcludeWithoutArtifactsFilterConfig):
            filters.append(ExcludeWithoutArtifactsFilter())
        elif isinstance(config, DependencyListFilterConfig):
            filters.append(DependencyListFilter(allow=config.allow, deny=config.deny))
        else:  # pragma: no cover - guarded by the discriminated union
            raise TypeError(f"Unsupported filter configuration: {config!r}")
    return filters
