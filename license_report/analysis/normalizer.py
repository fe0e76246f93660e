"""License normalization: free-text license strings to canonical licenses.

Uses the license-expression library to split SPDX expressions such as
``MIT OR Apache-2.0`` into their individual licenses.
"""
from __future__ import annotations

from typing import Optional

import structlog
from license_expression import (
    ExpressionError,
    LicenseWithExceptionSymbol,
    get_spdx_licensing,
)

from license_report.models.dependency import Dependency
from license_report.models.license import AliasTable, CanonicalLicense

logger = structlog.get_logger("normalizer")

# Initialize SPDX licensing for parsing
_licensing = get_spdx_licensing()


def _lookup(text: str, table: AliasTable) -> Optional[CanonicalLicense]:
    """Exact alias match first, then the case/whitespace-insensitive fallback."""
    return table.lookup_exact(text) or table.lookup_folded(text)


def _with_exception_candidate(
    symbol: LicenseWithExceptionSymbol, table: AliasTable
) -> CanonicalLicense:
    """Resolve a `<license> WITH <exception>` term.

    The whole term is looked up first, then with the license replaced by its
    canonical ID, so that e.g. GPL-2.0 WITH Classpath-exception-2.0 reaches
    the classpath-exception entry. Otherwise the exception is dropped and
    the base license is used.
    """
    license_key = symbol.license_symbol.key
    exception_key = symbol.exception_symbol.key
    whole = f"{license_key} WITH {exception_key}"
    match = _lookup(whole, table)
    if match is not None:
        return match

    base = _lookup(license_key, table)
    if base is None:
        return CanonicalLicense.unknown(whole)
    return _lookup(f"{base.id} WITH {exception_key}", table) or base


def _expression_candidates(
    text: str, table: AliasTable
) -> Optional[list[CanonicalLicense]]:
    """Resolve an SPDX license expression to its member licenses.

    Args:
        text: License string that matched no alias.
        table: Alias table to look the expression's keys up in.

    Returns:
        Candidates for every license key in the expression (unmatched keys
        become Unknown markers), or None if the text is not a valid SPDX
        expression.
    """
    try:
        parsed = _licensing.parse(text, validate=True)
    except ExpressionError:
        return None
    if parsed is None:
        return None

    candidates: list[CanonicalLicense] = []
    for symbol in _licensing.license_symbols(parsed, unique=True, decompose=False):
        if isinstance(symbol, LicenseWithExceptionSymbol):
            candidate = _with_exception_candidate(symbol, table)
        else:
            candidate = _lookup(symbol.key, table) or CanonicalLicense.unknown(symbol.key)
        if candidate not in candidates:
            candidates.append(candidate)
    return candidates or None


def normalize_text(text: str, table: AliasTable) -> list[CanonicalLicense]:
    """Normalize a single free-text license string.

    Args:
        text: Raw license string.
        table: Alias table for the run.

    Returns:
        Canonical candidates; an Unknown marker carrying the text if nothing
        matched; empty list for blank text.
    """
    stripped = text.strip()
    if not stripped:
        return []

    match = _lookup(stripped, table)
    if match is not None:
        return [match]

    candidates = _expression_candidates(stripped, table)
    if candidates is not None:
        return candidates

    return [CanonicalLicense.unknown(stripped)]


def normalize(dep: Dependency, table: AliasTable) -> list[CanonicalLicense]:
    """Map a dependency's declared license strings to canonical licenses.

    Module override rules in the table replace the declared strings
    outright. Otherwise each string is looked up independently and the
    results are de-duplicated in first-seen order. Unmatched strings are
    kept as Unknown markers, never dropped. A dependency without license
    strings yields an empty list.

    Args:
        dep: Dependency to normalize.
        table: Alias table for the run.

    Returns:
        Canonical license candidates for the dependency.
    """
    forced = table.override_for(dep)
    if forced is not None:
        return forced

    results: list[CanonicalLicense] = []
    for raw in dep.licenses:
        for candidate in normalize_text(raw, table):
            if candidate not in results:
                results.append(candidate)

    unmatched = [c.name for c in results if c.is_unknown]
    if unmatched:
        logger.debug(
            "Unrecognized license strings",
            dependency=dep.coordinates,
            licenses=unmatched,
        )
    return results
