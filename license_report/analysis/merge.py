"""Merging externally imported dependency records into the local set."""
from __future__ import annotations

from collections.abc import Sequence

from license_report.models.dependency import Dependency, Origin


def _union(first: Sequence[str], second: Sequence[str]) -> tuple[str, ...]:
    """Union two license lists, keeping first-seen order."""
    return tuple(dict.fromkeys([*first, *second]))


def merge(
    local: Sequence[Dependency],
    imported: Sequence[Dependency],
) -> list[Dependency]:
    """Merge imported records into the local dependency set.

    Records are matched by (group, name). Matched local records keep their
    identity and gain the imported license strings (union, local first),
    with origin MERGED. Imported records without a local counterpart are
    appended in import order with origin IMPORTED_ONLY. Inputs are never
    modified.

    Swapping the arguments yields the same modules with the same license
    sets. Record count, scopes and provenance follow the first argument,
    whose records are never collapsed.

    Args:
        local: Locally resolved dependencies.
        imported: Dependencies read from external reports.

    Returns:
        The merged dependency list.
    """
    # Collapse imported records sharing a module key first
    imported_by_module: dict[tuple[str, str], Dependency] = {}
    for record in imported:
        existing = imported_by_module.get(record.module_key)
        if existing is None:
            imported_by_module[record.module_key] = record
        else:
            imported_by_module[record.module_key] = existing.model_copy(
                update={"licenses": _union(existing.licenses, record.licenses)}
            )

    matched: set[tuple[str, str]] = set()
    result: list[Dependency] = []
    for dep in local:
        record = imported_by_module.get(dep.module_key)
        if record is None:
            result.append(dep)
            continue
        matched.add(dep.module_key)
        result.append(
            dep.model_copy(
                update={
                    "licenses": _union(dep.licenses, record.licenses),
                    "origin": Origin.MERGED,
                    "import_source": record.import_source,
                    "url": dep.url or record.url,
                }
            )
        )

    for module_key, record in imported_by_module.items():
        if module_key not in matched:
            result.append(record.model_copy(update={"origin": Origin.IMPORTED_ONLY}))

    return result
