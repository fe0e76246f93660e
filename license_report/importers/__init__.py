"""External report importers for license-report."""
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from license_report.importers.base import BaseImporter, ImportResult, RawRecord
from license_report.importers.json_importer import JsonReportImporter
from license_report.importers.resolved import load_resolved_dependencies
from license_report.importers.xml_importer import XmlReportImporter
from license_report.models.config import (
    ImporterConfig,
    JsonImporterConfig,
    XmlImporterConfig,
)


def build_importers(configs: Sequence[ImporterConfig], base_dir: Path) -> list[BaseImporter]:
    """Create importers from their typed configuration.

    Args:
        configs: Importer configurations.
        base_dir: Directory relative report paths resolve against.

    Returns:
        Importers in configured order.
    """
    importers: list[BaseImporter] = []
    for config in configs:
        path = Path(config.path)
        if not path.is_absolute():
            path = base_dir / path
        if isinstance(config, JsonImporterConfig):
            importers.append(JsonReportImporter(config.name, path))
        elif isinstance(config, XmlImporterConfig):
            importers.append(XmlReportImporter(config.name, path))
        else:  # pragma: no cover - guarded by the discriminated union
            raise TypeError(f"Unsupported importer configuration: {config!r}")
    return importers


__all__ = [
    "BaseImporter",
    "ImportResult",
    "JsonReportImporter",
    "RawRecord",
    "XmlReportImporter",
    "build_importers",
    "load_resolved_dependencies",
]
