"""Base importer interface for external dependency reports."""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path
from typing import IO, Any, NamedTuple, Optional

import structlog

from license_report.constants import UNSPECIFIED_VERSION
from license_report.exceptions import ReportImportError
from license_report.models.dependency import Dependency, Origin

logger = structlog.get_logger("importer")


class ImportResult(NamedTuple):
    """Result of reading one external report.

    Attributes:
        dependencies: Records that carried the required identity fields.
        skipped: Number of malformed records that were skipped.
    """

    dependencies: list[Dependency]
    skipped: int


class RawRecord(NamedTuple):
    """Fields extracted from one record of an external report."""

    group: Optional[str]
    name: Optional[str]
    version: Optional[str]
    licenses: list[str]
    url: Optional[str] = None
    scope: Optional[str] = None


class BaseImporter(ABC):
    """Abstract base class for external report importers.

    Subclasses parse a document from an open file and yield raw records;
    this class owns opening and closing the file and turning records into
    dependencies, skipping and counting malformed ones.
    """

    def __init__(self, name: str, path: Path) -> None:
        """Initialize the importer.

        Args:
            name: Display name of the imported report, e.g. "Front End".
            path: Path of the report file.
        """
        self.name = name
        self.path = path

    @abstractmethod
    def _parse_document(self, stream: IO[bytes]) -> Any:
        """Parse the whole report document.

        Raises:
            ReportImportError: If the document is not well-formed.
        """

    @abstractmethod
    def _iter_records(self, document: Any) -> Iterator[Optional[RawRecord]]:
        """Yield one raw record per entry; None for entries of the wrong shape."""

    def load(self) -> ImportResult:
        """Read the report file and convert its records.

        Returns:
            ImportResult with valid dependencies and the skipped count.

        Raises:
            ReportImportError: If the file cannot be opened or parsed.
        """
        try:
            with self.path.open("rb") as stream:
                document = self._parse_document(stream)
        except OSError as e:
            raise ReportImportError(
                f"Cannot read report '{self.name}' from '{self.path}': {e}"
            ) from e

        dependencies: list[Dependency] = []
        skipped = 0
        for index, record in enumerate(self._iter_records(document)):
            reason = self._missing_fields(record)
            if record is None or reason is not None:
                skipped += 1
                logger.warning(
                    "Skipping malformed record",
                    importer=self.name,
                    index=index,
                    reason=reason,
                )
                continue
            dependencies.append(self._to_dependency(record))

        logger.info(
            "Imported external report",
            importer=self.name,
            path=str(self.path),
            records=len(dependencies),
            skipped=skipped,
        )
        return ImportResult(dependencies=dependencies, skipped=skipped)

    @staticmethod
    def _missing_fields(record: Optional[RawRecord]) -> Optional[str]:
        if record is None:
            return "unexpected record structure"
        if not record.group:
            return "missing group"
        if not record.name:
            return "missing name"
        if not any(text.strip() for text in record.licenses):
            return "no license"
        return None

    def _to_dependency(self, record: RawRecord) -> Dependency:
        return Dependency(
            group=record.group or "",
            name=record.name or "",
            version=record.version or UNSPECIFIED_VERSION,
            scope=record.scope or self.name,
            licenses=tuple(text.strip() for text in record.licenses if text.strip()),
            url=record.url,
            origin=Origin.IMPORTED_ONLY,
            import_source=self.name,
        )
