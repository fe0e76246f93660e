"""JSON external report importer."""
from __future__ import annotations

import json
from collections.abc import Iterator
from typing import IO, Any, Optional

from license_report.exceptions import ReportImportError
from license_report.importers.base import BaseImporter, RawRecord


def _license_strings(record: dict[str, Any]) -> list[str]:
    """Collect license strings from the supported record keys."""
    values: list[Any] = []
    for key in ("licenses", "moduleLicenses"):
        found = record.get(key)
        if isinstance(found, list):
            values.extend(found)
    for key in ("license", "moduleLicense"):
        if key in record:
            values.append(record[key])

    strings: list[str] = []
    for value in values:
        if isinstance(value, dict):
            value = value.get("moduleLicense") or value.get("name")
        if isinstance(value, str) and value.strip():
            strings.append(value)
    return strings


def _string_field(record: dict[str, Any], key: str) -> Optional[str]:
    value = record.get(key)
    return value if isinstance(value, str) and value else None


class JsonReportImporter(BaseImporter):
    """Import dependency records from a JSON report.

    The document is a list of records or an object with a ``dependencies``
    list. Records use ``group``/``name``/``version``/``licenses`` (or a
    single ``license``), optional ``url`` and ``scope``. Records written by
    the Gradle dependency-license-report JSON renderer (``moduleName`` as
    ``group:name``, ``moduleVersion``, ``moduleLicense(s)``, ``moduleUrl``)
    are accepted as well.
    """

    def _parse_document(self, stream: IO[bytes]) -> Any:
        try:
            return json.load(stream)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ReportImportError(
                f"Invalid JSON in report '{self.name}' ({self.path}): {e}"
            ) from e

    def _iter_records(self, document: Any) -> Iterator[Optional[RawRecord]]:
        if isinstance(document, dict):
            document = document.get("dependencies")
        if not isinstance(document, list):
            raise ReportImportError(
                f"Report '{self.name}' ({self.path}) has no dependency list"
            )

        for item in document:
            if not isinstance(item, dict):
                yield None
                continue

            group = _string_field(item, "group")
            name = _string_field(item, "name")
            module_name = _string_field(item, "moduleName")
            if module_name and ":" in module_name and not (group or name):
                group, name = module_name.split(":", 1)

            yield RawRecord(
                group=group,
                name=name,
                version=_string_field(item, "version") or _string_field(item, "moduleVersion"),
                licenses=_license_strings(item),
                url=_string_field(item, "url") or _string_field(item, "moduleUrl"),
                scope=_string_field(item, "scope"),
            )
