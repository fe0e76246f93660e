"""XML external report importer.

Expected layout::

    <dependencies>
      <dependency group="org.example" name="widget" version="1.2.0">
        <license>MIT</license>
        <license name="Apache-2.0" url="https://..."/>
      </dependency>
    </dependencies>

``scope`` and ``url`` attributes on ``<dependency>`` are optional. Elements are
matched by local name, so a document with a default ``xmlns`` namespace is
read the same way.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from typing import IO, Any, Optional

from license_report.exceptions import ReportImportError
from license_report.importers.base import BaseImporter, RawRecord


def _local_name(element: ET.Element) -> str:
    if not isinstance(element.tag, str):
        return ""
    return element.tag.rsplit("}", 1)[-1]


class XmlReportImporter(BaseImporter):
    """Import dependency records from an XML report."""

    def _parse_document(self, stream: IO[bytes]) -> Any:
        try:
            return ET.parse(stream).getroot()
        except ET.ParseError as e:
            raise ReportImportError(
                f"Invalid XML in report '{self.name}' ({self.path}): {e}"
            ) from e

    def _iter_records(self, document: Any) -> Iterator[Optional[RawRecord]]:
        for element in document.iter():
            if _local_name(element) != "dependency":
                continue
            licenses: list[str] = []
            for license_element in element:
                if _local_name(license_element) != "license":
                    continue
                text = license_element.get("name") or (license_element.text or "")
                if text.strip():
                    licenses.append(text.strip())

            yield RawRecord(
                group=element.get("group"),
                name=element.get("name"),
                version=element.get("version"),
                licenses=licenses,
                url=element.get("url"),
                scope=element.get("scope"),
            )
