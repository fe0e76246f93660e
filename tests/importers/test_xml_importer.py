"""Tests for the XML external report importer."""
from __future__ import annotations

from pathlib import Path

import pytest

from license_report.exceptions import ReportImportError
from license_report.importers.xml_importer import XmlReportImporter
from license_report.models.dependency import Origin

FRONTEND_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<dependencies>
  <dependency group="npm" name="react" version="18.2.0" url="https://react.dev">
    <license>MIT</license>
  </dependency>
  <dependency group="npm" name="dual" version="1.0.0" scope="bundle">
    <license name="Apache-2.0"/>
    <license>  BSD-3-Clause  </license>
  </dependency>
  <dependency name="orphan" version="0.1">
    <license>MIT</license>
  </dependency>
  <dependency group="npm" name="nolicense" version="2.0"/>
</dependencies>
"""


class TestXmlReportImporter:
    """Tests for XmlReportImporter."""

    def test_reads_records(self, tmp_path: Path) -> None:
        """Test reading dependency elements and their licenses."""
        path = tmp_path / "frontend.xml"
        path.write_text(FRONTEND_XML)

        result = XmlReportImporter("Front End", path).load()

        react, dual = result.dependencies
        assert react.coordinates == "npm:react:18.2.0"
        assert react.licenses == ("MIT",)
        assert react.url == "https://react.dev"
        assert react.scope == "Front End"
        assert react.origin == Origin.IMPORTED_ONLY
        assert dual.licenses == ("Apache-2.0", "BSD-3-Clause")
        assert dual.scope == "bundle"

    def test_malformed_records_counted(self, tmp_path: Path) -> None:
        """Test that records without group or license are skipped."""
        path = tmp_path / "frontend.xml"
        path.write_text(FRONTEND_XML)

        result = XmlReportImporter("Front End", path).load()

        assert result.skipped == 2

    def test_invalid_xml_raises(self, tmp_path: Path) -> None:
        """Test that malformed XML raises ReportImportError."""
        path = tmp_path / "frontend.xml"
        path.write_text("<dependencies><dependency>")

        with pytest.raises(ReportImportError, match="Invalid XML"):
            XmlReportImporter("Front End", path).load()

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Test that a missing report raises ReportImportError."""
        with pytest.raises(ReportImportError, match="Cannot read report"):
            XmlReportImporter("Front End", tmp_path / "missing.xml").load()

    def test_namespaced_document(self, tmp_path: Path) -> None:
        """Test that a report with a default namespace imports its records."""
        path = tmp_path / "frontend.xml"
        path.write_text(
            '<dependencies xmlns="urn:example:licenses">'
            '<dependency group="npm" name="react" version="18.2.0">'
            "<license>MIT</license>"
            "</dependency>"
            "</dependencies>"
        )

        result = XmlReportImporter("Front End", path).load()

        (react,) = result.dependencies
        assert react.coordinates == "npm:react:18.2.0"
        assert react.licenses == ("MIT",)
        assert result.skipped == 0
