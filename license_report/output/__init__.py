"""Output renderers for license-report."""

from license_report.output.base import ReportRenderer
from license_report.output.dispatch import build_renderers, render
from license_report.output.inventory_html import InventoryHtmlRenderer
from license_report.output.json_report import JsonReportRenderer
from license_report.output.markdown import MarkdownReportRenderer
from license_report.output.terminal import TerminalFormatter

__all__ = [
    "InventoryHtmlRenderer",
    "JsonReportRenderer",
    "MarkdownReportRenderer",
    "ReportRenderer",
    "TerminalFormatter",
    "build_renderers",
    "render",
]
