"""Base renderer interface."""
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import structlog

from license_report.exceptions import RenderError
from license_report.models.report import Artifact, Report

logger = structlog.get_logger("renderer")


class ReportRenderer(ABC):
    """Abstract base class for report renderers.

    Renderers are pure consumers of a Report: ``render`` builds the document
    text and ``write`` stores it at the renderer's own output path.
    """

    name: str = "renderer"

    def __init__(self, output_path: Path) -> None:
        self.output_path = output_path

    @abstractmethod
    def render(self, report: Report) -> str:
        """Build the report document.

        Raises:
            RenderError: If the document cannot be produced.
        """

    def write(self, report: Report) -> Artifact:
        """Render the report and write it to the output path.

        Args:
            report: The report to render.

        Returns:
            Artifact describing the written file.

        Raises:
            RenderError: If rendering fails or the file cannot be written.
        """
        content = self.render(report)
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self.output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise RenderError(f"Cannot write to file '{self.output_path}': {e}") from e

        logger.info("Report written", renderer=self.name, path=str(self.output_path))
        return Artifact(
            renderer=self.name,
            path=str(self.output_path),
            size_bytes=len(content.encode("utf-8")),
        )
