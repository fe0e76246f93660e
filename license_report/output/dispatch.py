"""Report renderer dispatch.

Runs every configured renderer against the same immutable report. A renderer
that fails with ``RenderError`` is recorded as a failure and does not stop the
others; any other exception is a programming error and propagates.
"""
from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Union

import structlog

from license_report.exceptions import RenderError
from license_report.models.config import (
    InventoryHtmlRendererConfig,
    JsonRendererConfig,
    MarkdownRendererConfig,
    RendererConfig,
)
from license_report.models.report import Artifact, DispatchResult, RendererFailure, Report
from license_report.output.base import ReportRenderer
from license_report.output.inventory_html import InventoryHtmlRenderer
from license_report.output.json_report import JsonReportRenderer
from license_report.output.markdown import MarkdownReportRenderer

logger = structlog.get_logger("dispatch")

_Outcome = Union[Artifact, RendererFailure]


def build_renderers(
    configs: Sequence[RendererConfig],
    base_dir: Path,
    fail_on: Sequence[str] = ("violation",),
) -> list[ReportRenderer]:
    """Create renderers from their typed configuration.

    Args:
        configs: Renderer configurations.
        base_dir: Directory relative output paths resolve against.
        fail_on: Verdict outcomes that fail the run, for renderers that
            report a pass/fail status.

    Returns:
        Renderers in configured order.
    """
    renderers: list[ReportRenderer] = []
    for config in configs:
        output = Path(config.output)
        if not output.is_absolute():
            output = base_dir / output
        if isinstance(config, InventoryHtmlRendererConfig):
            renderers.append(InventoryHtmlRenderer(output, title=config.title))
        elif isinstance(config, JsonRendererConfig):
            renderers.append(
                JsonReportRenderer(
                    output,
                    one_license_per_module=config.one_license_per_module,
                    fail_on=fail_on,
                )
            )
        elif isinstance(config, MarkdownRendererConfig):
            renderers.append(MarkdownReportRenderer(output))
        else:  # pragma: no cover - guarded by the discriminated union
            raise TypeError(f"Unsupported renderer configuration: {config!r}")
    return renderers


def _run_one(renderer: ReportRenderer, report: Report) -> _Outcome:
    try:
        return renderer.write(report)
    except RenderError as e:
        logger.error(
            "Renderer failed",
            renderer=renderer.name,
            path=str(renderer.output_path),
            error=str(e),
        )
        return RendererFailure(
            renderer=renderer.name,
            path=str(renderer.output_path),
            error=str(e),
        )


async def _run_concurrently(
    renderers: Sequence[ReportRenderer], report: Report
) -> list[_Outcome]:
    results = await asyncio.gather(
        *(asyncio.to_thread(_run_one, renderer, report) for renderer in renderers),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return list(results)


def render(
    report: Report,
    renderers: Sequence[ReportRenderer],
    parallel: bool = False,
) -> DispatchResult:
    """Run all renderers against the report.

    Args:
        report: The report to render. Renderers only read it.
        renderers: Renderers to run.
        parallel: If True, run renderers concurrently in worker threads.

    Returns:
        DispatchResult with artifacts and failures, each in renderer order.
    """
    if parallel and len(renderers) > 1:
        outcomes = asyncio.run(_run_concurrently(renderers, report))
    else:
        outcomes = [_run_one(renderer, report) for renderer in renderers]

    return DispatchResult(
        artifacts=tuple(o for o in outcomes if isinstance(o, Artifact)),
        failures=tuple(o for o in outcomes if isinstance(o, RendererFailure)),
    )
