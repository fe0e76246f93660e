"""CLI entry point for license-report."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape

from license_report import __version__
from license_report.analysis.normalizer import normalize_text
from license_report.analysis.registry import build_alias_table
from license_report.config import load_config
from license_report.constants import EXIT_ERROR, EXIT_SUCCESS
from license_report.exceptions import LicenseReportError
from license_report.importers import load_resolved_dependencies
from license_report.logging import setup_logging
from license_report.models.report import Verbosity
from license_report.output.terminal import TerminalFormatter
from license_report.pipeline import run

# Module-level console for consistent output
_console = Console()
# Separate console for error output (writes to stderr)
_error_console = Console(stderr=True)

_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """Dependency License Report - inventory and policy-check dependency licenses.

    Normalizes the licenses declared by a project's resolved dependencies,
    merges externally produced reports, checks them against an allow-list
    policy and writes HTML, JSON or Markdown reports.

    \b
    Examples:
        license-report report -d build/dependencies.json
        license-report report -d deps.json -c .license-report.yaml
        license-report report -d deps.json --fail-on violation --fail-on unknown
        license-report normalize "The MIT License" "MIT OR Apache-2.0"
    """
    pass


@main.command()
@click.option(
    "--dependencies",
    "-d",
    "dependencies_path",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Resolved dependency list (JSON) produced by the build tool.",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file.",
)
@click.option(
    "--project-name",
    default=None,
    help="Project name shown in reports (overrides configuration).",
)
@click.option(
    "--fail-on",
    "fail_on",
    type=click.Choice(["violation", "unknown"], case_sensitive=False),
    multiple=True,
    help="Verdict outcome that fails the run; repeatable (overrides configuration).",
)
@click.option(
    "--parallel/--sequential",
    "parallel",
    default=None,
    help="Run renderers concurrently (overrides configuration).",
)
@click.option(
    "--verbose",
    "-v",
    "verbose_flag",
    is_flag=True,
    default=False,
    help="Show per-scope dependency tables and warnings.",
)
@click.option(
    "--quiet",
    "-q",
    "quiet_flag",
    is_flag=True,
    default=False,
    help="Suppress non-essential output.",
)
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    help="Log level for diagnostic output on stderr (default: WARNING).",
)
@click.option(
    "--log-json",
    is_flag=True,
    default=False,
    help="Emit log events as JSON lines.",
)
def report(
    dependencies_path: str,
    config_path: Optional[str],
    project_name: Optional[str],
    fail_on: tuple[str, ...],
    parallel: Optional[bool],
    verbose_flag: bool,
    quiet_flag: bool,
    log_level: str,
    log_json: bool,
) -> None:
    """Build the dependency license report.

    Reads the resolved dependency list, applies filters, imports external
    reports, evaluates the license policy and runs every configured
    renderer.

    \b
    Exit codes:
        0  no verdict reached the failure threshold
        1  violations (or unknowns, with --fail-on unknown) found
        2  fatal error, or a renderer could not write its report
    """
    if verbose_flag and quiet_flag:
        raise click.UsageError("--verbose and --quiet are mutually exclusive.")

    if quiet_flag:
        verbosity = Verbosity.QUIET
    elif verbose_flag:
        verbosity = Verbosity.VERBOSE
    else:
        verbosity = Verbosity.NORMAL

    setup_logging(log_level, json_output=log_json)

    try:
        config, base_dir = load_config(config_path)
        updates: dict[str, object] = {}
        if project_name:
            updates["project_name"] = project_name
        if fail_on:
            updates["fail_on"] = [value.lower() for value in fail_on]
        if updates:
            config = config.model_copy(update=updates)

        dependencies = load_resolved_dependencies(Path(dependencies_path))
        result = run(config, dependencies, base_dir, parallel=parallel)
    except LicenseReportError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    formatter = TerminalFormatter(console=_console, verbosity=verbosity)
    formatter.format_report(result.report)
    formatter.format_dispatch(result.dispatch)
    sys.exit(result.exit_code)


@main.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to configuration file (for configured aliases).",
)
@click.argument("texts", nargs=-1, required=True)
def normalize(config_path: Optional[str], texts: tuple[str, ...]) -> None:
    """Show the canonical license(s) for free-text license strings.

    \b
    Examples:
        license-report normalize "The MIT License"
        license-report normalize "Apache License, Version 2.0" GPLv3
    """
    try:
        config, _ = load_config(config_path)
        table = build_alias_table(
            extra_aliases=config.aliases,
            extra_licenses=config.licenses,
        )
    except LicenseReportError as e:
        _display_error(e)
        sys.exit(EXIT_ERROR)

    for text in texts:
        candidates = normalize_text(text, table)
        if not candidates:
            _console.print(f"{escape(repr(text))} -> [yellow]no license[/yellow]")
            continue
        rendered = ", ".join(
            "[yellow]Unknown[/yellow]" if lic.is_unknown else f"[green]{escape(lic.id)}[/green]"
            for lic in candidates
        )
        _console.print(f"{escape(repr(text))} -> {rendered}")
    sys.exit(EXIT_SUCCESS)


def _display_error(error: LicenseReportError) -> None:
    """Display error message to user.

    All errors are written to stderr for consistent CI/CD behavior.

    Args:
        error: The exception that occurred.
    """
    error_type = type(error).__name__
    _error_console.print(f"[red bold]{escape(f'Error: {error_type}: {error}')}[/red bold]")


if __name__ == "__main__":
    main()
