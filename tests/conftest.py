"""Shared fixtures for license-report tests."""

from datetime import datetime, timezone

import pytest
from click.testing import CliRunner

from license_report.analysis.policy import evaluate_all
from license_report.analysis.registry import build_alias_table
from license_report.models.dependency import Dependency, Origin
from license_report.models.license import AliasTable
from license_report.models.policy import Policy
from license_report.models.report import Report, ReportMetadata


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def alias_table() -> AliasTable:
    """Provide the bundled alias table without configured extras."""
    return build_alias_table()


@pytest.fixture
def sample_report(alias_table: AliasTable) -> Report:
    """Provide a report with allowed, violating, unknown and imported records."""
    policy = Policy(allowed_licenses=frozenset({"MIT", "Apache-2.0"}))
    dependencies = [
        Dependency(
            group="org.example",
            name="foo",
            version="1.0",
            licenses=("The MIT License",),
            url="https://example.org/foo",
        ),
        Dependency(group="org.example", name="bar", version="2.0"),
        Dependency(group="org.gnu", name="readline", version="8.0", licenses=("GPLv3",)),
        Dependency(
            group="org.example",
            name="dual",
            version="3.0",
            licenses=("MIT", "Apache-2.0"),
            origin=Origin.MERGED,
            import_source="Front End",
        ),
        Dependency(
            group="npm",
            name="react",
            version="18.2.0",
            scope="Front End",
            licenses=("MIT",),
            origin=Origin.IMPORTED_ONLY,
            import_source="Front End",
        ),
    ]
    metadata = ReportMetadata(
        project_name="Backend",
        generated_at=datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc),
        tool_version="0.1.0",
        requested_scopes=("runtime",),
        warnings=("1 malformed record(s) skipped in report 'Front End'",),
        skipped_import_records=1,
    )
    return Report(metadata=metadata, verdicts=tuple(evaluate_all(dependencies, alias_table, policy)))
