"""Default configuration values for license-report."""

from __future__ import annotations

from license_report.models.config import ReportConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".license-report.yaml", ".license-report.yml"]


def get_default_config() -> ReportConfig:
    """Get the default configuration.

    Returns:
        ReportConfig with all defaults (runtime scope, one JSON renderer).
    """
    return ReportConfig()
