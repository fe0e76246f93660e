"""Configuration handling for license-report."""
from __future__ import annotations

from license_report.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_report.config.loader import (
    find_config_file,
    load_config,
    load_config_file,
)
from license_report.config.policy_loader import load_policy, load_policy_file
from license_report.models.config import ReportConfig

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "ReportConfig",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
    "load_policy",
    "load_policy_file",
]
