"""Configuration file discovery and loading for license-report."""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from license_report.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_report.exceptions import ConfigurationError
from license_report.models.config import ReportConfig


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in the specified directory.

    Searches for `.license-report.yaml` first, then `.license-report.yml`.

    Args:
        start_dir: Directory to search. Defaults to current working directory.

    Returns:
        Path to the configuration file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        config_path = search_dir / name
        if config_path.exists():
            return config_path
    return None


def read_yaml_mapping(path: Path, what: str) -> dict[str, Any] | None:
    """Read a YAML file whose root must be a mapping.

    Args:
        path: File to read.
        what: Description used in error messages ("configuration", "policy").

    Returns:
        The parsed mapping, or None for an empty (or comment-only) file.

    Raises:
        ConfigurationError: If the file cannot be read, is not valid YAML,
            or its root is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read {what} file '{path}': {e}") from e

    if not content.strip():
        return None

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    if data is None:
        return None

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid {what} in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )
    return data


def load_config_file(path: Path) -> ReportConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated ReportConfig instance.

    Raises:
        ConfigurationError: If file cannot be read, has invalid YAML,
            or fails Pydantic validation.
    """
    data = read_yaml_mapping(path, "configuration")
    if data is None:
        return get_default_config()

    try:
        return ReportConfig.model_validate(data)
    except ValidationError as e:
        error_messages = format_validation_errors(e)
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {error_messages}"
        ) from e


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        msg = err["msg"]
        messages.append(f"{loc}: {msg}")
    return "; ".join(messages)


def load_config(config_path: str | None = None) -> tuple[ReportConfig, Path]:
    """Load configuration from file or use defaults.

    If a config_path is provided, loads from that file.
    Otherwise, searches for a configuration file in the current directory.
    If no file is found, returns default configuration.

    Args:
        config_path: Optional path to configuration file.
            If provided, must exist and be valid.

    Returns:
        Tuple of the configuration and the base directory that relative
        paths in it resolve against (the config file's directory, or the
        current working directory when defaults are used).

    Raises:
        ConfigurationError: If the specified config file is invalid,
            or if auto-discovered config file is invalid.
    """
    if config_path is not None:
        # User specified a path - load it (Click validates existence)
        path = Path(config_path)
        return load_config_file(path), path.resolve().parent

    discovered = find_config_file()
    if discovered is not None:
        return load_config_file(discovered), discovered.resolve().parent

    return get_default_config(), Path.cwd()
