"""Loader for the resolved dependency list supplied by the build tool."""
from __future__ import annotations

import json
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from license_report.config.loader import format_validation_errors
from license_report.exceptions import ConfigurationError
from license_report.models.dependency import Dependency

_DEPENDENCY_LIST = TypeAdapter(list[Dependency])


def load_resolved_dependencies(path: Path) -> list[Dependency]:
    """Read the resolved dependency list.

    The file holds a JSON list of dependency objects, or an object with a
    ``dependencies`` list. Unlike imported reports this is the run's primary
    input, so any invalid record fails the load.

    Args:
        path: Path to the JSON file.

    Returns:
        Dependencies in file order.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read dependency list '{path}': {e}") from e

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in '{path}': {e}") from e

    if isinstance(data, dict):
        data = data.get("dependencies", [])

    try:
        return _DEPENDENCY_LIST.validate_python(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid dependency list in '{path}': {format_validation_errors(e)}"
        ) from e
