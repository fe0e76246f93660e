"""Allow-list policy file loading.

The policy file is JSON (or YAML when its extension is .yaml/.yml)::

    {
      "allowedLicenses": ["MIT", {"moduleLicense": "Apache-2.0"}],
      "overrides": [
        {"group": "org.example", "name": "legacy", "decision": "allow",
         "reason": "Commercial license purchased"}
      ]
    }

``allowedLicenses`` entries may be plain IDs or objects using the
``moduleLicense`` / ``moduleName`` / ``moduleVersion`` keys of the Gradle
dependency-license-report allow-list format. An object naming a module but
no license allows that module outright; an object naming both allows the
license for that module only.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, Field, ValidationError

from license_report.analysis.normalizer import normalize_text
from license_report.config.loader import format_validation_errors, read_yaml_mapping
from license_report.exceptions import ConfigurationError, PolicyFileError
from license_report.models.license import AliasTable
from license_report.models.policy import (
    Decision,
    ModuleLicenseAllowance,
    Policy,
    PolicyOverride,
)

logger = structlog.get_logger("policy_loader")


class AllowedLicenseEntry(BaseModel):
    """Object form of an allow-list entry."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    module_license: Optional[str] = Field(default=None, alias="moduleLicense")
    module_name: Optional[str] = Field(default=None, alias="moduleName")
    module_version: Optional[str] = Field(default=None, alias="moduleVersion")


class PolicyDocument(BaseModel):
    """Schema of the policy file."""

    model_config = {"extra": "forbid", "populate_by_name": True}

    allowed_licenses: list[Union[str, AllowedLicenseEntry]] = Field(
        default_factory=list, alias="allowedLicenses"
    )
    overrides: list[PolicyOverride] = Field(default_factory=list)


def _read_document(path: Path) -> dict[str, Any]:
    if path.suffix.lower() in (".yaml", ".yml"):
        return read_yaml_mapping(path, "policy") or {}

    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read policy file '{path}': {e}") from e
    if not content.strip():
        return {}
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON in '{path}': {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid policy in '{path}': "
            f"expected an object at root level, got {type(data).__name__}"
        )
    return data


def _split_module(module_name: Optional[str]) -> Optional[tuple[str, str]]:
    if module_name is None or ":" not in module_name:
        return None
    group, name = module_name.split(":", 1)
    return group, name


def _module_override(entry: AllowedLicenseEntry) -> Optional[PolicyOverride]:
    module = _split_module(entry.module_name)
    if module is None:
        return None
    group, name = module
    return PolicyOverride(
        group=group,
        name=name,
        version=entry.module_version,
        decision=Decision.ALLOW,
        reason="Allowed by module entry in policy file",
    )


def _canonical_id(text: str, table: Optional[AliasTable], warnings: list[str]) -> list[str]:
    """Map an allow-list license string to canonical IDs when a table is given."""
    if table is None:
        return [text]
    candidates = normalize_text(text, table)
    unknown = [c.name for c in candidates if c.is_unknown]
    if unknown:
        warnings.append(f"Policy allows unrecognized license '{text}'")
        return [text]
    return [c.id for c in candidates]


def load_policy_file(
    path: Path, table: Optional[AliasTable] = None
) -> tuple[Policy, list[str]]:
    """Load and validate a policy file.

    Args:
        path: Policy file path.
        table: Optional alias table used to canonicalize allowed licenses,
            so that e.g. "The MIT License" in the file means MIT.

    Returns:
        Tuple of the policy and warnings about entries that were ignored
        or could not be canonicalized.

    Raises:
        ConfigurationError: If the file cannot be read or is invalid.
    """
    data = _read_document(path)
    try:
        document = PolicyDocument.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid policy in '{path}': {format_validation_errors(e)}"
        ) from e

    warnings: list[str] = []
    allowed: list[str] = []
    overrides: list[PolicyOverride] = list(document.overrides)
    module_licenses: list[ModuleLicenseAllowance] = []

    for index, entry in enumerate(document.allowed_licenses):
        if isinstance(entry, str):
            allowed.extend(_canonical_id(entry, table, warnings))
            continue
        if entry.module_license:
            license_ids = _canonical_id(entry.module_license, table, warnings)
            if entry.module_name is None:
                allowed.extend(license_ids)
                continue
            module = _split_module(entry.module_name)
            if module is None:
                warnings.append(
                    f"Policy entry {index}: module name '{entry.module_name}' "
                    "is not group:name; entry ignored"
                )
                continue
            module_licenses.append(
                ModuleLicenseAllowance(
                    group=module[0],
                    name=module[1],
                    version=entry.module_version,
                    licenses=frozenset(license_ids),
                )
            )
            continue
        override = _module_override(entry)
        if override is None:
            warnings.append(f"Policy entry {index} names neither a license nor a module")
        else:
            overrides.append(override)

    for warning in warnings:
        logger.warning(warning, policy_file=str(path))

    policy = Policy(
        allowed_licenses=frozenset(allowed),
        overrides=tuple(overrides),
        module_licenses=tuple(module_licenses),
    )
    return policy, warnings


def load_policy(
    policy_file: Optional[str],
    base_dir: Path,
    required: bool = False,
    table: Optional[AliasTable] = None,
) -> tuple[Policy, list[str]]:
    """Load the run's policy, defaulting when the file is absent.

    Args:
        policy_file: Configured policy path (relative to base_dir), or None.
        base_dir: Directory relative paths resolve against.
        required: Whether policy evaluation is mandatory for the run.
        table: Optional alias table for canonicalizing allowed licenses.

    Returns:
        Tuple of the policy and warnings. Without a policy file the default
        policy has no allow-list.

    Raises:
        PolicyFileError: If the policy is required but not configured or
            missing on disk.
        ConfigurationError: If the policy file is invalid.
    """
    if policy_file is None:
        if required:
            raise PolicyFileError("Policy evaluation is required but no policy_file is configured")
        return Policy(), []

    path = Path(policy_file)
    if not path.is_absolute():
        path = base_dir / path

    if not path.exists():
        if required:
            raise PolicyFileError(f"Required policy file not found: '{path}'")
        message = f"Policy file not found: '{path}'; no allow-list applied"
        logger.warning("Policy file not found", policy_file=str(path))
        return Policy(), [message]

    return load_policy_file(path, table)
