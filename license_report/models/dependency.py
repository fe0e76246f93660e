"""Dependency models for license-report."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Origin(Enum):
    """Provenance of a dependency record."""

    LOCAL = "local"
    IMPORTED_ONLY = "imported-only"
    MERGED = "merged"


class Dependency(BaseModel):
    """A resolved dependency with its declared license strings.

    Records are immutable once resolved. Stages that need a different view
    (for example the importer merge) build new records with ``model_copy``.
    """

    model_config = {"extra": "forbid", "frozen": True}

    group: str = Field(description="Organization or group coordinate")
    name: str = Field(description="Module name")
    version: str = Field(description="Resolved version")
    scope: str = Field(default="runtime", description="Source scope, e.g. runtime")
    licenses: tuple[str, ...] = Field(
        default=(),
        description="Declared free-text license strings, in declaration order",
    )
    url: Optional[str] = Field(default=None, description="Project home page")
    has_artifact: bool = Field(
        default=True,
        description="False for platform/BOM style modules that ship no artifact",
    )
    origin: Origin = Field(default=Origin.LOCAL, description="Record provenance")
    import_source: Optional[str] = Field(
        default=None,
        description="Name of the importer that supplied imported license data",
    )

    @property
    def key(self) -> tuple[str, str, str, str]:
        """Unique identity of the record: (group, name, version, scope)."""
        return (self.group, self.name, self.version, self.scope)

    @property
    def module_key(self) -> tuple[str, str]:
        """Identity used to match records across reports: (group, name)."""
        return (self.group, self.name)

    @property
    def module_id(self) -> str:
        """Return ``group:name``."""
        return f"{self.group}:{self.name}"

    @property
    def coordinates(self) -> str:
        """Return ``group:name:version``."""
        return f"{self.group}:{self.name}:{self.version}"
