"""Configuration Pydantic models for license-report."""
from __future__ import annotations

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from license_report.constants import DEFAULT_OUTPUT_DIR, DEFAULT_SCOPES


class InventoryHtmlRendererConfig(BaseModel):
    """Human-readable HTML inventory report."""

    model_config = {"extra": "forbid"}

    kind: Literal["inventory-html"] = "inventory-html"
    output: str = Field(description="Output file path")
    title: str = Field(default="Dependencies", description="Section title")


class JsonRendererConfig(BaseModel):
    """Machine-readable JSON report."""

    model_config = {"extra": "forbid"}

    kind: Literal["json"] = "json"
    output: str = Field(description="Output file path")
    one_license_per_module: bool = Field(
        default=False,
        description="Emit only the first resolved license of each module",
    )


class MarkdownRendererConfig(BaseModel):
    """Markdown inventory report."""

    model_config = {"extra": "forbid"}

    kind: Literal["markdown"] = "markdown"
    output: str = Field(description="Output file path")


RendererConfig = Annotated[
    Union[InventoryHtmlRendererConfig, JsonRendererConfig, MarkdownRendererConfig],
    Field(discriminator="kind"),
]


class ExcludeWithoutArtifactsFilterConfig(BaseModel):
    """Drop modules that ship no artifact (platforms, BOMs)."""

    model_config = {"extra": "forbid"}

    kind: Literal["exclude-without-artifacts"] = "exclude-without-artifacts"


class DependencyListFilterConfig(BaseModel):
    """Custom allow/deny list of module patterns.

    Patterns are shell-style globs matched against ``group:name`` and
    ``group:name:version``.
    """

    model_config = {"extra": "forbid"}

    kind: Literal["dependency-list"] = "dependency-list"
    allow: Optional[List[str]] = Field(
        default=None,
        description="If set, only matching modules are kept",
    )
    deny: List[str] = Field(
        default_factory=list,
        description="Matching modules are removed",
    )


FilterConfig = Annotated[
    Union[ExcludeWithoutArtifactsFilterConfig, DependencyListFilterConfig],
    Field(discriminator="kind"),
]


class JsonImporterConfig(BaseModel):
    """External JSON dependency report."""

    model_config = {"extra": "forbid"}

    kind: Literal["json"] = "json"
    name: str = Field(description="Display name of the imported report")
    path: str = Field(description="Path to the report file")


class XmlImporterConfig(BaseModel):
    """External XML dependency report."""

    model_config = {"extra": "forbid"}

    kind: Literal["xml"] = "xml"
    name: str = Field(description="Display name of the imported report")
    path: str = Field(description="Path to the report file")


ImporterConfig = Annotated[
    Union[JsonImporterConfig, XmlImporterConfig],
    Field(discriminator="kind"),
]


class LicenseEntry(BaseModel):
    """Additional canonical license registry entry."""

    model_config = {"extra": "forbid"}

    name: str = Field(description="Human-readable license name")
    url: Optional[str] = Field(default=None, description="Canonical license URL")


class LicenseOverride(BaseModel):
    """Manual license override for a module.

    Used when declared license metadata is missing or wrong.
    """

    model_config = {"extra": "forbid"}

    licenses: List[str] = Field(
        min_length=1,
        description="Canonical license IDs to use instead of the declared ones",
    )
    reason: str = Field(description="Reason for the override")


def _default_renderers() -> list[JsonRendererConfig]:
    return [JsonRendererConfig(output=f"{DEFAULT_OUTPUT_DIR}/index.json")]


class ReportConfig(BaseModel):
    """Configuration for a license-report run."""

    model_config = {"extra": "forbid"}

    project_name: str = Field(default="project", description="Reported project")
    scopes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_SCOPES),
        description="Scopes to report",
    )
    scope_extends: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Scope inheritance, e.g. runtime: [compile]",
    )
    renderers: List[RendererConfig] = Field(
        default_factory=_default_renderers,
        description="Report renderers, each writing one artifact",
    )
    filters: List[FilterConfig] = Field(
        default_factory=list,
        description="Dependency filters applied in order",
    )
    importers: List[ImporterConfig] = Field(
        default_factory=list,
        description="External reports merged into the local dependency set",
    )
    policy_file: Optional[str] = Field(
        default=None,
        description="Allow-list policy file (JSON or YAML)",
    )
    policy_required: bool = Field(
        default=False,
        description="Fail the run if the policy file is missing",
    )
    aliases: Dict[str, str] = Field(
        default_factory=dict,
        description="Extra license alias text mapped to canonical IDs",
    )
    licenses: Dict[str, LicenseEntry] = Field(
        default_factory=dict,
        description="Extra canonical registry entries keyed by ID",
    )
    license_overrides: Dict[str, LicenseOverride] = Field(
        default_factory=dict,
        description="Forced licenses keyed by group:name",
    )
    fail_on: List[Literal["violation", "unknown"]] = Field(
        default_factory=lambda: ["violation"],
        description="Verdict outcomes that make the run fail",
    )
    parallel_renderers: bool = Field(
        default=False,
        description="Run renderers concurrently",
    )
