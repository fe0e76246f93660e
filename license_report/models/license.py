"""Canonical license models and the alias lookup table."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Optional

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from license_report.models.dependency import Dependency

UNKNOWN_LICENSE_ID = "Unknown"


def fold_license_text(text: str) -> str:
    """Fold license text for case- and whitespace-insensitive matching.

    Args:
        text: Free-text license string.

    Returns:
        Lowercased text with runs of whitespace collapsed to one space.
    """
    return " ".join(text.split()).casefold()


class CanonicalLicense(BaseModel):
    """A license from the canonical registry."""

    model_config = {"extra": "forbid", "frozen": True}

    id: str = Field(description="Canonical (SPDX-style) license identifier")
    name: str = Field(description="Human-readable license name")
    url: Optional[str] = Field(default=None, description="Canonical license URL")

    @classmethod
    def unknown(cls, raw: str) -> CanonicalLicense:
        """Build the marker for a license string that matched nothing.

        The unmatched text is kept as the name so reports can show it.
        """
        return cls(id=UNKNOWN_LICENSE_ID, name=raw, url=None)

    @property
    def is_unknown(self) -> bool:
        """True if this is an unmatched-license marker."""
        return self.id == UNKNOWN_LICENSE_ID


class AliasTable:
    """Read-only mapping from free-text license strings to canonical licenses.

    Built once per run and shared by every stage; nothing mutates it after
    construction.
    """

    def __init__(
        self,
        licenses: Mapping[str, CanonicalLicense],
        aliases: Mapping[str, str],
        module_overrides: Optional[Mapping[str, tuple[str, ...]]] = None,
    ) -> None:
        """Create a table.

        Args:
            licenses: Canonical registry keyed by license ID.
            aliases: Alias text to license ID.
            module_overrides: ``group:name`` to the license IDs that replace
                whatever the module declares.

        Raises:
            ValueError: If an alias or override names an ID missing from
                the registry.
        """
        for target in list(aliases.values()) + [
            license_id
            for ids in (module_overrides or {}).values()
            for license_id in ids
        ]:
            if target not in licenses:
                raise ValueError(f"Unknown canonical license ID '{target}'")

        self._licenses = MappingProxyType(dict(licenses))
        self._exact = MappingProxyType(dict(aliases))
        folded: dict[str, str] = {}
        for alias, license_id in aliases.items():
            folded.setdefault(fold_license_text(alias), license_id)
        self._folded = MappingProxyType(folded)
        self._module_overrides = MappingProxyType(dict(module_overrides or {}))

    @property
    def ids(self) -> frozenset[str]:
        """All canonical license IDs in the registry."""
        return frozenset(self._licenses)

    @property
    def aliases(self) -> Mapping[str, str]:
        """Alias text to license ID (read-only view)."""
        return self._exact

    def get(self, license_id: str) -> Optional[CanonicalLicense]:
        """Return the registry entry for an ID, or None."""
        return self._licenses.get(license_id)

    def lookup_exact(self, text: str) -> Optional[CanonicalLicense]:
        """Look up an alias by its exact text."""
        license_id = self._exact.get(text)
        return self._licenses[license_id] if license_id is not None else None

    def lookup_folded(self, text: str) -> Optional[CanonicalLicense]:
        """Look up an alias ignoring case and whitespace differences."""
        license_id = self._folded.get(fold_license_text(text))
        return self._licenses[license_id] if license_id is not None else None

    def override_for(self, dependency: Dependency) -> Optional[list[CanonicalLicense]]:
        """Return the forced licenses for a module, or None if not overridden."""
        ids = self._module_overrides.get(dependency.module_id)
        if ids is None:
            return None
        return [self._licenses[license_id] for license_id in ids]

    def __len__(self) -> int:
        return len(self._exact)
