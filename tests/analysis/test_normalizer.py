"""Tests for license normalization."""
import pytest
from structlog.testing import capture_logs

from license_report.analysis.normalizer import normalize, normalize_text
from license_report.analysis.registry import (
    DEFAULT_ALIASES,
    LICENSE_REGISTRY,
    build_alias_table,
)
from license_report.exceptions import ConfigurationError
from license_report.models.config import LicenseEntry, LicenseOverride
from license_report.models.dependency import Dependency
from license_report.models.license import AliasTable


def _dep(*licenses: str, group: str = "org.example", name: str = "widget") -> Dependency:
    return Dependency(group=group, name=name, version="1.0", licenses=licenses)


class TestNormalizeText:
    """Tests for normalize_text function."""

    def test_alias_resolves_to_canonical(self, alias_table: AliasTable) -> None:
        """Test that 'The MIT License' normalizes to MIT."""
        result = normalize_text("The MIT License", alias_table)

        assert [lic.id for lic in result] == ["MIT"]
        assert result[0].url == LICENSE_REGISTRY["MIT"].url

    def test_case_and_whitespace_insensitive(self, alias_table: AliasTable) -> None:
        """Test folded lookup for differently formatted alias text."""
        result = normalize_text("  the apache software license,   version 2.0 ", alias_table)
        assert [lic.id for lic in result] == ["Apache-2.0"]

    def test_license_url_is_an_alias(self, alias_table: AliasTable) -> None:
        """Test that well-known license URLs resolve."""
        result = normalize_text("http://www.apache.org/licenses/LICENSE-2.0.txt", alias_table)
        assert [lic.id for lic in result] == ["Apache-2.0"]

    def test_spdx_expression_yields_each_license(self, alias_table: AliasTable) -> None:
        """Test that a dual-license expression yields both candidates."""
        result = normalize_text("MIT OR Apache-2.0", alias_table)
        assert [lic.id for lic in result] == ["MIT", "Apache-2.0"]

    def test_with_exception_resolves_to_combined_entry(self, alias_table: AliasTable) -> None:
        """Test that a license WITH exception reaches the entry covering both."""
        result = normalize_text("GPL-2.0 WITH Classpath-exception-2.0", alias_table)

        assert [lic.id for lic in result] == ["GPL-2.0-with-classpath-exception"]

    def test_with_unlisted_exception_falls_back_to_license(
        self, alias_table: AliasTable
    ) -> None:
        """Test that an exception without its own entry does not become Unknown."""
        result = normalize_text("Apache-2.0 WITH LLVM-exception", alias_table)

        assert [lic.id for lic in result] == ["Apache-2.0"]

    def test_with_exception_inside_dual_license(self, alias_table: AliasTable) -> None:
        """Test a WITH term combined with another license."""
        result = normalize_text("MIT OR GPL-2.0-only WITH Classpath-exception-2.0", alias_table)

        assert [lic.id for lic in result] == ["MIT", "GPL-2.0-with-classpath-exception"]

    def test_unmatched_text_becomes_unknown(self, alias_table: AliasTable) -> None:
        """Test that unmatched text is kept as an Unknown marker."""
        result = normalize_text("Foo Public License", alias_table)

        assert len(result) == 1
        assert result[0].is_unknown
        assert result[0].name == "Foo Public License"

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_text_yields_nothing(self, alias_table: AliasTable, text: str) -> None:
        """Test that blank strings are ignored."""
        assert normalize_text(text, alias_table) == []

    def test_canonical_ids_are_fixed_points(self, alias_table: AliasTable) -> None:
        """Test that normalizing a canonical ID returns that license."""
        for license_id in alias_table.ids:
            assert normalize_text(license_id, alias_table) == [alias_table.get(license_id)]

    def test_normalization_is_idempotent(self, alias_table: AliasTable) -> None:
        """Test that normalizing the output again changes nothing."""
        for alias in DEFAULT_ALIASES:
            first = normalize_text(alias, alias_table)
            second = [
                lic
                for canonical in first
                for lic in normalize_text(canonical.id, alias_table)
            ]
            assert second == first


class TestNormalize:
    """Tests for normalize function."""

    def test_no_licenses_yields_empty(self, alias_table: AliasTable) -> None:
        """Test that a dependency without licenses has no candidates."""
        assert normalize(_dep(), alias_table) == []

    def test_deduplicates_in_first_seen_order(self, alias_table: AliasTable) -> None:
        """Test that aliases of the same license collapse."""
        result = normalize(_dep("Apache 2.0", "MIT", "The MIT License", "ASL 2.0"), alias_table)
        assert [lic.id for lic in result] == ["Apache-2.0", "MIT"]

    def test_unknown_strings_kept_alongside_known(self, alias_table: AliasTable) -> None:
        """Test that an unmatched string is never dropped."""
        result = normalize(_dep("MIT", "Custom EULA"), alias_table)

        assert [lic.id for lic in result] == ["MIT", "Unknown"]
        assert result[1].name == "Custom EULA"

    def test_module_override_replaces_declared(self) -> None:
        """Test that a configured override wins over declared strings."""
        table = build_alias_table(
            module_overrides={
                "org.example:widget": LicenseOverride(
                    licenses=["Apache-2.0"], reason="Relicensed upstream"
                )
            }
        )

        assert [lic.id for lic in normalize(_dep("GPLv3"), table)] == ["Apache-2.0"]
        assert [lic.id for lic in normalize(_dep("GPLv3", name="other"), table)] == [
            "GPL-3.0-only"
        ]

    def test_does_not_modify_dependency(self, alias_table: AliasTable) -> None:
        """Test that normalization leaves the record untouched."""
        dep = _dep("The MIT License")
        normalize(dep, alias_table)
        assert dep.licenses == ("The MIT License",)

    def test_unmatched_strings_are_logged(self, alias_table: AliasTable) -> None:
        """Test that unmatched strings are reported at debug level."""
        with capture_logs() as logs:
            normalize(_dep("Custom EULA"), alias_table)

        assert logs[0]["event"] == "Unrecognized license strings"
        assert logs[0]["log_level"] == "debug"
        assert logs[0]["licenses"] == ["Custom EULA"]


class TestBuildAliasTable:
    """Tests for build_alias_table function."""

    def test_extra_license_and_alias(self) -> None:
        """Test configured registry entries and aliases."""
        table = build_alias_table(
            extra_aliases={"Acme EULA v2": "LicenseRef-Acme"},
            extra_licenses={"LicenseRef-Acme": LicenseEntry(name="Acme Commercial License")},
        )

        result = normalize_text("acme eula v2", table)
        assert [lic.id for lic in result] == ["LicenseRef-Acme"]
        assert normalize_text("Acme Commercial License", table)[0].id == "LicenseRef-Acme"

    def test_extra_alias_overrides_bundle(self) -> None:
        """Test that a configured alias replaces the bundled mapping."""
        table = build_alias_table(extra_aliases={"GPLv3": "GPL-3.0-only", "Apache 2": "MIT"})
        assert normalize_text("Apache 2", table)[0].id == "MIT"

    def test_unknown_target_raises_configuration_error(self) -> None:
        """Test that aliases to unregistered IDs are rejected."""
        with pytest.raises(ConfigurationError, match="Nope-1.0"):
            build_alias_table(extra_aliases={"Foo": "Nope-1.0"})
