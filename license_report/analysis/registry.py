"""Bundled canonical license registry and alias bundle.

The alias bundle covers the license names and URLs that commonly appear in
POM files, package manifests and registry metadata. Canonical IDs and names
are added as aliases by ``build_alias_table`` so normalizing an already
canonical string is a no-op.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Optional

from license_report.exceptions import ConfigurationError
from license_report.models.config import LicenseEntry, LicenseOverride
from license_report.models.license import AliasTable, CanonicalLicense


def _entry(license_id: str, name: str, url: str) -> tuple[str, CanonicalLicense]:
    return license_id, CanonicalLicense(id=license_id, name=name, url=url)


LICENSE_REGISTRY: dict[str, CanonicalLicense] = dict(
    [
        _entry("0BSD", "BSD Zero Clause License", "https://opensource.org/licenses/0BSD"),
        _entry("AGPL-3.0-only", "GNU Affero General Public License v3.0 only",
               "https://www.gnu.org/licenses/agpl-3.0.html"),
        _entry("Apache-2.0", "Apache License 2.0",
               "https://www.apache.org/licenses/LICENSE-2.0"),
        _entry("BSD-2-Clause", 'BSD 2-Clause "Simplified" License',
               "https://opensource.org/licenses/BSD-2-Clause"),
        _entry("BSD-3-Clause", 'BSD 3-Clause "New" or "Revised" License',
               "https://opensource.org/licenses/BSD-3-Clause"),
        _entry("BSL-1.0", "Boost Software License 1.0",
               "https://www.boost.org/LICENSE_1_0.txt"),
        _entry("CC0-1.0", "Creative Commons Zero v1.0 Universal",
               "https://creativecommons.org/publicdomain/zero/1.0/legalcode"),
        _entry("CDDL-1.0", "Common Development and Distribution License 1.0",
               "https://opensource.org/licenses/CDDL-1.0"),
        _entry("CDDL-1.1", "Common Development and Distribution License 1.1",
               "https://javaee.github.io/glassfish/LICENSE"),
        _entry("EPL-1.0", "Eclipse Public License 1.0",
               "https://www.eclipse.org/legal/epl-v10.html"),
        _entry("EPL-2.0", "Eclipse Public License 2.0",
               "https://www.eclipse.org/legal/epl-2.0/"),
        _entry("GPL-2.0-only", "GNU General Public License v2.0 only",
               "https://www.gnu.org/licenses/old-licenses/gpl-2.0.html"),
        _entry("GPL-2.0-with-classpath-exception",
               "GNU General Public License v2.0 w/Classpath exception",
               "https://openjdk.org/legal/gplv2+ce.html"),
        _entry("GPL-3.0-only", "GNU General Public License v3.0 only",
               "https://www.gnu.org/licenses/gpl-3.0.html"),
        _entry("ISC", "ISC License", "https://opensource.org/licenses/ISC"),
        _entry("LGPL-2.1-only", "GNU Lesser General Public License v2.1 only",
               "https://www.gnu.org/licenses/old-licenses/lgpl-2.1.html"),
        _entry("LGPL-3.0-only", "GNU Lesser General Public License v3.0 only",
               "https://www.gnu.org/licenses/lgpl-3.0.html"),
        _entry("MIT", "MIT License", "https://opensource.org/licenses/MIT"),
        _entry("MPL-1.1", "Mozilla Public License 1.1",
               "https://www.mozilla.org/en-US/MPL/1.1/"),
        _entry("MPL-2.0", "Mozilla Public License 2.0",
               "https://www.mozilla.org/en-US/MPL/2.0/"),
        _entry("PSF-2.0", "Python Software Foundation License 2.0",
               "https://opensource.org/licenses/Python-2.0"),
        _entry("Unlicense", "The Unlicense", "https://unlicense.org/"),
        _entry("Zlib", "zlib License", "https://opensource.org/licenses/Zlib"),
    ]
)

# Free-text license strings seen in the wild mapped to canonical IDs
DEFAULT_ALIASES: dict[str, str] = {
    # MIT
    "The MIT License": "MIT",
    "The MIT License (MIT)": "MIT",
    "MIT License": "MIT",
    "MIT license": "MIT",
    "Expat": "MIT",
    "http://opensource.org/licenses/MIT": "MIT",
    "https://opensource.org/licenses/MIT": "MIT",
    "http://www.opensource.org/licenses/mit-license.php": "MIT",
    # Apache
    "The Apache Software License, Version 2.0": "Apache-2.0",
    "The Apache License, Version 2.0": "Apache-2.0",
    "Apache License, Version 2.0": "Apache-2.0",
    "Apache License Version 2.0": "Apache-2.0",
    "Apache Software License - Version 2.0": "Apache-2.0",
    "Apache 2.0": "Apache-2.0",
    "Apache 2": "Apache-2.0",
    "Apache-2": "Apache-2.0",
    "ASL 2.0": "Apache-2.0",
    "http://www.apache.org/licenses/LICENSE-2.0": "Apache-2.0",
    "http://www.apache.org/licenses/LICENSE-2.0.txt": "Apache-2.0",
    "https://www.apache.org/licenses/LICENSE-2.0.txt": "Apache-2.0",
    # BSD
    "BSD": "BSD-3-Clause",
    "The BSD License": "BSD-3-Clause",
    "BSD License": "BSD-3-Clause",
    "New BSD License": "BSD-3-Clause",
    "Revised BSD License": "BSD-3-Clause",
    "BSD 3-Clause": "BSD-3-Clause",
    "3-Clause BSD License": "BSD-3-Clause",
    "Simplified BSD License": "BSD-2-Clause",
    "BSD 2-Clause": "BSD-2-Clause",
    "FreeBSD License": "BSD-2-Clause",
    # Eclipse
    "Eclipse Public License - v 1.0": "EPL-1.0",
    "Eclipse Public License 1.0": "EPL-1.0",
    "Eclipse Public License - v 2.0": "EPL-2.0",
    "Eclipse Public License v2.0": "EPL-2.0",
    "EPL 2.0": "EPL-2.0",
    # GNU
    "GNU General Public License, version 2": "GPL-2.0-only",
    "GNU General Public License v2.0": "GPL-2.0-only",
    "GPLv2": "GPL-2.0-only",
    "GPL-2.0": "GPL-2.0-only",
    "GPL2 w/ CPE": "GPL-2.0-with-classpath-exception",
    "GNU General Public License, version 2 with the GNU Classpath Exception": (
        "GPL-2.0-with-classpath-exception"
    ),
    "GPL-2.0-only WITH Classpath-exception-2.0": "GPL-2.0-with-classpath-exception",
    "GNU General Public License, version 3": "GPL-3.0-only",
    "GNU General Public License v3.0": "GPL-3.0-only",
    "GPLv3": "GPL-3.0-only",
    "GPL-3.0": "GPL-3.0-only",
    "GNU Lesser General Public License, version 2.1": "LGPL-2.1-only",
    "GNU Lesser General Public License v2.1": "LGPL-2.1-only",
    "LGPL 2.1": "LGPL-2.1-only",
    "LGPL-2.1": "LGPL-2.1-only",
    "GNU Lesser General Public License, version 3": "LGPL-3.0-only",
    "LGPLv3": "LGPL-3.0-only",
    "LGPL-3.0": "LGPL-3.0-only",
    "GNU Affero General Public License v3.0": "AGPL-3.0-only",
    "AGPL-3.0": "AGPL-3.0-only",
    # CDDL
    "CDDL": "CDDL-1.0",
    "CDDL 1.0": "CDDL-1.0",
    "CDDL 1.1": "CDDL-1.1",
    "Common Development and Distribution License (CDDL) v1.0": "CDDL-1.0",
    # Mozilla
    "Mozilla Public License 2.0": "MPL-2.0",
    "Mozilla Public License, Version 2.0": "MPL-2.0",
    "MPL 2.0": "MPL-2.0",
    "MPL 1.1": "MPL-1.1",
    # Misc
    "Boost Software License - Version 1.0": "BSL-1.0",
    "ISC License": "ISC",
    "Public Domain, per Creative Commons CC0": "CC0-1.0",
    "CC0": "CC0-1.0",
    "Python Software Foundation License": "PSF-2.0",
    "The Unlicense": "Unlicense",
    "zlib/libpng License": "Zlib",
}


def build_alias_table(
    extra_aliases: Optional[Mapping[str, str]] = None,
    extra_licenses: Optional[Mapping[str, LicenseEntry]] = None,
    module_overrides: Optional[Mapping[str, LicenseOverride]] = None,
) -> AliasTable:
    """Build the alias table for a run.

    Args:
        extra_aliases: Configured alias text to canonical ID.
        extra_licenses: Configured registry additions keyed by ID.
        module_overrides: Configured forced licenses keyed by ``group:name``.

    Returns:
        Immutable AliasTable combining the bundled and configured data.

    Raises:
        ConfigurationError: If an alias or override names an unknown ID.
    """
    licenses = dict(LICENSE_REGISTRY)
    for license_id, entry in (extra_licenses or {}).items():
        licenses[license_id] = CanonicalLicense(
            id=license_id, name=entry.name, url=entry.url
        )

    aliases: dict[str, str] = {}
    # Canonical IDs, names and URLs resolve to themselves
    for license_id, canonical in licenses.items():
        aliases[license_id] = license_id
        aliases.setdefault(canonical.name, license_id)
        if canonical.url:
            aliases.setdefault(canonical.url, license_id)
    aliases.update(DEFAULT_ALIASES)
    aliases.update(extra_aliases or {})

    overrides = {
        module_id: tuple(override.licenses)
        for module_id, override in (module_overrides or {}).items()
    }

    try:
        return AliasTable(licenses, aliases, overrides)
    except ValueError as e:
        raise ConfigurationError(f"Invalid license alias configuration: {e}") from e
