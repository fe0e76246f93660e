"""Constants for license-report."""

# Exit codes
EXIT_SUCCESS = 0  # Threshold not reached
EXIT_ISSUES = 1  # Violations (or unknowns, if configured) found
EXIT_ERROR = 2  # Run failed or a renderer could not write its artifact

# Scopes reported when the configuration does not name any
DEFAULT_SCOPES = ["runtime"]

# Version recorded for imported records that do not carry one
UNSPECIFIED_VERSION = "unspecified"

DEFAULT_OUTPUT_DIR = "build/reports/dependency-license"

LEGAL_DISCLAIMER = (
    "This report provides license information for informational purposes only. "
    "It does not constitute legal advice. Consult a qualified attorney for "
    "legal guidance on license compliance."
)

LEGAL_DISCLAIMER_SHORT = (
    "This is not legal advice. Consult a qualified attorney for compliance guidance."
)
