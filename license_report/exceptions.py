"""Custom exceptions for license-report."""


class LicenseReportError(Exception):
    """Base exception for all license-report errors."""

    pass


class ConfigurationError(LicenseReportError):
    """Exception raised when configuration or pipeline input is invalid."""

    pass


class PolicyFileError(ConfigurationError):
    """Exception raised when a required policy file is missing or invalid."""

    pass


class ReportImportError(LicenseReportError):
    """Exception raised when an external report file cannot be read."""

    pass


class RenderError(LicenseReportError):
    """Exception raised when a renderer cannot produce its artifact."""

    pass


class PipelineError(LicenseReportError):
    """Exception raised when the run cannot continue to rendering."""

    pass
