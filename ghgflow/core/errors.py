"""Custom exceptions used across GHGFlow."""


class GHGFlowError(Exception):
    """Base error for the application."""


class ConfigError(GHGFlowError):
    """Configuration related error."""


class WorkbookDecodeError(GHGFlowError):
    """Raised when uploaded bytes are not a readable Excel workbook."""


class RecordUpdateError(GHGFlowError):
    """Raised when an edit targets an unknown record or field."""


class ExportError(GHGFlowError):
    """Raised when writing a dataset to disk fails."""
