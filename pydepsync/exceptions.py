"""Custom exceptions for pydepsync.

Only these reach the top level; every other problem is recorded as a
diagnostic and the run continues.
"""


class PyDepSyncError(Exception):
    """Base exception for all fatal pydepsync errors."""


class ProjectRootError(PyDepSyncError):
    """Raised when the project root cannot be read."""


class ManifestError(PyDepSyncError):
    """Raised when the manifest is missing, unparseable, or cannot be safely edited."""


class ManifestWriteError(PyDepSyncError):
    """Raised when the patched manifest cannot be written back."""


class ConfigError(PyDepSyncError):
    """Raised when a config file or a CLI override is malformed."""
