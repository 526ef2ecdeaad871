"""Error types raised by the gvt core.

No-op outcomes (already tracked, not tracked) are not errors; they come back
as successful results.
"""

from __future__ import annotations


class GvtError(Exception):
    """Base class for all gvt errors."""


class UninitializedRepository(GvtError):
    """Raised when no repository exists at the working directory."""

    def __init__(self, control_dir: str = ""):
        self.control_dir = control_dir
        super().__init__(f"No repository found: {control_dir}" if control_dir else "No repository found")


class AlreadyInitialized(GvtError):
    """Raised by init when the control directory is already present."""


class VersionNotFound(GvtError):
    """Raised when a version id is outside [0, latest]."""

    def __init__(self, version_id: object):
        self.version_id = version_id
        super().__init__(f"Version not found: {version_id}")


class InvalidVersion(VersionNotFound):
    """Raised when user input does not name an existing version."""

    def __init__(self, raw: object):
        self.raw = "" if raw is None else str(raw)
        super().__init__(self.raw)


class FileMissing(GvtError):
    """Raised when the target file is absent from the working directory."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"File not found: {file_name}")


class StorageFailure(GvtError):
    """Wraps an underlying I/O fault during copy, read or write."""
