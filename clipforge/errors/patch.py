from typing import Optional


class PatchFailedError(Exception):
    """Raised when a unified diff cannot be turned into new file content."""

    def __init__(self, message: str, diagnostics_path: Optional[str] = None):
        super().__init__(message)
        self.diagnostics_path = diagnostics_path


class DiffParseError(PatchFailedError):
    """The block is not a well-formed unified diff."""


class DiffApplyError(PatchFailedError):
    """The diff parsed but its hunks do not match the current file content."""
