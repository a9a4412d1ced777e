from .commit import (
    CommitError,
    FileOperationError,
    NoSuccessfulReplacements,
    ReadFailure,
    WriteFailure,
)
from .extract import ExtractError, NoDelimitersFound
from .patch import DiffApplyError, DiffParseError, PatchFailedError
from .path import PathViolation

__all__ = [
    "ExtractError",
    "NoDelimitersFound",
    "PatchFailedError",
    "DiffParseError",
    "DiffApplyError",
    "CommitError",
    "NoSuccessfulReplacements",
    "FileOperationError",
    "ReadFailure",
    "WriteFailure",
    "PathViolation",
]
