class CommitError(Exception):
    """Raised when a block cannot be committed to the filesystem."""


class NoSuccessfulReplacements(CommitError):
    """None of the SEARCH/REPLACE pairs in a block matched the file."""


class FileOperationError(CommitError):
    """An I/O failure on a target path, keeping the path and the underlying cause."""

    def __init__(self, path: str, cause: BaseException):
        super().__init__(f"{path}: {cause}")
        self.path = path
        self.cause = cause


class ReadFailure(FileOperationError):
    pass


class WriteFailure(FileOperationError):
    pass
