from .commit import CommitError


class PathViolation(CommitError):
    """A block filename resolves outside the base directory."""
