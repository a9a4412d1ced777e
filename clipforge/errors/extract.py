class ExtractError(Exception):
    """Raised when blocks cannot be extracted from the input text."""


class NoDelimitersFound(ExtractError):
    """The text contains no fence lines at all."""
