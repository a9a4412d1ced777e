from .blocks import extract_blocks
from .delimiters import identify_delimiters

__all__ = [
    "extract_blocks",
    "identify_delimiters",
]
