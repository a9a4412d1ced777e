from .commit import (
    ApplyResult,
    ApplySummary,
    ContentApplier,
    apply_diff,
    apply_full_content,
    apply_search_replace,
    parse_search_replace_pairs,
    patch_text,
    search_replace_text,
)
from .core import process_text
from .errors import (
    CommitError,
    DiffApplyError,
    DiffParseError,
    ExtractError,
    NoDelimitersFound,
    NoSuccessfulReplacements,
    PatchFailedError,
    PathViolation,
)
from .extract import extract_blocks, identify_delimiters
from .models import BlockKind, Marker, ParsedBlock

__all__ = [
    "process_text",
    "extract_blocks",
    "identify_delimiters",
    "ContentApplier",
    "ApplySummary",
    "ApplyResult",
    "apply_full_content",
    "apply_diff",
    "apply_search_replace",
    "patch_text",
    "search_replace_text",
    "parse_search_replace_pairs",
    "BlockKind",
    "ParsedBlock",
    "Marker",
    "ExtractError",
    "NoDelimitersFound",
    "PatchFailedError",
    "DiffParseError",
    "DiffApplyError",
    "CommitError",
    "NoSuccessfulReplacements",
    "PathViolation",
]
