from .core import ApplySummary, ContentApplier
from .diagnostics import write_patch_diagnostics
from .diff import apply_diff, patch_text
from .full import apply_full_content
from .result import ApplyResult
from .search_replace import (
    SearchReplaceOutcome,
    apply_search_replace,
    parse_search_replace_pairs,
    search_replace_text,
)

__all__ = [
    "ApplySummary",
    "ApplyResult",
    "ContentApplier",
    "apply_full_content",
    "apply_diff",
    "apply_search_replace",
    "patch_text",
    "search_replace_text",
    "parse_search_replace_pairs",
    "SearchReplaceOutcome",
    "write_patch_diagnostics",
]
