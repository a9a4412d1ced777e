from dataclasses import dataclass
from enum import Enum


class BlockKind(Enum):
    """How a block's content is turned into a filesystem change."""

    FULL_CONTENT = "full_content"
    UNIFIED_DIFF = "unified_diff"
    SEARCH_REPLACE = "search_replace"

    @classmethod
    def from_language(cls, language: str) -> "BlockKind":
        """Map a fence language tag to a kind; unknown or empty tags mean full content."""
        tag = (language or "").strip().lower()
        if tag == "diff":
            return cls.UNIFIED_DIFF
        if tag == "replace":
            return cls.SEARCH_REPLACE
        return cls.FULL_CONTENT


@dataclass(frozen=True)
class ParsedBlock:
    """One extracted, filename-resolved unit of work for an applier."""

    filename: str
    content: str
    kind: BlockKind = BlockKind.FULL_CONTENT
