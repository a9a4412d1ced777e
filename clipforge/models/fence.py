from dataclasses import dataclass
from typing import Optional

from .blocks import BlockKind


@dataclass
class Marker:
    """A fence line found by the delimiter scan."""
    start_index: int             # absolute index where the fence line's match begins
    content_start: int           # abs index of the first body character (after any directive line)
    is_start: bool               # tagged fence: always opens a block
    filename: Optional[str] = None
    kind: BlockKind = BlockKind.FULL_CONTENT
    bare: bool = False           # untagged fence: closes, or opens when nothing is open
