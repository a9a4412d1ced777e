from .blocks import BlockKind, ParsedBlock
from .fence import Marker

__all__ = ["BlockKind", "ParsedBlock", "Marker"]
