# clipforge/extract/blocks.py
from __future__ import annotations

import logging

from ..models.blocks import ParsedBlock
from ..models.fence import Marker
from .delimiters import identify_delimiters

log = logging.getLogger(__name__)


def _pair_markers(markers: list[Marker]) -> tuple[list[tuple[Marker, Marker]], list[Marker]]:
    """
    Match openers with closers using an explicit stack.

    Returns the (opener, closer) pairs of top-level blocks in order, and the
    openers that were never closed.
    """
    pairs: list[tuple[Marker, Marker]] = []
    stack: list[Marker] = []
    for marker in markers:
        if marker.is_start or (marker.bare and not stack):
            stack.append(marker)
            continue
        if not stack:
            continue
        opener = stack.pop()
        if not stack:
            pairs.append((opener, marker))
        # else: a nested fence, its text belongs to the enclosing block.
    return pairs, stack


def extract_blocks(text: str) -> list[ParsedBlock]:
    """
    Extract every labeled **top-level** fenced block from `text`, in source order.

    Fence markers are paired with an explicit stack (never recursion, the
    nesting depth is caller-controlled input). Only a marker popped back to an
    empty stack produces a block, so fences nested inside an outer block stay in
    its content verbatim.

    An opener that is never closed is logged and dropped, and the remaining
    markers are paired again so that a broken fence cannot swallow the
    well-formed blocks that follow it. Top-level blocks without a resolvable
    filename are logged and skipped.

    Raises:
        NoDelimitersFound: if the text has no fence lines at all.
    """
    markers = identify_delimiters(text)

    pairs, unclosed = _pair_markers(markers)
    while unclosed:
        for marker in unclosed:
            log.warning(
                "Unclosed block detected starting at index %d. Ignoring the incomplete block.",
                marker.start_index,
            )
        dropped = {id(m) for m in unclosed}
        markers = [m for m in markers if id(m) not in dropped]
        pairs, unclosed = _pair_markers(markers)

    blocks: list[ParsedBlock] = []
    for opener, closer in pairs:
        if not opener.filename:
            log.warning(
                "Skipping block at index %d: could not resolve a filename.",
                opener.start_index,
            )
            continue
        blocks.append(
            ParsedBlock(
                filename=opener.filename,
                content=text[opener.content_start:closer.start_index],
                kind=opener.kind,
            )
        )

    log.debug("Extracted %d blocks from %d fence markers", len(blocks), len(markers))
    return blocks
