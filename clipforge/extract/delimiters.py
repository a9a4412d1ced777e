# clipforge/extract/delimiters.py
from __future__ import annotations

import bisect
import logging
import re

from ..errors.extract import NoDelimitersFound
from ..models.blocks import BlockKind
from ..models.fence import Marker
from ..utils.paths import normalize_filename

log = logging.getLogger(__name__)


# A fence line: optional indentation, exactly three backticks, an optional
# single-token language tag and nothing else on the line.
_FENCE_RE = re.compile(r"(?m)^[ \t]*```(?P<lang>[^\s`]*)[ \t]*\r?$")

# ATX heading; the whole heading text is captured and the filename token is
# picked out of it by _heading_token().
_HEADING_RE = re.compile(r"(?m)^[ \t]*#{1,6}[ \t]+(?P<text>[^\r\n]*?)[ \t]*\r?$")

_DIRECTIVE_RE = re.compile(
    r"(?mi)^[ \t]*(?:"
    r"(?://|#)[ \t]*filename:[ \t]*(?P<line>[^\r\n]+?)"
    r"|/\*[ \t]*filename:[ \t]*(?P<block>[^\r\n]+?)[ \t]*\*/"
    r"|<!--[ \t]*filename:[ \t]*(?P<html>[^\r\n]+?)[ \t]*-->"
    r")[ \t]*\r?$"
)

_DIFF_SOURCE_RE = re.compile(r"(?m)^[ \t]*---[ \t]+(?P<path>[^\r\n]+?)[ \t]*\r?$")
_DIFF_TARGET_RE = re.compile(r"(?m)[ \t]*\+\+\+[ \t]+(?P<path>[^\r\n]+?)[ \t]*\r?$")

# A lone path on the line right above a fence, e.g. `src/app.py`, **app.py** or app.py:
_LABEL_RE = re.compile(
    r"[ \t]*(?:\*\*)?"
    r"(?:`(?P<code>[^`\s]+)`|(?P<path>[\w.\-\\/]*[./][\w.\-\\/]*\w))"
    r"(?:\*\*)?:?(?:\*\*)?[ \t]*\r?"
)

_INLINE_CODE_RE = re.compile(r"`([^`]+)`")

_DEV_NULL = "/dev/null"


def _line_after(text: str, idx: int) -> int:
    """Index of the first character after the newline that ends the line at idx."""
    nl = text.find("\n", idx)
    return len(text) if nl == -1 else nl + 1


def _heading_token(heading: str) -> str | None:
    """Trailing token of a heading; an inline-code span wins over bare words."""
    body = heading.strip().rstrip("#").strip()
    spans = _INLINE_CODE_RE.findall(body)
    if spans:
        return spans[-1].strip() or None
    parts = body.split()
    if not parts:
        return None
    return parts[-1].strip("*_\"'").rstrip(":") or None


def _diff_path(raw: str) -> str:
    # Drop a tab-separated timestamp ("--- a/x.py\t2024-01-01 ...").
    return raw.split("\t", 1)[0].strip()


def _scan_headings(text: str) -> tuple[list[int], list[str]]:
    positions: list[int] = []
    tokens: list[str] = []
    for m in _HEADING_RE.finditer(text):
        token = _heading_token(m.group("text"))
        if token:
            positions.append(m.start())
            tokens.append(token)
    return positions, tokens


def _scan_directives(text: str) -> dict[int, tuple[str, int]]:
    """line start -> (filename, index just past the directive line)"""
    found: dict[int, tuple[str, int]] = {}
    for m in _DIRECTIVE_RE.finditer(text):
        name = m.group("line") or m.group("block") or m.group("html")
        if name:
            found[m.start()] = (name.strip(), _line_after(text, m.end()))
    return found


def _scan_diff_sources(text: str) -> dict[int, str]:
    """line start -> filename taken from a '--- path' line (or the '+++' after /dev/null)"""
    found: dict[int, str] = {}
    for m in _DIFF_SOURCE_RE.finditer(text):
        path = _diff_path(m.group("path"))
        if path == _DEV_NULL:
            target = _DIFF_TARGET_RE.match(text, _line_after(text, m.end()))
            if not target:
                continue
            path = _diff_path(target.group("path"))
            if path == _DEV_NULL:
                continue
        found[m.start()] = path
    return found


def _label_above(text: str, fence_start: int) -> str | None:
    """A bare path label on the line immediately above the fence line."""
    if fence_start == 0:
        return None
    prev_end = fence_start - 1  # the '\n' that ends the previous line
    prev_start = text.rfind("\n", 0, prev_end) + 1
    m = _LABEL_RE.fullmatch(text, prev_start, prev_end)
    if not m:
        return None
    return m.group("code") or m.group("path")


def identify_delimiters(text: str) -> list[Marker]:
    """
    Scan `text` once per pattern class and return every fence line as a Marker,
    sorted by position.

    Tagged fences open blocks; untagged ("bare") fences close the innermost open
    block, or open one when nothing is open (decided by the block extractor).
    Each marker's filename is resolved with this precedence:

    1. an inline ``filename:`` directive on the first body line (non-diff only;
       the directive line is then excluded from the content),
    2. a ``--- path`` line on the first body line (diff only),
    3. a bare path label directly above the fence, else the nearest preceding
       heading located after the previous fence line,
    4. None.

    Raises:
        NoDelimitersFound: if the text contains no fence lines.
    """
    headings_pos, headings_tok = _scan_headings(text)
    directives = _scan_directives(text)
    diff_sources = _scan_diff_sources(text)

    markers: list[Marker] = []
    for m in _FENCE_RE.finditer(text):
        start_index = m.start()
        lang = m.group("lang")
        bare = not lang
        kind = BlockKind.from_language(lang)

        content_start = _line_after(text, m.end())
        filename: str | None = None

        if kind is not BlockKind.UNIFIED_DIFF and content_start in directives:
            filename, content_start = directives[content_start]
        elif kind is BlockKind.UNIFIED_DIFF and content_start in diff_sources:
            filename = diff_sources[content_start]

        if filename is None:
            filename = _label_above(text, start_index)

        if filename is None:
            # Only headings after the previous fence line count: one heading never
            # labels two blocks, and '#' comments inside an earlier block are skipped.
            boundary = markers[-1].start_index if markers else -1
            idx = bisect.bisect_left(headings_pos, start_index) - 1
            if idx >= 0 and headings_pos[idx] > boundary:
                filename = headings_tok[idx]

        markers.append(
            Marker(
                start_index=start_index,
                content_start=content_start,
                is_start=not bare,
                filename=normalize_filename(filename),
                kind=kind,
                bare=bare,
            )
        )

    if not markers:
        raise NoDelimitersFound("No delimiters found")

    # finditer already yields in position order; keep the sort as the contract.
    markers.sort(key=lambda mk: mk.start_index)
    log.debug(
        "Identified %d fence markers (%d headings, %d directives, %d diff headers)",
        len(markers), len(headings_pos), len(directives), len(diff_sources),
    )
    return markers
