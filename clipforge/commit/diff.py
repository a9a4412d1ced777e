# clipforge/commit/diff.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

import patch as patch_lib

from .._logging import resolve_logger
from ..errors.commit import WriteFailure
from ..errors.patch import DiffApplyError, DiffParseError, PatchFailedError
from ..models.blocks import ParsedBlock
from ..utils.fs import read_text
from ..utils.paths import resolve_target
from .diagnostics import write_patch_diagnostics
from .result import ApplyResult, commit_content

__all__ = ["patch_text", "apply_diff"]

_log = logging.getLogger(__name__)

_HUNK_HEADER_RE = re.compile(r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@")


@dataclass
class _HunkLine:
    tag: str  # " " context, "-" removed, "+" added
    text: str
    eol: bool = True


@dataclass
class _Hunk:
    old_start: int
    old_len: int
    new_start: int
    new_len: int
    lines: list[_HunkLine] = field(default_factory=list)

    @property
    def old_side(self) -> list[_HunkLine]:
        return [ln for ln in self.lines if ln.tag != "+"]


# ---------- line helpers ----------


def _split_lines(s: str) -> list[str]:
    """Split on '\\n' only, keeping terminators (str.splitlines also breaks on \\f, \\x1c, ...)."""
    if not s:
        return []
    parts = s.split("\n")
    lines = [p + "\n" for p in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def _body(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def _detect_eol(s: str) -> str:
    return "\r\n" if "\r\n" in s else "\n"


def _line_matches(actual: str, expected: _HunkLine) -> bool:
    """Exact match, including whether the line is newline-terminated."""
    return _body(actual) == expected.text and actual.endswith("\n") == expected.eol


# ---------- parsing ----------


def _validate(diff: str) -> None:
    """Run the diff through the `patch` library: headers, hunk headers and line counts."""
    patch_set = patch_lib.fromstring(diff.encode("utf-8"))
    if not patch_set or not patch_set.items:
        raise DiffParseError("not a valid unified diff (missing ---/+++ headers or malformed hunk)")
    if len(patch_set.items) > 1:
        raise DiffParseError(
            f"diff touches {len(patch_set.items)} files; a block may only patch one"
        )


def _mark_no_eol(hunk: _Hunk) -> None:
    # '\ No newline at end of file' refers to the line right before it.
    if hunk.lines:
        hunk.lines[-1].eol = False


def _parse_hunks(diff: str) -> list[_Hunk]:
    """
    Parse the hunks of a single-file unified diff, driven by the line counts in
    each '@@ -l,n +l,n @@' header. Raw empty lines inside a hunk count as blank
    context (editors often strip the lone space).
    """
    hunks: list[_Hunk] = []
    lines = _split_lines(diff)
    i = 0
    while i < len(lines):
        m = _HUNK_HEADER_RE.match(lines[i])
        i += 1
        if not m:
            continue
        n = len(hunks) + 1
        hunk = _Hunk(
            old_start=int(m.group(1)),
            old_len=int(m.group(2) or "1"),
            new_start=int(m.group(3)),
            new_len=int(m.group(4) or "1"),
        )
        old_seen = new_seen = 0
        while old_seen < hunk.old_len or new_seen < hunk.new_len:
            if i >= len(lines):
                raise DiffParseError(f"hunk #{n} ended prematurely")
            raw = lines[i]
            i += 1
            body = _body(raw)
            if body.startswith("\\"):
                _mark_no_eol(hunk)
                continue
            tag, text = (body[0], body[1:]) if body else (" ", "")
            if tag not in (" ", "-", "+"):
                raise DiffParseError(f"hunk #{n}: unexpected line {raw!r}")
            if tag != "+":
                old_seen += 1
            if tag != "-":
                new_seen += 1
            if old_seen > hunk.old_len or new_seen > hunk.new_len:
                raise DiffParseError(f"hunk #{n}: more lines than its header declares")
            hunk.lines.append(_HunkLine(tag, text, raw.endswith("\n")))
        if i < len(lines) and lines[i].startswith("\\"):
            _mark_no_eol(hunk)
            i += 1
        hunks.append(hunk)

    if not hunks:
        raise DiffParseError("Patch string contains no valid hunks.")
    return hunks


# ---------- application ----------


def _middle_out_find(src: list[str], old: list[_HunkLine], hint: int, floor: int) -> int:
    """
    First position at or after `floor` where every old-side line matches exactly,
    trying the header position first and moving outward one line at a time.
    Returns -1 when there is no such position.
    """
    last = len(src) - len(old)
    if last < floor:
        return -1
    hint = min(max(hint, floor), last)
    for dist in range(max(hint - floor, last - hint) + 1):
        for pos in ((hint,) if dist == 0 else (hint - dist, hint + dist)):
            if floor <= pos <= last and all(
                _line_matches(src[pos + k], ln) for k, ln in enumerate(old)
            ):
                return pos
    return -1


def _apply_hunks(content: str, hunks: list[_Hunk], log) -> str:
    src = _split_lines(content)
    eol = _detect_eol(content)
    out: list[str] = []
    cursor = 0

    for n, hunk in enumerate(hunks, 1):
        old = hunk.old_side
        # '-l,0' means "insert after line l"; otherwise l is 1-based.
        hint = max(hunk.old_start - 1 if hunk.old_len else hunk.old_start, 0)

        if old:
            pos = _middle_out_find(src, old, hint, cursor)
        else:
            pos = hint if cursor <= hint <= len(src) else -1

        if pos < 0:
            if hint < cursor:
                raise DiffApplyError(f"hunk #{n} overlaps the previous hunk")
            raise DiffApplyError(
                f"hunk #{n} (@@ -{hunk.old_start},{hunk.old_len} "
                f"+{hunk.new_start},{hunk.new_len} @@) does not match the current content"
            )
        if pos != hint:
            log.debug("Hunk #%d applied at line %d (offset %+d)", n, pos + 1, pos - hint)

        out.extend(src[cursor:pos])
        k = pos
        for ln in hunk.lines:
            if ln.tag == " ":
                out.append(src[k])
                k += 1
            elif ln.tag == "-":
                k += 1
            else:
                out.append(ln.text + (eol if ln.eol else ""))
        cursor = k

    out.extend(src[cursor:])
    return "".join(out)


def patch_text(content: str, diff: str, *, logger=None, log: bool = False) -> str:
    """
    Apply a single-file unified diff to `content` and return the new text.

    Every hunk must match exactly (context and removed lines, including the
    presence of a final newline); a hunk may sit at an offset from its header
    position but never before the end of the previous hunk. All hunks apply or
    none do.

    Raises:
        DiffParseError: malformed diff, hunk header or line counts.
        DiffApplyError: a hunk does not match, or hunks overlap.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)

    if not diff.endswith("\n"):
        diff += "\n"
    _validate(diff)
    hunks = _parse_hunks(diff)
    log.debug("Parsed %d hunks; target has %d lines", len(hunks), len(_split_lines(content)))
    return _apply_hunks(content, hunks, log)


def apply_diff(
    block: ParsedBlock,
    base_path: str,
    logs_path: str,
    *,
    dry_run: bool = False,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> ApplyResult:
    """
    Patch the target file with the block's unified diff.

    On a parse or apply failure the file is left untouched, a diagnostic record
    is written under `logs_path` and the error is raised with its
    `diagnostics_path` set.
    """
    enabled = log
    log = resolve_logger(logger=logger, enabled=log, name=__name__)
    path = resolve_target(base_path, block.filename)
    log.debug("Applying diff to file: %s", path)

    current_content = read_text(path)
    try:
        new_content = patch_text(current_content, block.content, logger=logger, log=enabled)
    except PatchFailedError as e:
        verb = "parse" if isinstance(e, DiffParseError) else "apply"
        message = f"Failed to {verb} diff for file {path}: {e}"
        diagnostics_path = None
        try:
            diagnostics_path = write_patch_diagnostics(
                logs_path, path, str(e), current_content, block.content
            )
        except WriteFailure:
            _log.exception("Could not write patch diagnostics for %s", path)
        raise type(e)(message, diagnostics_path=diagnostics_path) from e

    return commit_content(
        block.filename, path, current_content, new_content, dry_run=dry_run, log=log
    )
