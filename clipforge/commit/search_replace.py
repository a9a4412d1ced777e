# clipforge/commit/search_replace.py
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from .._logging import resolve_logger
from ..errors.commit import NoSuccessfulReplacements
from ..models.blocks import ParsedBlock
from ..utils.fs import read_text
from ..utils.paths import resolve_target
from ..utils.text import normalize_newlines
from .result import ApplyResult, commit_content

__all__ = [
    "SearchReplaceOutcome",
    "parse_search_replace_pairs",
    "search_replace_text",
    "apply_search_replace",
]

_log = logging.getLogger(__name__)

_PAIR_RE = re.compile(
    r"^[ \t]*<{3,}[ \t]*SEARCH[ \t]*\n"
    r"(?P<search>.*?)"
    r"^[ \t]*={3,}[ \t]*\n"
    r"(?P<replace>.*?)"
    r"^[ \t]*>{3,}[ \t]*REPLACE",
    re.DOTALL | re.MULTILINE,
)


@dataclass
class SearchReplaceOutcome:
    content: str
    applied: int = 0
    failed: int = 0


def parse_search_replace_pairs(text: str) -> list[tuple[str, str]]:
    """Return the (search, replace) spans of every SEARCH/REPLACE pair, in order."""
    text = normalize_newlines(text)
    return [(m.group("search"), m.group("replace")) for m in _PAIR_RE.finditer(text)]


def search_replace_text(content: str, block_content: str, *, logger=None, log: bool = False) -> SearchReplaceOutcome:
    """
    Apply the block's SEARCH/REPLACE pairs to `content`, one after another.

    For each pair:
      * a blank search span replaces the whole running content;
      * an exact match replaces every occurrence;
      * otherwise both spans are right-trimmed and matched again;
      * otherwise the pair is skipped with a warning.

    Raises:
        NoSuccessfulReplacements: if the block has no pairs or none applied.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__, level=logging.DEBUG)

    pairs = parse_search_replace_pairs(block_content)
    if not pairs:
        raise NoSuccessfulReplacements("No SEARCH/REPLACE pairs found in block")

    outcome = SearchReplaceOutcome(content=normalize_newlines(content))
    for n, (search, replace) in enumerate(pairs, 1):
        if not search.strip():
            outcome.content = replace
        elif search in outcome.content:
            outcome.content = outcome.content.replace(search, replace)
        elif search.rstrip() and search.rstrip() in outcome.content:
            outcome.content = outcome.content.replace(search.rstrip(), replace.rstrip())
        else:
            _log.warning("SEARCH block #%d not found in content; skipping", n)
            outcome.failed += 1
            continue
        log.debug("Applied SEARCH/REPLACE pair #%d", n)
        outcome.applied += 1

    if not outcome.applied:
        raise NoSuccessfulReplacements(
            f"None of the {len(pairs)} SEARCH/REPLACE pairs matched"
        )
    return outcome


def apply_search_replace(
    block: ParsedBlock,
    base_path: str,
    *,
    dry_run: bool = False,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> ApplyResult:
    """
    Edit the target file with the block's SEARCH/REPLACE pairs.

    A missing file is treated as empty. If the edits leave only whitespace the
    file is deleted.
    """
    enabled = log
    log = resolve_logger(logger=logger, enabled=log, name=__name__)
    path = resolve_target(base_path, block.filename)
    log.debug("Applying search/replace to file: %s", path)

    old_content = read_text(path)
    try:
        outcome = search_replace_text(old_content, block.content, logger=logger, log=enabled)
    except NoSuccessfulReplacements as e:
        raise NoSuccessfulReplacements(f"{path}: {e}") from e

    if outcome.failed:
        log.info("%d of %d pairs applied to %s", outcome.applied, outcome.applied + outcome.failed, path)

    return commit_content(
        block.filename,
        path,
        old_content,
        outcome.content,
        delete=not outcome.content.strip(),
        dry_run=dry_run,
        log=log,
    )
