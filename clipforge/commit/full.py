# clipforge/commit/full.py
import logging

from .._logging import resolve_logger
from ..models.blocks import ParsedBlock
from ..utils.fs import read_text
from ..utils.paths import resolve_target
from .result import ApplyResult, commit_content


def apply_full_content(
    block: ParsedBlock,
    base_path: str,
    *,
    dry_run: bool = False,
    logger: logging.Logger | None = None,
    log: bool = False,
) -> ApplyResult:
    """
    Replace the target file with the block's content, verbatim.

    A missing file counts as empty. Nothing is written when the content is
    already identical, so applying the same block twice writes once.

    Raises:
        PathViolation: if the filename escapes base_path.
        ReadFailure / WriteFailure: on I/O errors.
    """
    log = resolve_logger(logger=logger, enabled=log, name=__name__)
    path = resolve_target(base_path, block.filename)
    log.debug("Applying full content to file: %s", path)

    old_content = read_text(path)
    return commit_content(
        block.filename, path, old_content, block.content, dry_run=dry_run, log=log
    )
