# clipforge/core.py
import logging

from .commit import ApplySummary, ContentApplier
from .errors import NoDelimitersFound
from .extract import extract_blocks

logger = logging.getLogger(__name__)


def process_text(text: str, base_path: str, *, mode: str = "best_effort", **options) -> ApplySummary:
    """
    Extract every labeled block from `text` and apply it under `base_path`.

    `options` are passed to ContentApplier (logs_path, dry_run, logger, log).
    Text without any fence yields an empty summary rather than an error.
    """
    applier = ContentApplier(base_path, **options)
    try:
        blocks = extract_blocks(text)
    except NoDelimitersFound:
        logger.info("No code blocks found in text; nothing to apply")
        return ApplySummary(dry_run=applier.dry_run)

    logger.debug("Applying %d blocks under %s", len(blocks), base_path)
    return applier.apply_all(blocks, mode=mode)
