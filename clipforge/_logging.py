"""
Logging policy for clipforge.

Two channels:

* Module loggers (`logging.getLogger(__name__)`) carry what an operator must
  always see: an unclosed fence, a block with no resolvable filename, a
  SEARCH block that did not match, a diagnostics file written after a failed
  diff.
* `resolve_logger()` carries per-apply chatter (the rendered diff of every
  write, hunk offsets, pair-by-pair progress). `ContentApplier(logger=...)`
  or `log=True` turns it on; otherwise it goes to a NoopLogger.
"""
from __future__ import annotations

import logging


class NoopLogger:
    def debug(self, *args, **kwargs):  # type: ignore[no-untyped-def]
        pass

    info = warning = error = exception = critical = debug


def resolve_logger(
    logger: logging.Logger | None = None,
    *,
    enabled: bool = False,
    name: str | None = None,
    level: int = logging.INFO,
) -> logging.Logger | NoopLogger:
    """
    Return a usable logger according to opt-in policy.

    - If `logger` is provided, use it.
    - Else if `enabled` is True, create/get a named logger.
    - Else return a NoopLogger that ignores calls.
    """
    if logger is not None:
        return logger
    if enabled:
        lg = logging.getLogger(name or "clipforge")
        lg.setLevel(level)
        # Bubble up to the root so pytest's caplog sees the records.
        lg.propagate = True
        return lg
    return NoopLogger()
