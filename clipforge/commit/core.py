# clipforge/commit/core.py
from __future__ import annotations

import asyncio
import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors.commit import CommitError
from ..errors.patch import PatchFailedError
from ..models.blocks import BlockKind, ParsedBlock
from .diff import apply_diff
from .full import apply_full_content
from .result import ApplyResult
from .search_replace import apply_search_replace

log = logging.getLogger(__name__)

_MODES = {"best_effort", "fail_fast"}


@dataclass
class ApplySummary:
    """Outcome of applying a batch of blocks."""

    success: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    # Map filename -> error string (when failed)
    errors: Dict[str, str] = field(default_factory=dict)
    dry_run: bool = False
    results: List[ApplyResult] = field(default_factory=list)


@dataclass
class ContentApplier:
    """
    Applies extracted blocks under `base_path`.

    Args:
        base_path: Root directory every target must stay inside.
        logs_path: Where failed-patch diagnostics go; defaults to
                   `<base_path>/.clipforge/logs`.
        dry_run: Compute and log every change without touching target files.
        logger / log: opt-in per-operation logging, see clipforge._logging.
    """

    base_path: str
    logs_path: Optional[str] = None
    dry_run: bool = False
    logger: Optional[logging.Logger] = None
    log: bool = False

    def __post_init__(self) -> None:
        if not self.base_path:
            raise ValueError("base_path must be a non-empty directory path")
        if os.path.exists(self.base_path) and not os.path.isdir(self.base_path):
            raise ValueError(f"base_path is not a directory: {self.base_path}")
        if self.logs_path is None:
            self.logs_path = os.path.join(self.base_path, ".clipforge", "logs")

    def apply(self, block: ParsedBlock) -> ApplyResult:
        """Apply one block with the strategy its kind selects."""
        opts = {"dry_run": self.dry_run, "logger": self.logger, "log": self.log}
        if block.kind is BlockKind.FULL_CONTENT:
            return apply_full_content(block, self.base_path, **opts)
        if block.kind is BlockKind.UNIFIED_DIFF:
            return apply_diff(block, self.base_path, self.logs_path, **opts)
        if block.kind is BlockKind.SEARCH_REPLACE:
            return apply_search_replace(block, self.base_path, **opts)
        raise ValueError(f"Unknown block kind: {block.kind!r}")

    def apply_all(self, blocks: List[ParsedBlock], *, mode: str = "best_effort") -> ApplySummary:
        """
        Apply blocks in order.

        mode: "best_effort" (default) records each failure and carries on;
              "fail_fast" re-raises the first failure after recording it.
        """
        if mode not in _MODES:
            raise ValueError("mode must be one of {'best_effort','fail_fast'}")
        summary = ApplySummary(dry_run=self.dry_run)
        for block in blocks:
            try:
                self._record(summary, block, self.apply(block))
            except (CommitError, PatchFailedError) as e:
                self._record_failure(summary, block, e)
                if mode == "fail_fast":
                    raise
        return summary

    async def apply_async(self, block: ParsedBlock) -> ApplyResult:
        return await asyncio.to_thread(self.apply, block)

    async def apply_all_async(
        self, blocks: List[ParsedBlock], *, mode: str = "best_effort"
    ) -> ApplySummary:
        """
        Like apply_all, but blocks for different files run concurrently in
        worker threads. Blocks for the same file still apply in source order.
        With mode="fail_fast" a file's remaining blocks are skipped after its
        first failure, and the earliest failure is raised once all files finish.
        """
        if mode not in _MODES:
            raise ValueError("mode must be one of {'best_effort','fail_fast'}")

        groups: Dict[str, List[int]] = {}
        for i, block in enumerate(blocks):
            groups.setdefault(block.filename, []).append(i)

        outcomes: Dict[int, object] = {}

        async def run_group(indices: List[int]) -> None:
            for i in indices:
                try:
                    outcomes[i] = await self.apply_async(blocks[i])
                except (CommitError, PatchFailedError) as e:
                    outcomes[i] = e
                    if mode == "fail_fast":
                        return

        await asyncio.gather(*(run_group(ix) for ix in groups.values()))

        summary = ApplySummary(dry_run=self.dry_run)
        first_error: Optional[BaseException] = None
        for i in sorted(outcomes):
            outcome = outcomes[i]
            if isinstance(outcome, ApplyResult):
                self._record(summary, blocks[i], outcome)
            else:
                self._record_failure(summary, blocks[i], outcome)
                first_error = first_error or outcome
        if first_error is not None and mode == "fail_fast":
            raise first_error
        return summary

    def _record(self, summary: ApplySummary, block: ParsedBlock, result: ApplyResult) -> None:
        summary.results.append(result)
        summary.success.append(block.filename)

    def _record_failure(self, summary: ApplySummary, block: ParsedBlock, error: BaseException) -> None:
        log.error("Failed to apply %s block for %s: %s", block.kind.value, block.filename, error)
        summary.failed.append(block.filename)
        summary.errors[block.filename] = str(error)
