# clipforge/commit/result.py
import os
from dataclasses import dataclass

from ..utils.fs import remove_file, write_text_atomic
from ..utils.text import render_diff


@dataclass
class ApplyResult:
    """Outcome of applying one block to its target file."""

    filename: str
    path: str
    action: str  # "created", "modified", "deleted", "unchanged"
    old_content: str = ""
    new_content: str = ""
    diff: str = ""
    dry_run: bool = False


def commit_content(
    filename: str,
    path: str,
    old_content: str,
    new_content: str,
    *,
    delete: bool = False,
    dry_run: bool = False,
    log=None,
) -> ApplyResult:
    """
    Write (or delete) `path` so it holds `new_content`, skipping the write when
    nothing changed, and log the old -> new diff.

    `log` is whatever resolve_logger() handed the calling applier.
    """
    existed = os.path.exists(path)

    if delete:
        new_content = ""
        action = "deleted" if existed else "unchanged"
    elif new_content == old_content:
        action = "unchanged"
    else:
        action = "modified" if existed else "created"

    diff = render_diff(filename, old_content, new_content) if action != "unchanged" else ""

    if not dry_run:
        if action == "deleted":
            remove_file(path)
        elif action != "unchanged":
            write_text_atomic(path, new_content)

    if log is not None:
        if action == "unchanged":
            log.info("No changes detected for %s", path)
        else:
            prefix = "DRY RUN: would have " if dry_run else ""
            log.info("%s%s %s\nDiff for file: %s\n%s", prefix, action, path, path, diff)

    return ApplyResult(
        filename=filename,
        path=path,
        action=action,
        old_content=old_content,
        new_content=new_content,
        diff=diff,
        dry_run=dry_run,
    )
