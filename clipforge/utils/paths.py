# clipforge/utils/paths.py
import os
import re
from typing import Optional

from ..errors.path import PathViolation

_DRIVE_RE = re.compile(r"^[A-Za-z]:")


def normalize_filename(raw: Optional[str]) -> Optional[str]:
    """
    Turn a captured filename token into a normalized relative path.

    Strips surrounding quotes/backticks, git-diff `a/` / `b/` prefixes and
    leading `./`, and converts backslashes to forward slashes. Returns None
    for anything that ends up empty.
    """
    if not raw:
        return None
    name = raw.strip().strip("`'\"").strip()
    name = name.replace("\\", "/")
    if name.startswith(("a/", "b/")):
        name = name[2:]
    while name.startswith("./"):
        name = name[2:]
    return name or None


def resolve_target(base_path: str, filename: str) -> str:
    """
    Join a block filename onto base_path while enforcing containment.
    Raises PathViolation if the filename is absolute or resolves outside base_path.
    """
    if filename.startswith(("/", "\\")) or os.path.isabs(filename) or _DRIVE_RE.match(filename):
        raise PathViolation(f"Absolute path not allowed: '{filename}'")
    base_real = os.path.realpath(base_path)
    target = os.path.abspath(os.path.join(base_real, *filename.split("/")))
    # commonpath instead of a prefix check: '/base-other' must not pass for '/base'.
    if target == base_real or os.path.commonpath([base_real, target]) != base_real:
        raise PathViolation(f"Path traversal attempt detected for '{filename}'")
    return target
