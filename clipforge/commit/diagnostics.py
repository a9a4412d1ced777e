# clipforge/commit/diagnostics.py
import json
import logging
import os
import uuid
from datetime import datetime, timezone

from ..errors.commit import WriteFailure

log = logging.getLogger(__name__)

DIAGNOSTICS_SUFFIX = "_failed_patch_diagnostics.json"


def write_patch_diagnostics(
    logs_path: str,
    file_path: str,
    error_message: str,
    current_content: str,
    diff_content: str,
) -> str:
    """
    Persist everything needed to reproduce a failed patch offline.

    The record lands in `logs_path` as
    ``{YYYYmmddHHMMSS}_{uuid4}_failed_patch_diagnostics.json`` and is never read
    back by the library. Returns the artifact path.
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    diagnostics_path = os.path.join(logs_path, f"{timestamp}_{uuid.uuid4()}{DIAGNOSTICS_SUFFIX}")
    record = {
        "file_path": file_path,
        "error_message": error_message,
        "current_content": current_content,
        "diff_content": diff_content,
    }
    try:
        os.makedirs(logs_path, exist_ok=True)
        with open(diagnostics_path, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=2, ensure_ascii=False)
    except OSError as e:
        raise WriteFailure(diagnostics_path, e) from e

    log.error("Logged diff error diagnostics: %s", diagnostics_path)
    return diagnostics_path
