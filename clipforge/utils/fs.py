# clipforge/utils/fs.py
import contextlib
import os
import shutil
import tempfile

from ..errors.commit import ReadFailure, WriteFailure


def read_text(path: str) -> str:
    """
    Read a target file verbatim (line endings untouched).
    A missing file reads as an empty string.
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except FileNotFoundError:
        return ""
    except (OSError, UnicodeDecodeError) as e:
        raise ReadFailure(path, e) from e


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_text_atomic(path: str, content: str) -> None:
    """
    Stage content in a same-directory tempfile, then promote it with os.replace()
    so the target is either fully rewritten or left exactly as it was.
    """
    dirpath = os.path.dirname(path)
    tmp = None
    try:
        os.makedirs(dirpath, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=".clipforge-", suffix=".tmp", dir=dirpath)
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        if os.path.exists(path):
            with contextlib.suppress(OSError):
                shutil.copymode(path, tmp)
        else:
            # mkstemp creates 0600; a new file gets the usual umask-derived mode.
            os.chmod(tmp, 0o666 & ~_current_umask())
        os.replace(tmp, path)
    except OSError as e:
        if tmp is not None:
            with contextlib.suppress(OSError):
                os.remove(tmp)
        raise WriteFailure(path, e) from e


def remove_file(path: str) -> bool:
    """Delete a target file. Returns False when there was nothing to delete."""
    try:
        os.remove(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise WriteFailure(path, e) from e
    return True
