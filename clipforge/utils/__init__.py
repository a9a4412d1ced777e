# clipforge/utils/__init__.py
from .fs import read_text, remove_file, write_text_atomic
from .paths import normalize_filename, resolve_target
from .text import normalize_newlines, render_diff

__all__ = [
    "read_text",
    "remove_file",
    "write_text_atomic",
    "normalize_filename",
    "resolve_target",
    "normalize_newlines",
    "render_diff",
]
