import difflib


def normalize_newlines(content: str) -> str:
    return content.replace("\r\n", "\n")


def render_diff(filename: str, old: str, new: str) -> str:
    """Unified diff of old -> new used for observability logging."""
    old_lines = old.splitlines(keepends=True)
    new_lines = new.splitlines(keepends=True)
    out = []
    for line in difflib.unified_diff(
        old_lines, new_lines, fromfile=f"a/{filename}", tofile=f"b/{filename}"
    ):
        if line.endswith("\n"):
            out.append(line)
        else:
            out.append(line + "\n\\ No newline at end of file\n")
    return "".join(out)
