import logging
import textwrap

import pytest

from clipforge.commit import (
    apply_search_replace,
    parse_search_replace_pairs,
    search_replace_text,
)
from clipforge.errors import NoSuccessfulReplacements
from clipforge.models import BlockKind, ParsedBlock


def pairs(*items):
    out = []
    for search, replace in items:
        out.append(f"<<<<<<< SEARCH\n{search}=======\n{replace}>>>>>>> REPLACE\n")
    return "".join(out)


def sr_block(name, content):
    return ParsedBlock(name, content, BlockKind.SEARCH_REPLACE)


def read(path):
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def test_parse_pairs_multiline_and_empty_spans():
    text = pairs(("a\nb\n", "c\n"), ("", "whole\n"))
    assert parse_search_replace_pairs(text) == [("a\nb\n", "c\n"), ("", "whole\n")]


def test_parse_pairs_tolerates_longer_markers_and_crlf():
    text = "<<<<<<<<<< SEARCH\r\nold\r\n=========== \r\nnew\r\n>>>>>>>>> REPLACE\r\n"
    assert parse_search_replace_pairs(text) == [("old\n", "new\n")]


def test_parse_pairs_none():
    assert parse_search_replace_pairs("just text") == []


def test_exact_match_replaces_every_occurrence():
    outcome = search_replace_text("x = 1\ny = 1\nx = 1\n", pairs(("x = 1\n", "x = 2\n")))
    assert outcome.content == "x = 2\ny = 1\nx = 2\n"
    assert (outcome.applied, outcome.failed) == (1, 0)


def test_pairs_apply_cumulatively():
    outcome = search_replace_text("a\n", pairs(("a\n", "b\n"), ("b\n", "c\n")))
    assert outcome.content == "c\n"
    assert outcome.applied == 2


def test_right_trimmed_retry():
    content = "def f():\n    pass"
    outcome = search_replace_text(content, pairs(("    pass\n", "    return 1\n")))
    assert outcome.content == "def f():\n    return 1"


def test_empty_search_replaces_whole_content():
    outcome = search_replace_text("anything\n", pairs(("\n", "fresh\n")))
    assert outcome.content == "fresh\n"


def test_missing_pair_is_skipped_with_warning(caplog):
    with caplog.at_level(logging.WARNING):
        outcome = search_replace_text("a\n", pairs(("zzz\n", "y\n"), ("a\n", "b\n")))
    assert outcome.content == "b\n"
    assert (outcome.applied, outcome.failed) == (1, 1)
    assert any("not found" in r.message for r in caplog.records)


def test_file_content_newlines_normalized():
    outcome = search_replace_text("a\r\nb\r\n", pairs(("a\nb\n", "c\n")))
    assert outcome.content == "c\n"


@pytest.mark.parametrize("block", ["no markers at all", pairs(("missing\n", "x\n"))])
def test_no_success_raises(block):
    with pytest.raises(NoSuccessfulReplacements):
        search_replace_text("content\n", block)


# ---------- apply_search_replace ----------


def test_empty_search_creates_missing_file(tmp_path):
    result = apply_search_replace(sr_block("new/file.txt", pairs(("", "hello\n"))), str(tmp_path))
    assert result.action == "created"
    assert read(tmp_path / "new" / "file.txt") == "hello\n"


def test_edit_existing_file(tmp_path):
    target = tmp_path / "app.py"
    target.write_text(
        textwrap.dedent(
            """\
            def greet():
                return "hi"
            """
        ),
        encoding="utf-8",
    )
    block = sr_block("app.py", pairs(('    return "hi"\n', '    return "hello"\n')))
    result = apply_search_replace(block, str(tmp_path))
    assert result.action == "modified"
    assert read(target) == 'def greet():\n    return "hello"\n'


def test_all_missing_leaves_file_unchanged(tmp_path):
    target = tmp_path / "a.txt"
    target.write_text("keep me\n", encoding="utf-8")
    with pytest.raises(NoSuccessfulReplacements) as excinfo:
        apply_search_replace(sr_block("a.txt", pairs(("nope\n", "x\n"))), str(tmp_path))
    assert "a.txt" in str(excinfo.value)
    assert read(target) == "keep me\n"


def test_whitespace_only_result_deletes_file(tmp_path):
    target = tmp_path / "gone.txt"
    target.write_text("bye\n", encoding="utf-8")
    result = apply_search_replace(sr_block("gone.txt", pairs(("bye\n", "\n"))), str(tmp_path))
    assert result.action == "deleted"
    assert not target.exists()


def test_dry_run_delete_keeps_file(tmp_path):
    target = tmp_path / "gone.txt"
    target.write_text("bye\n", encoding="utf-8")
    result = apply_search_replace(sr_block("gone.txt", pairs(("bye\n", ""))), str(tmp_path), dry_run=True)
    assert result.action == "deleted"
    assert target.exists()


def test_whitespace_result_on_missing_file_is_unchanged(tmp_path):
    result = apply_search_replace(sr_block("never.txt", pairs(("", "\n"))), str(tmp_path))
    assert result.action == "unchanged"
    assert result.diff == ""
    assert not (tmp_path / "never.txt").exists()


def test_log_flag_reaches_pair_progress(tmp_path, caplog):
    (tmp_path / "a.txt").write_text("a\n", encoding="utf-8")
    with caplog.at_level(logging.DEBUG):
        apply_search_replace(sr_block("a.txt", pairs(("a\n", "b\n"))), str(tmp_path), log=True)
    assert any("Applied SEARCH/REPLACE pair #1" in r.message for r in caplog.records)
