import logging
import textwrap

import pytest

from clipforge.errors import NoDelimitersFound
from clipforge.extract import extract_blocks
from clipforge.models import BlockKind, ParsedBlock


def test_no_fences_raises():
    with pytest.raises(NoDelimitersFound):
        extract_blocks("nothing fenced here")


def test_single_block_with_directive():
    text = "Here you go:\n```python\n# filename: app.py\nprint('hi')\n```\n"
    assert extract_blocks(text) == [ParsedBlock("app.py", "print('hi')\n", BlockKind.FULL_CONTENT)]


def test_indented_fence_keeps_body_verbatim():
    text = "1. Update it:\n   ```python\n   # filename: x.py\n   code()\n   ```\n"
    [block] = extract_blocks(text)
    assert block.filename == "x.py"
    assert block.content == "   code()\n"


def test_nested_fence_stays_inside_outer_block():
    text = textwrap.dedent(
        """\
        ### `docs/guide.md`
        ```markdown
        Some doc
        ```python
        x = 1
        ```
        More
        ```
        """
    )
    [block] = extract_blocks(text)
    assert block.filename == "docs/guide.md"
    assert block.content == "Some doc\n```python\nx = 1\n```\nMore\n"


def test_unclosed_block_is_dropped_and_others_kept(caplog):
    text = textwrap.dedent(
        """\
        ### a.py
        ```python
        A
        ```
        ### b.py
        ```python
        B
        ### c.py
        ```python
        C
        ```
        """
    )
    with caplog.at_level(logging.WARNING):
        blocks = extract_blocks(text)
    assert [(b.filename, b.content) for b in blocks] == [("a.py", "A\n"), ("c.py", "C\n")]
    assert any("Unclosed block" in r.message for r in caplog.records)


def test_block_without_filename_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        assert extract_blocks("```python\nx = 1\n```\n") == []
    assert any("could not resolve a filename" in r.message for r in caplog.records)


def test_bare_fence_opens_when_nothing_is_open():
    [block] = extract_blocks("### notes.txt\n```\nhello\n```\n")
    assert block == ParsedBlock("notes.txt", "hello\n", BlockKind.FULL_CONTENT)


def test_mixed_kinds_in_source_order():
    text = textwrap.dedent(
        """\
        ```diff
        --- a/one.py
        +++ b/one.py
        @@ -1 +1 @@
        -a
        +b
        ```

        `two.py`
        ```replace
        <<<<<<< SEARCH
        old
        =======
        new
        >>>>>>> REPLACE
        ```

        ### three.txt
        ```text
        body
        ```
        """
    )
    blocks = extract_blocks(text)
    assert [(b.filename, b.kind) for b in blocks] == [
        ("one.py", BlockKind.UNIFIED_DIFF),
        ("two.py", BlockKind.SEARCH_REPLACE),
        ("three.txt", BlockKind.FULL_CONTENT),
    ]
    assert blocks[0].content.startswith("--- a/one.py\n")
    assert blocks[2].content == "body\n"


def test_same_file_twice_yields_two_blocks():
    text = "### a.py\n```python\n1\n```\n### a.py\n```python\n2\n```\n"
    assert [b.content for b in extract_blocks(text)] == ["1\n", "2\n"]


def test_crlf_text_heading_and_directive():
    text = (
        "### a.py\r\n"
        "```python\r\n"
        "A\r\n"
        "```\r\n"
        "```js\r\n"
        "// filename: b.js\r\n"
        "B\r\n"
        "```\r\n"
    )
    blocks = extract_blocks(text)
    assert [(b.filename, b.content) for b in blocks] == [("a.py", "A\r\n"), ("b.js", "B\r\n")]
