import textwrap

from clipforge import process_text


def read(path):
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def test_no_fences_yields_empty_summary(tmp_path):
    summary = process_text("Sorry, I have no code for you.", str(tmp_path))
    assert summary.success == []
    assert summary.failed == []


def test_end_to_end_mixed_response(tmp_path):
    (tmp_path / "src").mkdir()
    (tmp_path / "src" / "app.py").write_text("def main():\n    return 1\n", encoding="utf-8")
    (tmp_path / "notes.md").write_text("# Notes\nold line\n", encoding="utf-8")

    response = textwrap.dedent(
        """\
        Sure! Here are the changes.

        ### src/app.py
        ```diff
        --- a/src/app.py
        +++ b/src/app.py
        @@ -1,2 +1,2 @@
         def main():
        -    return 1
        +    return 2
        ```

        `notes.md`
        ```replace
        <<<<<<< SEARCH
        old line
        =======
        new line
        >>>>>>> REPLACE
        ```

        And a brand new config:

        ```toml
        # filename: config/settings.toml
        debug = true
        ```

        ```python
        print("no filename, ignored")
        ```
        """
    )
    summary = process_text(response, str(tmp_path))

    assert summary.failed == []
    assert summary.success == ["src/app.py", "notes.md", "config/settings.toml"]
    assert read(tmp_path / "src" / "app.py") == "def main():\n    return 2\n"
    assert read(tmp_path / "notes.md") == "# Notes\nnew line\n"
    assert read(tmp_path / "config" / "settings.toml") == "debug = true\n"


def test_dry_run_passes_through(tmp_path):
    summary = process_text("### a.txt\n```text\nx\n```\n", str(tmp_path), dry_run=True)
    assert summary.dry_run is True
    assert summary.results[0].action == "created"
    assert not (tmp_path / "a.txt").exists()
