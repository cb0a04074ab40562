"""Unit tests for diff_engine module.

Tests hunk rendering, diff file formatting and the DocumentDiff dataclass.
"""

import pytest

from patchdump.diff_engine import (
    Classification,
    DiffHunk,
    DocumentDiff,
    diff_label,
    format_added,
    format_deleted,
    format_unified_diff,
    generate_hunks,
    render_hunks,
)
from patchdump.myers import EditOperation, compute_edit_script


class TestRenderHunks:
    """Tests for render_hunks."""

    def test_header_arithmetic_with_one_context_line(self):
        """Context window is clamped to the document start."""
        source = ["a", "b", "c", "d", "e"]
        dest = ["a", "B", "c", "d", "e"]
        hunks = render_hunks(source, dest, compute_edit_script(source, dest), context_lines=1)

        assert len(hunks) == 1
        assert hunks[0].header == "@@ -1,3 +1,3 @@"
        assert hunks[0].lines == [" a", "-b", "+B", " c"]

    def test_context_clamped_at_end(self):
        source = ["a", "b", "c", "d", "e"]
        dest = ["a", "b", "c", "d", "E"]
        hunks = render_hunks(source, dest, compute_edit_script(source, dest), context_lines=3)

        assert hunks[0].header == "@@ -2,4 +2,4 @@"
        assert hunks[0].lines == [" b", " c", " d", "-e", "+E"]

    def test_no_merging_of_close_changes(self):
        """Each edit operation renders its own hunk even when contexts overlap."""
        source = ["a", "b", "c", "d", "e"]
        dest = ["a", "B", "c", "D", "e"]
        hunks = render_hunks(source, dest, compute_edit_script(source, dest), context_lines=3)

        assert len(hunks) == 2
        assert hunks[0].lines == [" a", "-b", "+B", " c", " d", " e"]
        assert hunks[1].lines == [" a", " b", " c", "-d", "+D", " e"]

    def test_empty_operations_are_skipped(self):
        source = ["a"]
        dest = ["b"]
        ops = [EditOperation(0, 0, 0, 0), EditOperation(0, 0, 1, 1)]
        hunks = render_hunks(source, dest, ops, context_lines=3)
        assert len(hunks) == 1
        assert hunks[0].lines == ["-a", "+b"]

    def test_insertion_into_empty_source(self):
        hunks = render_hunks([], ["x", "y"], compute_edit_script([], ["x", "y"]), context_lines=3)
        assert hunks[0].header == "@@ -1,0 +1,2 @@"
        assert hunks[0].lines == ["+x", "+y"]

    def test_zero_context(self):
        source = ["a", "b", "c"]
        dest = ["a", "x", "c"]
        hunks = render_hunks(source, dest, compute_edit_script(source, dest), context_lines=0)
        assert hunks[0].header == "@@ -2,1 +2,1 @@"
        assert hunks[0].lines == ["-b", "+x"]


class TestGenerateHunks:
    """Tests for generate_hunks on whole texts."""

    def test_trailing_newline_is_ignored(self):
        assert generate_hunks("a\nb\n", "a\nb") == []

    def test_json_value_change(self):
        pre = '{\n  "a": 1\n}'
        post = '{\n  "a": 2\n}'
        hunks = generate_hunks(pre, post)
        assert len(hunks) == 1
        assert hunks[0].header == "@@ -1,3 +1,3 @@"
        assert hunks[0].lines == [' {', '-  "a": 1', '+  "a": 2', ' }']


class TestFormatting:
    """Tests for diff file bodies."""

    def test_unified_diff_layout(self):
        hunk = DiffHunk(1, 1, 1, 1, ["-a", "+b"])
        text = format_unified_diff("pre-patch/mod/x.json", "post-patch/mod/x.json", [hunk])
        assert text == (
            "--- pre-patch/mod/x.json\n"
            "+++ post-patch/mod/x.json\n"
            "@@ -1,1 +1,1 @@\n"
            "-a\n"
            "+b\n"
        )

    def test_labels_use_forward_slashes(self):
        text = format_unified_diff("pre-patch\\mod\\x.json", "post-patch\\mod\\x.json", [])
        assert text.splitlines() == ["--- pre-patch/mod/x.json", "+++ post-patch/mod/x.json"]

    def test_added_and_deleted_headers(self):
        assert format_added("{}") == "New file added by patch:\n\n{}"
        assert format_deleted("{}") == "File deleted by patch:\n\n{}"

    @pytest.mark.parametrize("prefix,expected", [
        ("", "pre-patch/mod/x.json"),
        ("dump/server", "dump/server/pre-patch/mod/x.json"),
        ("dump\\server\\", "dump/server/pre-patch/mod/x.json"),
    ])
    def test_diff_label(self, prefix, expected):
        assert diff_label(prefix, "pre-patch", "mod/x.json") == expected

    def test_diff_label_replaces_colons(self):
        assert diff_label("", "post-patch", "mod/a:b.json") == "post-patch/mod/a-b.json"


class TestDocumentDiff:
    """Tests for DocumentDiff dataclass."""

    def test_render_modified(self):
        diff = DocumentDiff("mod/x.json", Classification.MODIFIED, "a\nb\nc", "a\nB\nc")
        text = diff.render(context_lines=1)
        assert text.splitlines() == [
            "--- pre-patch/mod/x.json",
            "+++ post-patch/mod/x.json",
            "@@ -1,3 +1,3 @@",
            " a",
            "-b",
            "+B",
            " c",
        ]

    def test_render_added(self):
        diff = DocumentDiff("mod/x.json", Classification.ADDED, None, "{}")
        assert diff.render() == "New file added by patch:\n\n{}"

    def test_render_deleted(self):
        diff = DocumentDiff("mod/x.json", Classification.DELETED, "{}", None)
        assert diff.render() == "File deleted by patch:\n\n{}"

    def test_render_unchanged(self):
        diff = DocumentDiff("mod/x.json", Classification.UNCHANGED, "{}", "{}")
        assert diff.render() is None
        assert diff.hunks() == []

    def test_compute_diff_stats(self):
        added = DocumentDiff("k", Classification.ADDED, None, "a\nb\n")
        assert added.compute_diff_stats() == (2, 0)

        deleted = DocumentDiff("k", Classification.DELETED, "a\nb\nc", None)
        assert deleted.compute_diff_stats() == (0, 3)

        modified = DocumentDiff("k", Classification.MODIFIED, "a\nb\nc", "a\nx\ny\nc")
        assert modified.compute_diff_stats() == (2, 1)

    def test_get_summary(self):
        diff = DocumentDiff("k", Classification.MODIFIED, "a\nb", "a\nc")
        assert diff.get_summary() == "+1 / -1"
