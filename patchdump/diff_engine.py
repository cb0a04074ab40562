"""Unified diff rendering for document snapshots.

Turns Myers edit scripts into hunks and builds the text of the diff files
written for modified, added and deleted documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from patchdump.myers import (
    EditOperation,
    compute_edit_script,
    split_lines,
    trim_trailing_empty_lines,
)

DEFAULT_CONTEXT_LINES = 3
ADDED_HEADER = "New file added by patch:"
DELETED_HEADER = "File deleted by patch:"


class Classification(Enum):
    """Outcome of comparing a document across the two snapshots."""
    UNCHANGED = "unchanged"
    MODIFIED = "modified"
    ADDED = "added"
    DELETED = "deleted"


@dataclass
class DiffHunk:
    """One rendered change region with its surrounding context.

    Attributes:
        pre_start_line: 1-based first line in the old version
        pre_line_count: Number of old lines covered
        post_start_line: 1-based first line in the new version
        post_line_count: Number of new lines covered
        lines: Prefixed lines (' ' context, '-' removed, '+' added)
    """
    pre_start_line: int
    pre_line_count: int
    post_start_line: int
    post_line_count: int
    lines: list[str] = field(default_factory=list)

    @property
    def header(self) -> str:
        return (f"@@ -{self.pre_start_line},{self.pre_line_count} "
                f"+{self.post_start_line},{self.post_line_count} @@")


def render_hunks(
    source_lines: Sequence[str],
    dest_lines: Sequence[str],
    operations: Sequence[EditOperation],
    context_lines: int = DEFAULT_CONTEXT_LINES,
) -> list[DiffHunk]:
    """Render one hunk per edit operation.

    Hunks whose context windows overlap are not merged.

    Args:
        source_lines: Old version
        dest_lines: New version
        operations: Edit script from compute_edit_script()
        context_lines: Context lines before and after each change

    Returns:
        List of DiffHunk in script order
    """
    hunks = []
    source_len = len(source_lines)
    dest_len = len(dest_lines)

    for op in operations:
        if op.is_empty():
            continue

        line_a, line_b = op.source_start, op.dest_start
        count_a, count_b = op.delete_count, op.insert_count

        start_pre = max(0, line_a - context_lines)
        start_post = max(0, line_b - context_lines)
        end_pre = min(source_len, line_a + count_a + context_lines)
        end_post = min(dest_len, line_b + count_b + context_lines)

        lines = [" " + source_lines[i] for i in range(start_pre, min(line_a, source_len))]
        lines.extend("-" + source_lines[i] for i in range(line_a, min(line_a + count_a, source_len)))
        lines.extend("+" + dest_lines[i] for i in range(line_b, min(line_b + count_b, dest_len)))

        trailing_pre = line_a + count_a
        trailing_post = line_b + count_b
        trailing = 0
        while (trailing < context_lines
               and trailing_pre + trailing < end_pre
               and trailing_post + trailing < end_post):
            lines.append(" " + source_lines[trailing_pre + trailing])
            trailing += 1

        hunks.append(DiffHunk(
            pre_start_line=start_pre + 1,
            pre_line_count=end_pre - start_pre,
            post_start_line=start_post + 1,
            post_line_count=end_post - start_post,
            lines=lines,
        ))

    return hunks


def generate_hunks(pre_text: str, post_text: str, context_lines: int = DEFAULT_CONTEXT_LINES) -> list[DiffHunk]:
    """Diff two texts line by line, ignoring trailing empty lines."""
    pre_lines = trim_trailing_empty_lines(split_lines(pre_text))
    post_lines = trim_trailing_empty_lines(split_lines(post_text))
    script = compute_edit_script(pre_lines, post_lines)
    return render_hunks(pre_lines, post_lines, script, context_lines)


def format_unified_diff(pre_label: str, post_label: str, hunks: Sequence[DiffHunk]) -> str:
    """Build a two-file unified diff; labels are written with forward slashes."""
    pre_label = pre_label.replace("\\", "/")
    post_label = post_label.replace("\\", "/")
    out = [f"--- {pre_label}", f"+++ {post_label}"]
    for hunk in hunks:
        out.append(hunk.header)
        out.extend(hunk.lines)
    return "\n".join(out) + "\n"


def format_added(post_text: str) -> str:
    return f"{ADDED_HEADER}\n\n{post_text}"


def format_deleted(pre_text: str) -> str:
    return f"{DELETED_HEADER}\n\n{pre_text}"


@dataclass
class DocumentDiff:
    """Comparison result for a single document.

    Attributes:
        key: Document key (``domain/path``)
        classification: How the document changed
        pre_text: Canonical pre-patch text (None when added)
        post_text: Canonical post-patch text (None when deleted)
    """
    key: str
    classification: Classification
    pre_text: str | None
    post_text: str | None

    def hunks(self, context_lines: int = DEFAULT_CONTEXT_LINES) -> list[DiffHunk]:
        if self.classification is not Classification.MODIFIED:
            return []
        return generate_hunks(self.pre_text or "", self.post_text or "", context_lines)

    def render(self, header_prefix: str = "", context_lines: int = DEFAULT_CONTEXT_LINES) -> str | None:
        """Text of the diff file for this document, or None when unchanged."""
        if self.classification is Classification.ADDED:
            return format_added(self.post_text or "")
        if self.classification is Classification.DELETED:
            return format_deleted(self.pre_text or "")
        if self.classification is Classification.UNCHANGED:
            return None
        return format_unified_diff(
            diff_label(header_prefix, "pre-patch", self.key),
            diff_label(header_prefix, "post-patch", self.key),
            self.hunks(context_lines),
        )

    def compute_diff_stats(self, context_lines: int = DEFAULT_CONTEXT_LINES) -> tuple[int, int]:
        """Compute (added_lines, deleted_lines) for this document."""
        if self.classification is Classification.ADDED:
            return len(trim_trailing_empty_lines(split_lines(self.post_text or ""))), 0
        if self.classification is Classification.DELETED:
            return 0, len(trim_trailing_empty_lines(split_lines(self.pre_text or "")))
        added = deleted = 0
        for hunk in self.hunks(context_lines):
            added += sum(1 for line in hunk.lines if line.startswith("+"))
            deleted += sum(1 for line in hunk.lines if line.startswith("-"))
        return added, deleted

    def get_summary(self) -> str:
        """Human-readable summary like "+12 / -5"."""
        added, deleted = self.compute_diff_stats()
        return f"+{added} / -{deleted}"


def diff_label(prefix: str, phase: str, key: str) -> str:
    """Conventional location of a dump inside the output root, e.g. ``pre-patch/mod/x.json``."""
    parts = (prefix.replace("\\", "/").strip("/"), phase, key.replace("\\", "/").replace(":", "-"))
    return "/".join(p for p in parts if p)
