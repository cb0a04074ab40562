"""Myers shortest edit script over lines.

Follows Eugene W. Myers, "An O(ND) Difference Algorithm and Its Variations"
(1986): a greedy forward search over diagonals that records the frontier of
every round so the path can be walked back afterwards.

Complexity is O((N + M) * D) time; the recorded frontiers take O(D^2) space.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Sequence

EQUAL = "="
DELETE = "-"
INSERT = "+"

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass
class EditOperation:
    """One contiguous change region.

    Indices are zero-based: ``delete_count`` source lines starting at
    ``source_start`` are replaced by ``insert_count`` destination lines
    starting at ``dest_start``.
    """
    source_start: int
    dest_start: int
    delete_count: int = 0
    insert_count: int = 0

    def is_empty(self) -> bool:
        return self.delete_count == 0 and self.insert_count == 0


def split_lines(text: str) -> list[str]:
    """Split on any line break; a trailing break yields a trailing empty line."""
    return _LINE_BREAK.split(text)


def trim_trailing_empty_lines(lines: Sequence[str]) -> list[str]:
    end = len(lines)
    while end > 0 and not lines[end - 1]:
        end -= 1
    return list(lines[:end])


def shortest_edit_path(a: Sequence[str], b: Sequence[str]) -> list[tuple[str, int, int]]:
    """Compute one shortest path through the edit graph.

    Returns:
        Moves in forward order as ``(tag, x, y)`` where ``x, y`` are the
        coordinates before the move and tag is EQUAL, DELETE or INSERT.
    """
    n, m = len(a), len(b)
    max_d = n + m
    offset = max_d + 1
    # v[offset + k] holds the furthest x reached on diagonal k
    v = [0] * (2 * max_d + 3)
    trace: list[list[int]] = []

    for d in range(max_d + 1):
        # Frontier before round d, covering diagonals -d-1 .. d+1
        trace.append(v[offset - d - 1:offset + d + 2])
        for k in range(-d, d + 1, 2):
            if k == -d or (k != d and v[offset + k - 1] < v[offset + k + 1]):
                x = v[offset + k + 1]
            else:
                x = v[offset + k - 1] + 1
            y = x - k
            while x < n and y < m and a[x] == b[y]:
                x += 1
                y += 1
            v[offset + k] = x
            if x >= n and y >= m:
                return _backtrack(trace, n, m)

    raise RuntimeError("edit graph search did not reach the end")  # pragma: no cover


def _backtrack(trace: list[list[int]], n: int, m: int) -> list[tuple[str, int, int]]:
    moves: list[tuple[str, int, int]] = []
    x, y = n, m

    for d in range(len(trace) - 1, -1, -1):
        frontier = trace[d]
        base = d + 1
        k = x - y

        if k == -d or (k != d and frontier[base + k - 1] < frontier[base + k + 1]):
            prev_k = k + 1
        else:
            prev_k = k - 1
        prev_x = frontier[base + prev_k]
        prev_y = prev_x - prev_k

        while x > prev_x and y > prev_y:
            x -= 1
            y -= 1
            moves.append((EQUAL, x, y))

        if d > 0:
            if prev_k == k + 1:
                moves.append((INSERT, prev_x, prev_y))
            else:
                moves.append((DELETE, prev_x, prev_y))
            x, y = prev_x, prev_y

    moves.reverse()
    return moves


def compute_edit_script(source_lines: Sequence[str], dest_lines: Sequence[str]) -> list[EditOperation]:
    """Minimal list of change regions turning source_lines into dest_lines.

    Lines are compared by exact string equality. When several minimal scripts
    exist, deletions are preferred before insertions.

    Args:
        source_lines: Lines of the old version
        dest_lines: Lines of the new version

    Returns:
        Non-empty EditOperations ordered by position
    """
    operations: list[EditOperation] = []
    current: EditOperation | None = None

    for tag, x, y in shortest_edit_path(source_lines, dest_lines):
        if tag == EQUAL:
            if current is not None:
                operations.append(current)
                current = None
            continue
        if current is None:
            current = EditOperation(x, y)
        if tag == DELETE:
            current.delete_count += 1
        else:
            current.insert_count += 1

    if current is not None:
        operations.append(current)
    return [op for op in operations if not op.is_empty()]


def apply_edit_script(
    source_lines: Sequence[str],
    dest_lines: Sequence[str],
    operations: Sequence[EditOperation],
) -> list[str]:
    """Rebuild the destination from the source and an edit script."""
    result: list[str] = []
    position = 0
    for op in operations:
        result.extend(source_lines[position:op.source_start])
        result.extend(dest_lines[op.dest_start:op.dest_start + op.insert_count])
        position = op.source_start + op.delete_count
    result.extend(source_lines[position:])
    return result
