"""Canonical re-rendering of JSON documents.

Documents are parsed and dumped again with fixed indentation so that diffs
only show semantic changes. Key order is kept as written in the source.
"""

import json
from typing import Any

INDENT = 2


def parse_structure(text: str) -> tuple[Any, bool]:
    """Parse text as JSON.

    Returns:
        Tuple of (value, ok). value is None when parsing failed.
    """
    try:
        return json.loads(text), True
    except (ValueError, TypeError, RecursionError):
        return None, False


def render(value: Any) -> str:
    """Render an already parsed value in canonical form."""
    return json.dumps(value, indent=INDENT, ensure_ascii=False)


def normalize(raw_text: str) -> tuple[str, bool]:
    """Canonicalize a document.

    Args:
        raw_text: Document content as read from the collection

    Returns:
        Tuple of (canonical_text, was_structured). Text that is not JSON is
        returned unchanged with was_structured False.
    """
    value, ok = parse_structure(raw_text)
    if not ok:
        return raw_text, False
    return render(value), True


def structurally_equal(left: Any, right: Any) -> bool:
    """Deep equality of parsed JSON values.

    Unlike ``==`` a boolean never equals a number, and ``1`` differs from
    ``1.0``. Object key order is ignored, array order is not. Nesting depth
    is bounded only by memory.
    """
    pending = [(left, right)]
    while pending:
        left, right = pending.pop()
        if type(left) is not type(right):
            return False
        if isinstance(left, dict):
            if left.keys() != right.keys():
                return False
            pending.extend((value, right[key]) for key, value in left.items())
        elif isinstance(left, list):
            if len(left) != len(right):
                return False
            pending.extend(zip(left, right))
        elif isinstance(left, float) and left != left:
            # NaN literals are accepted by the parser
            if right == right:
                return False
        elif left != right:
            return False
    return True
