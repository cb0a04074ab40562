"""Dumps of decoded host objects that have no source text.

Hosts hand over already decoded registries (blocks, items, entities,
recipes, ...). Each object is written to ``<root>/<category>/<code>.json``
using DuplicateFieldSerializer. How the host gets hold of the objects is not
this module's concern.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Iterable, Mapping

from patchdump.errors import UnsafePathError
from patchdump.path_resolver import SafePathResolver, reset_directory
from patchdump.serializer import DuplicateFieldSerializer
from patchdump.snapshot import DumpSummary

logger = logging.getLogger(__name__)


def default_code_of(obj: Any) -> str | None:
    """Read the ``code`` of a mapping or object."""
    if isinstance(obj, Mapping):
        code = obj.get("code")
    else:
        code = getattr(obj, "code", None)
    return str(code) if code else None


class ObjectDumper:
    """Writes categories of objects below a root directory."""

    def __init__(
        self,
        root: str,
        serializer: DuplicateFieldSerializer | None = None,
        log: logging.Logger | None = None,
    ):
        self.root = root
        self.serializer = serializer or DuplicateFieldSerializer()
        self.log = log or logger

    def dump_categories(self, categories: Mapping[str, Iterable[Any]]) -> dict[str, DumpSummary]:
        """Clear the root, then dump every category in mapping order.

        Raises:
            DumpRootError: If the root cannot be created
        """
        reset_directory(self.root)
        return {name: self.dump_category(name, objects) for name, objects in categories.items()}

    def dump_category(
        self,
        category: str,
        objects: Iterable[Any],
        code_of: Callable[[Any], str | None] | None = None,
    ) -> DumpSummary:
        """Serialize each object of one category to its own file."""
        code_of = code_of or default_code_of
        started = time.perf_counter()
        summary = DumpSummary()
        resolver = SafePathResolver(self.root).subdirectory(category)

        for obj in objects:
            if obj is None:
                summary.skipped += 1
                continue
            code = code_of(obj)
            if not code:
                self.log.debug("skipped %s object without a code", category)
                summary.skipped += 1
                continue
            try:
                text = self.serializer.serialize(obj)
                with open(resolver.resolve_object_code(code), 'w', encoding='utf-8', errors='backslashreplace') as f:
                    f.write(text)
                summary.processed += 1
            except (UnsafePathError, TypeError, ValueError, OSError) as e:
                self.log.warning("failed to dump %s object %s: %s", category, code, e)
                summary.failed += 1

        summary.elapsed = time.perf_counter() - started
        self.log.info("dumped %d %s in %.3fs", summary.processed, category, summary.elapsed)
        return summary
