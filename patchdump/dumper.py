"""Two-phase snapshot dumper.

A PatchDumper is created once per run. ``capture_pre_patch`` is called while
the collection still has its original content, ``capture_post_patch_and_diff``
after the overlay step. The second call writes::

    <root>/post-patch/<domain>/<path>
    <root>/pre-patch/<domain>/<path>
    <root>/diffs/<domain>/<path>.diff           modified documents
    <root>/diffs/new/<domain>/<path>.diff       added documents
    <root>/diffs/deleted/<domain>/<path>.diff   deleted documents
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterator

from patchdump.diff_engine import Classification, DocumentDiff
from patchdump.documents import DocumentCollection
from patchdump.errors import UnsafePathError
from patchdump.normalizer import parse_structure, structurally_equal
from patchdump.path_resolver import SafePathResolver, reset_directory
from patchdump.settings import DumpSettings
from patchdump.snapshot import DumpSummary, SnapshotStore, capture_snapshot

logger = logging.getLogger(__name__)

PRE_PATCH_DIR = "pre-patch"
POST_PATCH_DIR = "post-patch"
DIFFS_DIR = "diffs"
NEW_DIR = "new"
DELETED_DIR = "deleted"


@dataclass
class DiffSummary:
    """Counters of a diff pass.

    The four classification counts add up to the number of distinct
    documents across both snapshots, less any document whose classification
    failed. Such a document is only counted in ``failed``.
    """
    unchanged: int = 0
    modified: int = 0
    added: int = 0
    deleted: int = 0
    written: int = 0
    failed: int = 0
    elapsed: float = 0.0

    def count(self, classification: Classification) -> None:
        name = classification.value
        setattr(self, name, getattr(self, name) + 1)

    @property
    def total(self) -> int:
        return self.unchanged + self.modified + self.added + self.deleted


def classify(pre_text: str, post_text: str) -> Classification:
    """Compare two canonical texts of the same document.

    Parsed values are compared structurally; if either side is not JSON the
    texts themselves are compared.
    """
    pre_value, pre_ok = parse_structure(pre_text)
    post_value, post_ok = parse_structure(post_text)
    if pre_ok and post_ok:
        same = structurally_equal(pre_value, post_value)
    else:
        same = pre_text == post_text
    return Classification.UNCHANGED if same else Classification.MODIFIED


def write_text(path: str, text: str) -> None:
    # Lone surrogates from JSON escapes are written back as \uXXXX escapes
    with open(path, 'w', encoding='utf-8', errors='backslashreplace', newline='') as f:
        f.write(text)


class PatchDumper:
    """Owns the pre-patch snapshot between the two capture phases."""

    def __init__(self, settings: DumpSettings | None = None, log: logging.Logger | None = None):
        self.settings = settings or DumpSettings()
        self.log = log or logger
        self.pre_patch: SnapshotStore | None = None

    def capture_pre_patch(self, collection: DocumentCollection) -> DumpSummary:
        """Snapshot the collection before patching, replacing any earlier snapshot."""
        self.pre_patch, summary = capture_snapshot(
            collection, self.settings.extension, PRE_PATCH_DIR, self.log)
        return summary

    def capture_post_patch_and_diff(self, collection: DocumentCollection) -> DiffSummary:
        """Snapshot the patched collection and write dumps and diffs.

        Raises:
            DumpRootError: If the output root cannot be created
        """
        root = reset_directory(self.settings.output_root)
        self.log.info("created dump directory at %s", root)

        if self.pre_patch is None:
            self.log.warning("no pre-patch snapshot captured; every document is reported as new")
            pre_patch = SnapshotStore()
        else:
            pre_patch = self.pre_patch

        post_patch, _ = capture_snapshot(collection, self.settings.extension, POST_PATCH_DIR, self.log)
        resolver = SafePathResolver(root)

        if self.settings.dump_post_patch:
            self.dump_snapshot(post_patch, resolver.subdirectory(POST_PATCH_DIR), POST_PATCH_DIR)
        if self.settings.dump_pre_patch:
            self.dump_snapshot(pre_patch, resolver.subdirectory(PRE_PATCH_DIR), PRE_PATCH_DIR)

        summary = self.diff_snapshots(pre_patch, post_patch, resolver.subdirectory(DIFFS_DIR))
        self.log.info("asset dump complete")
        return summary

    def dump_snapshot(self, snapshot: SnapshotStore, resolver: SafePathResolver, label: str) -> DumpSummary:
        """Write every document of a snapshot below the resolver's root."""
        started = time.perf_counter()
        summary = DumpSummary()

        for key, text in snapshot.items():
            try:
                write_text(resolver.resolve(key), text)
                summary.processed += 1
            except (UnsafePathError, ValueError, OSError) as e:
                self.log.warning("failed to dump %s document %s: %s", label, key, e)
                summary.failed += 1

        summary.elapsed = time.perf_counter() - started
        self.log.info("dumped %d %s documents (%d failed) in %.3fs",
                      summary.processed, label, summary.failed, summary.elapsed)
        return summary

    @staticmethod
    def pairs(pre_patch: SnapshotStore, post_patch: SnapshotStore) -> Iterator[tuple[str, str | None, str | None]]:
        """Yield (key, pre_text, post_text) for every distinct document.

        Post-patch documents come first in collection order, followed by the
        deleted ones in pre-patch insertion order.
        """
        for key, post_text in post_patch.items():
            yield key, pre_patch.get(key), post_text
        for key, pre_text in pre_patch.items():
            if key not in post_patch:
                yield key, pre_text, None

    @staticmethod
    def document_diff(key: str, pre_text: str | None, post_text: str | None) -> DocumentDiff:
        if pre_text is None:
            return DocumentDiff(key, Classification.ADDED, None, post_text)
        if post_text is None:
            return DocumentDiff(key, Classification.DELETED, pre_text, None)
        return DocumentDiff(key, classify(pre_text, post_text), pre_text, post_text)

    def diff_snapshots(
        self,
        pre_patch: SnapshotStore,
        post_patch: SnapshotStore,
        resolver: SafePathResolver,
    ) -> DiffSummary:
        """Write one diff file per modified, added or deleted document.

        Each document is classified and written on its own; a failure is
        logged and counted, and the pass moves on to the next document.
        """
        started = time.perf_counter()
        summary = DiffSummary()

        for key, pre_text, post_text in self.pairs(pre_patch, post_patch):
            try:
                diff = self.document_diff(key, pre_text, post_text)
                summary.count(diff.classification)
                if diff.classification is Classification.UNCHANGED:
                    continue
                if diff.classification is Classification.MODIFIED and self.log.isEnabledFor(logging.DEBUG):
                    self.log.debug("modified %s (%s)", key, diff.get_summary())
                path = resolver.resolve_diff(self._diff_key(diff))
                write_text(path, diff.render(self.settings.header_prefix, self.settings.context_lines))
                summary.written += 1
            except (UnsafePathError, ValueError, OSError, RecursionError) as e:
                self.log.warning("failed to diff document %s: %s", key, e)
                summary.failed += 1

        summary.elapsed = time.perf_counter() - started
        self.log.info("dumped %d diffs (%d modified, %d unchanged, %d new, %d deleted, %d failed) in %.3fs",
                      summary.written, summary.modified, summary.unchanged, summary.added,
                      summary.deleted, summary.failed, summary.elapsed)
        return summary

    @staticmethod
    def _diff_key(diff: DocumentDiff) -> str:
        if diff.classification is Classification.ADDED:
            return f"{NEW_DIR}/{diff.key}"
        if diff.classification is Classification.DELETED:
            return f"{DELETED_DIR}/{diff.key}"
        return diff.key
