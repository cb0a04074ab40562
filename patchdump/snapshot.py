"""Snapshot capture of a document collection."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterator

from patchdump.documents import DocumentCollection, DocumentId
from patchdump.errors import DocumentReadError
from patchdump.normalizer import normalize

logger = logging.getLogger(__name__)


@dataclass
class DumpSummary:
    """Counters reported by a capture or dump pass."""
    processed: int = 0
    skipped: int = 0
    failed: int = 0
    elapsed: float = 0.0


class SnapshotStore:
    """Normalized document texts keyed by document key, in insertion order.

    Built once per capture and treated as read-only afterwards.
    """

    def __init__(self):
        self._texts: dict[str, str] = {}

    def add(self, doc_id: DocumentId, text: str) -> None:
        self._texts[doc_id.key] = text

    def get(self, key: str) -> str | None:
        return self._texts.get(key)

    def keys(self) -> list[str]:
        return list(self._texts)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._texts.items())

    def __contains__(self, key: object) -> bool:
        return key in self._texts

    def __len__(self) -> int:
        return len(self._texts)


def is_structured_path(path: str, extension: str) -> bool:
    return path.lower().endswith(extension.lower())


def capture_snapshot(
    collection: DocumentCollection,
    extension: str = ".json",
    label: str = "snapshot",
    log: logging.Logger | None = None,
) -> tuple[SnapshotStore, DumpSummary]:
    """Read and normalize every structured document of a collection.

    Documents whose path does not end in ``extension`` are skipped. A document
    that fails to read is logged and left out; capture always completes.

    Args:
        collection: Source of documents
        extension: Recognized structured-document extension (case-insensitive)
        label: Phase name used in log messages ("pre-patch", ...)
        log: Logging sink, defaults to the module logger

    Returns:
        Tuple of (snapshot, summary)
    """
    log = log or logger
    started = time.perf_counter()
    store = SnapshotStore()
    summary = DumpSummary()

    for document in collection.documents():
        if document is None:
            continue
        if not is_structured_path(document.id.path, extension):
            summary.skipped += 1
            continue
        try:
            raw = document.read_text()
            if not isinstance(raw, str):
                raise DocumentReadError(f"expected text, got {type(raw).__name__}")
            text, _ = normalize(raw)
        except Exception as e:
            log.debug("failed to capture %s document %s: %s", label, document.id, e)
            summary.failed += 1
            continue
        store.add(document.id, text)
        summary.processed += 1

    summary.elapsed = time.perf_counter() - started
    log.info("captured %d %s documents (%d skipped, %d failed) in %.3fs",
             summary.processed, label, summary.skipped, summary.failed, summary.elapsed)
    return store, summary
