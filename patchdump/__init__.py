"""Snapshot a document collection before and after patching and diff the two.

Usage:
    from patchdump import PatchDumper, DumpSettings

    dumper = PatchDumper(DumpSettings(output_root="logs/dump/server"))
    dumper.capture_pre_patch(collection)
    # ... host applies its patches ...
    summary = dumper.capture_post_patch_and_diff(collection)
"""

from .documents import (
    DocumentId,
    Document,
    DocumentCollection,
    InMemoryDocumentCollection,
    DirectoryDocumentCollection,
)
from .diff_engine import Classification, DiffHunk, DocumentDiff, generate_hunks, render_hunks
from .dumper import PatchDumper, DiffSummary, classify
from .errors import PatchDumpError, UnsafePathError, DocumentReadError, DumpRootError
from .myers import EditOperation, compute_edit_script
from .normalizer import normalize
from .path_resolver import SafePathResolver
from .settings import DumpSettings
from .snapshot import SnapshotStore, DumpSummary, capture_snapshot

__all__ = [
    "DocumentId",
    "Document",
    "DocumentCollection",
    "InMemoryDocumentCollection",
    "DirectoryDocumentCollection",
    "Classification",
    "DiffHunk",
    "DocumentDiff",
    "generate_hunks",
    "render_hunks",
    "PatchDumper",
    "DiffSummary",
    "classify",
    "PatchDumpError",
    "UnsafePathError",
    "DocumentReadError",
    "DumpRootError",
    "EditOperation",
    "compute_edit_script",
    "normalize",
    "SafePathResolver",
    "DumpSettings",
    "SnapshotStore",
    "DumpSummary",
    "capture_snapshot",
]
