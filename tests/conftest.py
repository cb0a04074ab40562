"""Pytest configuration and shared fixtures.

Adds the repository root to `sys.path` so tests can import `patchdump`
without installing it, and provides small document collections used across
the test modules.
"""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Resolve repository root (one level above the tests directory)
REPO_ROOT = Path(__file__).resolve().parents[1]
root_str = str(REPO_ROOT)
if root_str not in sys.path:
    sys.path.insert(0, root_str)

from patchdump.documents import InMemoryDocumentCollection  # noqa: E402
from patchdump.settings import DumpSettings  # noqa: E402


@pytest.fixture
def dump_root(tmp_path):
    """Output root that does not exist yet."""
    return tmp_path / "dump"


@pytest.fixture
def settings(dump_root):
    return DumpSettings(output_root=str(dump_root))


@pytest.fixture
def pre_collection():
    return InMemoryDocumentCollection({
        "mod:block/stone.json": '{"a":1}',
    })


@pytest.fixture
def post_collection():
    return InMemoryDocumentCollection({
        "mod:block/stone.json": '{"a":2}',
        "mod:block/new.json": '{"b":1}',
    })
