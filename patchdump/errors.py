"""Exception types raised by the dump pipeline.

Every per-document failure is isolated by the caller; only DumpRootError
aborts a whole dump.
"""


class PatchDumpError(Exception):
    """Base class for all patchdump errors."""


class UnsafePathError(PatchDumpError, ValueError):
    """A document key cannot be mapped to a path inside the output root."""

    def __init__(self, code: str):
        super().__init__(f"Found a code that cannot be safely turned into a path: {code}")
        self.code = code


class DocumentReadError(PatchDumpError):
    """The content of a document could not be read from its collection."""


class DumpRootError(PatchDumpError):
    """The output root directory could not be created."""
