"""Document identifiers and the collections the dumper reads from.

A host only has to provide something that enumerates documents, each with a
domain-qualified identifier and a way to read its text. Two collections are
shipped: an in-memory one (tests, embedding hosts) and one backed by a
directory tree laid out as ``<root>/<domain>/<path>``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Mapping, Protocol

from patchdump.errors import DocumentReadError

UNKNOWN_DOMAIN = "unknown"


@dataclass(frozen=True)
class DocumentId:
    """Domain-qualified identifier of a document.

    Attributes:
        domain: Owning domain (mod id, namespace, ...)
        path: Slash-separated path inside the domain
    """
    domain: str
    path: str

    @classmethod
    def create(cls, domain: str | None, path: str) -> "DocumentId":
        return cls(domain or UNKNOWN_DOMAIN, path)

    @classmethod
    def parse(cls, location: str) -> "DocumentId":
        """Parse a ``domain:path`` location string.

        Locations without a domain prefix get the ``unknown`` domain.
        """
        domain, sep, path = location.partition(":")
        if not sep:
            return cls(UNKNOWN_DOMAIN, location)
        return cls.create(domain, path)

    @property
    def key(self) -> str:
        """Slash-joined key used for snapshot storage and output paths."""
        return f"{self.domain}/{self.path}"

    def __str__(self) -> str:
        return f"{self.domain}:{self.path}"


@dataclass(frozen=True)
class Document:
    """A single document as handed out by a collection."""
    id: DocumentId
    reader: Callable[[], str]

    def read_text(self) -> str:
        return self.reader()


class DocumentCollection(Protocol):
    """Read access to the full document collection at call time."""

    def documents(self) -> Iterable[Document]:  # pragma: no cover - interface
        ...


class InMemoryDocumentCollection:
    """Collection backed by a mapping of ``domain:path`` locations.

    Values are either the document text or a zero-argument callable that
    returns it (and may raise to simulate an unreadable document).
    """

    def __init__(self, entries: Mapping[str, str | Callable[[], str]] | None = None):
        self._entries: dict[DocumentId, str | Callable[[], str]] = {}
        for location, value in (entries or {}).items():
            self.put(location, value)

    def put(self, location: str, value: str | Callable[[], str]) -> None:
        self._entries[DocumentId.parse(location)] = value

    def remove(self, location: str) -> None:
        self._entries.pop(DocumentId.parse(location), None)

    def documents(self) -> Iterator[Document]:
        for doc_id, value in list(self._entries.items()):
            yield Document(doc_id, value if callable(value) else _constant(value))

    def __len__(self) -> int:
        return len(self._entries)


def _constant(text: str) -> Callable[[], str]:
    return lambda: text


class DirectoryDocumentCollection:
    """Collection read from a directory tree.

    The first path component below the root is the domain, the remainder is
    the document path. Files directly under the root belong to the
    ``unknown`` domain.
    """

    IGNORED_DIRS = {'.git', '.venv', 'venv', '__pycache__', 'node_modules'}

    def __init__(self, root: str, encoding: str = "utf-8"):
        self.root = os.path.abspath(root)
        self.encoding = encoding

    def documents(self) -> Iterator[Document]:
        if not os.path.isdir(self.root):
            return

        for current, dirs, files in os.walk(self.root):
            dirs[:] = sorted(d for d in dirs if d not in self.IGNORED_DIRS and not d.startswith('.'))

            for filename in sorted(files):
                if filename.startswith('.'):
                    continue
                full_path = os.path.join(current, filename)
                relative = os.path.relpath(full_path, self.root).replace('\\', '/')
                domain, sep, path = relative.partition('/')
                doc_id = DocumentId(domain, path) if sep else DocumentId(UNKNOWN_DOMAIN, relative)
                yield Document(doc_id, self._reader(full_path))

    def _reader(self, full_path: str) -> Callable[[], str]:
        def read() -> str:
            try:
                with open(full_path, 'r', encoding=self.encoding) as f:
                    return f.read()
            except (OSError, UnicodeDecodeError) as e:
                raise DocumentReadError(f"Cannot read {full_path}: {e}") from e
        return read
