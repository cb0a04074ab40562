"""Mapping of document keys to output files.

Keys come from the document collection and may contain characters that are
not valid in file names, or ``..`` segments. Every mapped path is verified to
stay inside the output root before any directory is created.
"""

import os
import shutil

from patchdump.errors import UnsafePathError, DumpRootError

DIFF_SUFFIX = ".diff"


class SafePathResolver:
    """Resolves document keys to absolute paths below a root directory.

    Handles:
    - Replacing ':' (illegal on some platforms) with '-'
    - Rejecting keys that stay absolute after sanitizing or hold NUL bytes
    - Verifying containment by walking the resolved path's ancestors
    - Creating missing parent directories
    """

    def __init__(self, root: str):
        """Initialize resolver with output root.

        Args:
            root: Directory every resolved path must stay inside
        """
        self.root = os.path.abspath(root)

    def resolve(self, key: str, suffix: str = "") -> str:
        """Map a ``domain/path`` key to a file path inside the root.

        Args:
            key: Slash-separated document key
            suffix: Appended to the file name before the containment check

        Returns:
            Absolute file path; its parent directory exists

        Raises:
            UnsafePathError: If the key escapes the root
        """
        code = (key + suffix).replace(':', '-')
        return self._contain("./" + code)

    def resolve_diff(self, key: str) -> str:
        """Like resolve() but for diff output; keeps the document extension."""
        return self.resolve(key, DIFF_SUFFIX)

    def resolve_object_code(self, code: str) -> str:
        """Map an object code such as ``game:stone-granite`` to a JSON file.

        Dots become dashes, the domain separator becomes a directory, and the
        file gets a ``.json`` extension.
        """
        code = code.replace('.', '-').replace(':', '/')
        return self._contain("./" + code + ".json")

    def _contain(self, code: str) -> str:
        file_path = self._checked(code)
        os.makedirs(os.path.dirname(file_path), exist_ok=True)
        return file_path

    def _checked(self, code: str) -> str:
        """Absolute path of ``code`` below the root, without touching the disk.

        Ancestors are compared with ``os.path.normcase``: case-insensitive on
        Windows, exact on POSIX, so a sibling of the root that differs only in
        case is rejected where the filesystem tells them apart.
        """
        if '\0' in code or os.path.isabs(code):
            raise UnsafePathError(code)

        file_path = os.path.abspath(os.path.join(self.root, code))
        if file_path == self.root:
            raise UnsafePathError(code)

        root_key = os.path.normcase(self.root)
        parent = os.path.dirname(file_path)
        # Verify the combined path uses root as an ancestor
        while os.path.normcase(parent) != root_key:
            next_parent = os.path.dirname(parent)
            if next_parent == parent:
                raise UnsafePathError(code)
            parent = next_parent
        return file_path

    def subdirectory(self, name: str) -> "SafePathResolver":
        """Resolver for a named child directory, created if missing."""
        path = self._checked("./" + name + "/.")
        os.makedirs(path, exist_ok=True)
        return SafePathResolver(path)


def reset_directory(path: str) -> str:
    """Delete and recreate a directory, discarding output of a previous run.

    Raises:
        DumpRootError: If the directory cannot be created
    """
    path = os.path.abspath(path)
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        raise DumpRootError(f"Cannot clear dump directory {path}: {e}") from e
    try:
        os.makedirs(path, exist_ok=True)
    except OSError as e:
        raise DumpRootError(f"Cannot create dump directory {path}: {e}") from e
    return path
