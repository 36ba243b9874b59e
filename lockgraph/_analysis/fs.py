"""Read-only file tree handles used by lock file analyzers."""

import os
from pathlib import Path, PurePosixPath
from typing import Protocol

from ..exceptions import FileProcessingError

# Directories never searched for lock files
SKIPPED_DIRECTORIES = frozenset({".git", ".venv", "venv", "node_modules", "__pycache__"})


class FileTree(Protocol):
    """Read-only view of a directory tree.

    Paths are relative to the tree root and use forward slashes.
    """

    def exists(self, path: str) -> bool:
        """Return True if a regular file exists at path."""
        ...

    def read_text(self, path: str) -> str:
        """Read a whole file as UTF-8 text.

        Raises:
            FileProcessingError: If the file cannot be read.
        """
        ...

    def find(self, file_name: str) -> list[str]:
        """Return sorted relative paths of every file named file_name."""
        ...


class DirectoryTree:
    """FileTree backed by a directory on the local filesystem.

    Example:
        tree = DirectoryTree("/path/to/project")
        if tree.exists("poetry.lock"):
            content = tree.read_text("poetry.lock")
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, path: str) -> Path:
        relative = PurePosixPath(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise FileProcessingError(f"Path escapes tree root: {path}")
        return self._root.joinpath(*relative.parts)

    def exists(self, path: str) -> bool:
        try:
            return self._resolve(path).is_file()
        except FileProcessingError:
            return False

    def read_text(self, path: str) -> str:
        full_path = self._resolve(path)
        try:
            return full_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileProcessingError(f"Failed to read {path}: {e}") from e

    def find(self, file_name: str) -> list[str]:
        matches: list[str] = []
        for dirpath, dirnames, filenames in os.walk(self._root):
            dirnames[:] = [d for d in dirnames if d not in SKIPPED_DIRECTORIES]
            if file_name in filenames:
                relative = Path(dirpath, file_name).relative_to(self._root)
                matches.append(relative.as_posix())
        return sorted(matches)
