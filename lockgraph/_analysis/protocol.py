"""Protocol definition for lock file analyzers."""

from typing import Protocol

from .fs import FileTree
from .models import Application


class LockfileAnalyzer(Protocol):
    """Protocol for lock file analysis plugins.

    Each analyzer implements this protocol to turn one lock file format
    into an Application. Analyzers are registered with AnalyzerRegistry
    and selected based on the lock file name.

    Example:
        class PoetryAnalyzer:
            name = "poetry-lock"
            app_type = "poetry"
            supported_files = ("poetry.lock",)

            def supports(self, lock_file_name: str) -> bool:
                return lock_file_name in self.supported_files

            def analyze(self, tree: FileTree, lock_path: str) -> Application | None:
                # Parse poetry.lock and its sibling pyproject.toml
                ...
    """

    @property
    def name(self) -> str:
        """Human-readable name of this analyzer.

        Used for logging and diagnostics.
        Examples: "poetry-lock"
        """
        ...

    @property
    def app_type(self) -> str:
        """Ecosystem tag stored on produced applications.

        Examples: "poetry"
        """
        ...

    @property
    def supported_files(self) -> tuple[str, ...]:
        """Lock file names this analyzer handles.

        Each entry is a filename (not a path), e.g., "poetry.lock".
        """
        ...

    def supports(self, lock_file_name: str) -> bool:
        """Check if this analyzer can handle the given lock file.

        Args:
            lock_file_name: Filename (not full path) to check

        Returns:
            True if this analyzer can analyze the file.
        """
        ...

    def analyze(self, tree: FileTree, lock_path: str) -> Application | None:
        """Analyze one lock file.

        Implementations should:
        1. Read and parse the lock file at lock_path
        2. Read any companion descriptor next to it
        3. Return the packages found as an Application

        Args:
            tree: Read-only file tree containing the lock file
            lock_path: Lock file path relative to the tree root

        Returns:
            Application, or None when the lock file cannot be parsed.
        """
        ...
