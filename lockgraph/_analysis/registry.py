"""Registry for lock file analyzers."""

from pathlib import PurePosixPath

from ..logging_config import logger
from .fs import FileTree
from .models import AnalysisResult, Application
from .protocol import LockfileAnalyzer


class AnalyzerRegistry:
    """Registry for lock file analyzers.

    Manages analyzer instances and dispatches analysis to the appropriate
    analyzer based on lock file name.

    Example:
        registry = AnalyzerRegistry()
        registry.register(PoetryAnalyzer())

        result = registry.analyze_tree(DirectoryTree("."))
    """

    def __init__(self) -> None:
        self._analyzers: list[LockfileAnalyzer] = []

    def register(self, analyzer: LockfileAnalyzer) -> None:
        """Register an analyzer.

        Args:
            analyzer: Analyzer instance implementing LockfileAnalyzer protocol.
        """
        self._analyzers.append(analyzer)
        logger.debug(f"Registered lock file analyzer: {analyzer.name} for {analyzer.supported_files}")

    def get_analyzer_for(self, lock_file_name: str) -> LockfileAnalyzer | None:
        """Get the analyzer that supports this lock file.

        Args:
            lock_file_name: Filename (not full path) to find an analyzer for

        Returns:
            Analyzer instance if found, None otherwise.
        """
        for analyzer in self._analyzers:
            if analyzer.supports(lock_file_name):
                return analyzer
        return None

    def analyze_lockfile(self, tree: FileTree, lock_path: str) -> Application | None:
        """Analyze a single lock file using the appropriate analyzer.

        Args:
            tree: File tree containing the lock file
            lock_path: Lock file path relative to the tree root

        Returns:
            Application, or None if no analyzer applies or analysis failed.
        """
        lock_file_name = PurePosixPath(lock_path).name
        analyzer = self.get_analyzer_for(lock_file_name)

        if analyzer is None:
            logger.debug(f"No analyzer found for lock file: {lock_path}")
            return None

        logger.debug(f"Using {analyzer.name} to analyze {lock_path}")
        try:
            app = analyzer.analyze(tree, lock_path)
        except Exception as e:
            logger.warning(f"Failed to analyze {lock_path}: {e}", exc_info=True)
            return None

        if app is not None:
            logger.debug(f"Found {len(app.packages)} package(s) in {lock_path}")
        return app

    def analyze_tree(self, tree: FileTree, recursive: bool = False) -> AnalysisResult:
        """Analyze every supported lock file in a tree.

        Args:
            tree: File tree to analyze
            recursive: Also analyze lock files below the root directory

        Returns:
            AnalysisResult with one application per parsed lock file,
            sorted by file path.
        """
        lock_paths: set[str] = set()
        for file_name in sorted(self.supported_files):
            if recursive:
                lock_paths.update(tree.find(file_name))
            elif tree.exists(file_name):
                lock_paths.add(file_name)

        applications: list[Application] = []
        for lock_path in sorted(lock_paths):
            app = self.analyze_lockfile(tree, lock_path)
            if app is not None:
                applications.append(app)

        applications.sort(key=lambda a: a.file_path)
        return AnalysisResult(applications=applications)

    @property
    def registered_analyzers(self) -> list[str]:
        """Get names of all registered analyzers."""
        return [a.name for a in self._analyzers]

    @property
    def supported_files(self) -> set[str]:
        """Get all supported lock file names."""
        result: set[str] = set()
        for analyzer in self._analyzers:
            result.update(analyzer.supported_files)
        return result
