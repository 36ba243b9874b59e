"""Poetry analyzer: poetry.lock + pyproject.toml -> classified package list."""

from pathlib import PurePosixPath

from .._analysis.fs import FileTree
from .._analysis.models import Application, Package
from ..exceptions import FileProcessingError, ParseError
from ..logging_config import logger
from .graph import DependencyGraph, build_graph, classify, filter_dev_group
from .lock_parser import PoetryLockParser
from .manifest import PyProjectReader

PYPROJECT_FILE = "pyproject.toml"


class PoetryAnalyzer:
    """Builds the dependency graph of a Poetry project.

    The lock file provides packages, versions and edges. The sibling
    pyproject.toml, when usable, decides which packages are direct and
    which belong to the dev group only; those dev-only packages and the
    dependencies nothing else needs are left out of the result.
    """

    name = "poetry-lock"
    app_type = "poetry"
    supported_files = ("poetry.lock",)

    def __init__(
        self,
        lock_parser: PoetryLockParser | None = None,
        manifest_reader: PyProjectReader | None = None,
    ) -> None:
        self._lock_parser = lock_parser or PoetryLockParser()
        self._manifest_reader = manifest_reader or PyProjectReader()

    def supports(self, lock_file_name: str) -> bool:
        return lock_file_name in self.supported_files

    def analyze(self, tree: FileTree, lock_path: str) -> Application | None:
        """Analyze a poetry.lock and its sibling pyproject.toml.

        Args:
            tree: File tree containing the lock file
            lock_path: Lock file path relative to the tree root

        Returns:
            Application with packages sorted by name and version, or None
            when the lock file cannot be read or parsed.
        """
        try:
            entries = self._lock_parser.parse(tree.read_text(lock_path))
        except (FileProcessingError, ParseError) as e:
            logger.warning(f"Skipping {lock_path}: {e}")
            return None

        manifest_path = str(PurePosixPath(lock_path).parent / PYPROJECT_FILE)
        manifest = self._manifest_reader.read(tree, manifest_path)

        graph = build_graph(entries)
        classify(graph, manifest)
        filter_dev_group(graph, manifest)

        return Application(
            type=self.app_type,
            file_path=lock_path,
            packages=self._assemble(graph),
        )

    @staticmethod
    def _assemble(graph: DependencyGraph) -> list[Package]:
        """Expose surviving nodes, sorted by name then version."""
        packages = [
            Package(
                id=node.id,
                name=node.name,
                version=node.version,
                relationship=node.relationship,
                indirect=node.indirect,
                depends_on=sorted(dep_id for dep_id in node.depends_on if dep_id in graph.nodes),
            )
            for node in graph.nodes.values()
        ]
        packages.sort(key=lambda p: (p.name, p.version))
        return packages
