"""pyproject.toml reader used to classify Poetry dependencies."""

import re
from typing import Any, Iterable

import tomllib

from .._analysis.fs import FileTree
from .._analysis.models import normalize_package_name
from ..exceptions import FileProcessingError
from ..logging_config import logger
from .models import DEV_GROUP, ManifestDependencies

# Leading distribution name of a PEP 508 requirement string
_REQUIREMENT_NAME = re.compile(r"^\s*([A-Za-z0-9](?:[A-Za-z0-9._-]*[A-Za-z0-9])?)")

# Entry in tool.poetry.dependencies that pins the interpreter, not a package
_PYTHON_RUNTIME = "python"


class PyProjectReader:
    """
    Best-effort reader of the pyproject.toml next to a poetry.lock.

    Extracts:
    - tool.poetry.dependencies -> direct names ("python" excluded)
    - project.dependencies / project.optional-dependencies -> direct names
    - tool.poetry.group.dev.dependencies -> dev names
    - tool.poetry.dev-dependencies (Poetry < 1.2) -> dev names
    - dependency-groups.dev (PEP 735) -> dev names

    Other custom groups are not read. A missing, unreadable or unrelated
    file yields empty sets instead of an error.
    """

    name = "pyproject.toml"

    def read(self, tree: FileTree, path: str) -> ManifestDependencies:
        """
        Read dependency declarations from a project descriptor.

        Args:
            tree: File tree containing the descriptor
            path: Descriptor path relative to the tree root

        Returns:
            ManifestDependencies; empty when nothing usable was found.
        """
        if not tree.exists(path):
            logger.debug(f"{path} not found, dependencies will not be classified")
            return ManifestDependencies()

        try:
            data = tomllib.loads(tree.read_text(path))
        except (FileProcessingError, tomllib.TOMLDecodeError) as e:
            logger.warning(f"Failed to parse {path}: {e}")
            return ManifestDependencies()

        poetry = data.get("tool", {}).get("poetry") if isinstance(data.get("tool"), dict) else None
        project = data.get("project")
        if not isinstance(poetry, dict) and not isinstance(project, dict):
            logger.debug(f"No [tool.poetry] or [project] section found in {path}")
            return ManifestDependencies()

        direct: set[str] = set()
        dev: set[str] = set()

        if isinstance(poetry, dict):
            direct.update(n for n in _table_keys(poetry.get("dependencies")) if n != _PYTHON_RUNTIME)
            groups = poetry.get("group")
            if isinstance(groups, dict) and isinstance(groups.get(DEV_GROUP), dict):
                dev.update(_table_keys(groups[DEV_GROUP].get("dependencies")))
            dev.update(_table_keys(poetry.get("dev-dependencies")))

        if isinstance(project, dict):
            direct.update(_requirement_names(project.get("dependencies")))
            optional = project.get("optional-dependencies")
            if isinstance(optional, dict):
                for requirements in optional.values():
                    direct.update(_requirement_names(requirements))

        dependency_groups = data.get("dependency-groups")
        if isinstance(dependency_groups, dict):
            dev.update(_requirement_names(dependency_groups.get(DEV_GROUP)))

        # Packages declared in main as well are not dev-only
        dev -= direct

        logger.debug(f"Extracted from {path}: {len(direct)} direct, {len(dev)} dev-only dependencies")
        return ManifestDependencies(direct=frozenset(direct), dev=frozenset(dev))


def _table_keys(table: Any) -> Iterable[str]:
    if not isinstance(table, dict):
        return []
    return [normalize_package_name(key) for key in table]


def _requirement_names(requirements: Any) -> Iterable[str]:
    """Names of PEP 508 requirement strings; include-group tables are skipped."""
    if not isinstance(requirements, list):
        return []

    names = []
    for requirement in requirements:
        if not isinstance(requirement, str):
            continue
        match = _REQUIREMENT_NAME.match(requirement)
        if match:
            names.append(normalize_package_name(match.group(1)))
    return names
