"""Poetry lock file analysis.

Turns a poetry.lock (and, when present, the pyproject.toml next to it)
into a sorted list of packages with dependency edges and direct/indirect
classification. Packages used only by the dev group are excluded.
"""

from .analyzer import PoetryAnalyzer
from .graph import DependencyGraph, build_graph, classify, filter_dev_group
from .lock_parser import PoetryLockParser
from .manifest import PyProjectReader
from .models import DEV_GROUP, LockedEntry, ManifestDependencies, PackageNode

__all__ = [
    "PoetryAnalyzer",
    "PoetryLockParser",
    "PyProjectReader",
    "DependencyGraph",
    "build_graph",
    "classify",
    "filter_dev_group",
    "LockedEntry",
    "ManifestDependencies",
    "PackageNode",
    "DEV_GROUP",
]
