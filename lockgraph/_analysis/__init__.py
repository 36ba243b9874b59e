"""Lock file discovery and dispatch.

This module provides the building blocks that route lock files found in a
project tree to registered analyzers and collect one Application per
successfully parsed file. The default registry and the public
analyze_directory() entry point live in lockgraph.analysis.

Example usage:
    from lockgraph._analysis import AnalyzerRegistry, DirectoryTree

    registry = AnalyzerRegistry()
    registry.register(PoetryAnalyzer())
    result = registry.analyze_tree(DirectoryTree("path/to/project"))
"""

from .fs import DirectoryTree, FileTree
from .models import AnalysisResult, Application, Package, Relationship, normalize_package_name
from .protocol import LockfileAnalyzer
from .registry import AnalyzerRegistry

__all__ = [
    # Classes for advanced usage
    "AnalyzerRegistry",
    "LockfileAnalyzer",
    "FileTree",
    "DirectoryTree",
    # Models
    "AnalysisResult",
    "Application",
    "Package",
    "Relationship",
    "normalize_package_name",
]
