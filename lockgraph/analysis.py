"""Dependency graph analysis of project lock files.

Example usage:
    from lockgraph.analysis import analyze_directory

    result = analyze_directory("path/to/project")
    for app in result.applications:
        for package in app.packages:
            print(package.id, package.relationship.value, package.depends_on)
"""

from pathlib import Path

from ._analysis import AnalysisResult, AnalyzerRegistry, DirectoryTree
from ._poetry import PoetryAnalyzer
from .logging_config import logger


def create_default_registry() -> AnalyzerRegistry:
    """Create registry with all default analyzers."""
    registry = AnalyzerRegistry()

    # Python
    registry.register(PoetryAnalyzer())

    return registry


def analyze_directory(
    directory: str | Path,
    recursive: bool = False,
    registry: AnalyzerRegistry | None = None,
) -> AnalysisResult:
    """Analyze the lock files of a project directory.

    This is the main public API.

    Args:
        directory: Project root directory
        recursive: Also analyze lock files in subdirectories
        registry: Analyzer registry (defaults to create_default_registry())

    Returns:
        AnalysisResult; empty when no lock file was found or parsed.
    """
    tree = DirectoryTree(directory)
    registry = registry or create_default_registry()

    result = registry.analyze_tree(tree, recursive=recursive)
    logger.info(
        f"Analyzed {directory}: {len(result.applications)} lock file(s), {result.package_count} package(s)"
    )
    return result
