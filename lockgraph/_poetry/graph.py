"""Dependency graph construction, classification and dev-group filtering."""

from dataclasses import dataclass, field
from typing import Iterable

from .._analysis.models import Relationship, normalize_package_name
from ..logging_config import logger
from .models import LockedEntry, ManifestDependencies, PackageNode


@dataclass
class DependencyGraph:
    """Package nodes of one lock file, keyed by ``name@version``.

    Attributes:
        nodes: Nodes in lock file order
        index: Normalized name -> first node locked under that name
    """

    nodes: dict[str, PackageNode] = field(default_factory=dict)
    index: dict[str, PackageNode] = field(default_factory=dict)

    def lookup(self, name: str) -> PackageNode | None:
        """Find the node locked for a package name, in any spelling."""
        return self.index.get(normalize_package_name(name))

    def __len__(self) -> int:
        return len(self.nodes)


def build_graph(entries: Iterable[LockedEntry]) -> DependencyGraph:
    """Build versioned nodes and wire dependency edges by package name.

    A dependency name without a locked entry (platform or extra specific,
    or dropped by the locking tool) produces no edge. When one name is
    locked with several versions, the first entry in the lock file is the
    edge target.
    """
    graph = DependencyGraph()
    wired: list[LockedEntry] = []

    for entry in entries:
        if entry.id in graph.nodes:
            logger.debug(f"Duplicate poetry.lock entry ignored: {entry.id}")
            continue
        normalized = normalize_package_name(entry.name)
        node = PackageNode(
            id=entry.id,
            name=entry.name,
            version=entry.version,
            normalized_name=normalized,
            dev_only=entry.is_dev_only,
        )
        graph.nodes[node.id] = node
        graph.index.setdefault(normalized, node)
        wired.append(entry)

    for entry in wired:
        node = graph.nodes[entry.id]
        for dep_name in entry.dependency_names:
            target = graph.lookup(dep_name)
            if target is None:
                logger.debug(f"{entry.id} depends on {dep_name}, which is not in the lock file")
                continue
            if target.id == node.id or target.id in node.depends_on:
                continue
            node.depends_on.append(target.id)

    return graph


def classify(graph: DependencyGraph, manifest: ManifestDependencies) -> None:
    """Mark each node direct or indirect from the manifest's main table.

    Nothing is asserted when the manifest gave no information. Otherwise a
    name listed in the main table is direct even if another package also
    requires it; every other node is indirect.
    """
    if manifest.is_empty:
        return

    for node in graph.nodes.values():
        if node.normalized_name in manifest.direct:
            node.relationship = Relationship.DIRECT
            node.indirect = False
        else:
            node.relationship = Relationship.INDIRECT
            node.indirect = True


def filter_dev_group(graph: DependencyGraph, manifest: ManifestDependencies) -> set[str]:
    """Remove dev-group packages and whatever only they require.

    Nodes named in the manifest's dev group are always removed. Nodes the
    lock file itself marks as dev-only (and the main table does not list)
    join the removal candidates, and like anything else reachable from the
    dev group they survive if any kept node requires them.

    Returns:
        Ids of removed nodes.
    """
    dev_roots = {node.id for node in graph.nodes.values() if node.normalized_name in manifest.dev}
    lock_dev = {
        node.id
        for node in graph.nodes.values()
        if node.dev_only and node.normalized_name not in manifest.direct
    }
    if not dev_roots and not lock_dev:
        return set()

    dev_closure = _reachable(graph, dev_roots | lock_dev)
    seeds = [
        node_id
        for node_id, node in graph.nodes.items()
        if node_id not in dev_roots and (node_id not in dev_closure or node.normalized_name in manifest.direct)
    ]
    kept = _reachable(graph, seeds, blocked=dev_roots)
    removed = dev_closure - kept

    for node_id in removed:
        del graph.nodes[node_id]
    for normalized, node in list(graph.index.items()):
        if node.id in removed:
            del graph.index[normalized]
    for node in graph.nodes.values():
        node.depends_on = [dep_id for dep_id in node.depends_on if dep_id not in removed]

    logger.debug(f"Removed {len(removed)} dev-only package(s): {', '.join(sorted(removed))}")
    return removed


def _reachable(graph: DependencyGraph, start: Iterable[str], blocked: set[str] | None = None) -> set[str]:
    """Ids reachable from start (inclusive) without entering blocked nodes."""
    blocked = blocked or set()
    seen: set[str] = set()
    stack = [node_id for node_id in start if node_id not in blocked]
    while stack:
        node_id = stack.pop()
        if node_id in seen:
            continue
        seen.add(node_id)
        for dep_id in graph.nodes[node_id].depends_on:
            if dep_id not in seen and dep_id not in blocked:
                stack.append(dep_id)
    return seen
