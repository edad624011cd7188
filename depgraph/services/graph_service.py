"""
Dependency graph service for depgraph.

Walks a package's dependency spec tree, and the trees of every package it
reaches inside the universe, into node and edge lists.

Rules:
    - each package is expanded at most once (cycles and diamonds stop there)
    - packages at depth_max are recorded but not expanded
    - Conditional subtrees are never descended into
    - references to pseudo-categories (user/, group/) are ignored
    - references outside the universe give an edge but no node
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Set, Tuple

from ..domain import (
    DEPENDENCIES_KEY,
    AllOf,
    DependencyGraph,
    DependencySpecTree,
    Edge,
    PackageDep,
    PackageIdentity,
    Universe,
    is_dependency_spec,
)
from ..exit_codes import PackageNotFoundError
from .label_scope import filter_label_scopes

logger = logging.getLogger(__name__)


# Virtual grouping namespaces, not real packages
RESERVED_PREFIXES = ('user/', 'group/')

DEFAULT_DEPTH_MAX = 132


@dataclass
class _Walk:
    """State shared by one graph build."""
    universe: Universe
    depth_max: int
    nodes: List[str] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    visited: Set[str] = field(default_factory=set)
    # (owner, remaining siblings, depth) frames, innermost last
    stack: List[Tuple[str, Iterator[DependencySpecTree], int]] = field(default_factory=list)


def _expand_package(walk: _Walk, identity: PackageIdentity, depth: int) -> None:
    """Record a package and schedule its dependency tree one level deeper."""
    name = identity.name
    if name in walk.visited:
        return
    walk.visited.add(name)
    walk.nodes.append(name)
    logger.debug(f"package : {name}")

    if depth == walk.depth_max:
        return

    tree = identity.fetch_metadata(DEPENDENCIES_KEY)
    if not is_dependency_spec(tree):
        return

    walk.stack.append((name, iter((tree,)), depth + 1))


def _expand_spec(walk: _Walk, owner: str, spec: DependencySpecTree, depth: int) -> None:
    if isinstance(spec, PackageDep):
        dep_name = spec.full_name()
        if dep_name.startswith(RESERVED_PREFIXES):
            return
        walk.edges.append((owner, dep_name))
        dependency = walk.universe.get(dep_name)
        if dependency is not None:
            _expand_package(walk, dependency, depth)

    elif isinstance(spec, AllOf):
        # Depth only grows when entering another package's tree
        walk.stack.append((owner, iter(filter_label_scopes(spec.children)), depth))

    # NoDependency, NamedSet, Labels and Conditional contribute nothing


def _run(walk: _Walk) -> None:
    """Drain the frame stack depth first, one spec node at a time."""
    while walk.stack:
        owner, siblings, depth = walk.stack[-1]
        spec = next(siblings, None)
        if spec is None:
            walk.stack.pop()
            continue
        _expand_spec(walk, owner, spec, depth)


def build_graph(
    root: str,
    universe: Universe,
    depth_max: int = DEFAULT_DEPTH_MAX
) -> DependencyGraph:
    """
    Extract the dependency graph of a package.

    Args:
        root: Root package name
        universe: Canonical identities to walk through
        depth_max: Number of dependency levels expanded below the root

    Returns:
        DependencyGraph with nodes, edges and dependency count

    Raises:
        PackageNotFoundError: If root is not in the universe
    """
    identity = universe.get(root)
    if identity is None:
        raise PackageNotFoundError(root)

    walk = _Walk(universe=universe, depth_max=depth_max)
    _expand_package(walk, identity, 0)
    _run(walk)

    graph = DependencyGraph(
        root=root,
        nodes=walk.nodes,
        edges=walk.edges,
        depth_max=depth_max,
    )
    logger.info(f"{graph.dependency_count} dependencies found")
    return graph


class GraphService:
    """
    Service for extracting dependency graphs from a universe.

    Example:
        service = GraphService(universe, depth_max=3)
        graph = service.build("dev-lang/python")
        print(graph.nodes, graph.edges)
    """

    def __init__(self, universe: Universe, depth_max: int = DEFAULT_DEPTH_MAX):
        if depth_max < 0:
            raise ValueError(f"depth_max must be >= 0, got {depth_max}")
        self.universe = universe
        self.depth_max = depth_max

    def build(self, root: str) -> DependencyGraph:
        """Build the graph for root. See build_graph."""
        return build_graph(root, self.universe, self.depth_max)
