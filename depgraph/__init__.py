"""
depgraph - Dependency graphs for packages in a repository universe.

depgraph indexes package repositories, keeps one canonical version per
package, and extracts the dependency graph of a package as Graphviz DOT.

Quick Start:
    import depgraph

    dg = depgraph.DepGraph(paths=["~/repos/arbor"])

    # Canonical versions
    for name, identity in dg.universe().items():
        print(name, identity.version)

    # Dependency graph, three levels deep
    graph = dg.graph("dev-lang/python", depth_max=3)
    print(graph.dependency_count, "dependencies found")

    # dev-lang-python.dot and dev-lang-python.svg
    dg.write(graph)

Filtering:
    - one version per package: newest release, newest scm only if no release
    - first repository providing a name wins
    - test, suggestion, test-expensive and built-against scopes are dropped
    - conditional dependencies and user/, group/ pseudo-packages are ignored
"""

__version__ = "0.1.0"

# High-level API
from .api import DepGraph

# Domain objects
from .domain import (
    AllOf,
    Conditional,
    DependencyGraph,
    Labels,
    NamedSet,
    NoDependency,
    PackageDep,
    PackageIdentity,
    PackageVersion,
    Universe,
)

# Services
from .services import (
    GraphEmitter,
    GraphService,
    UniverseService,
    build_graph,
    build_universe,
    filter_label_scopes,
    select_best,
)

# Infrastructure
from .infra import RepositoryStore, parse_dependencies

# Errors
from .exit_codes import (
    PackageNotFoundError,
    RenderError,
    RepositoryNotFoundError,
    RepositoryUnavailableError,
)

# Configuration
from .config import load_config, save_config

__all__ = [
    "__version__",
    "DepGraph",
    "AllOf",
    "Conditional",
    "DependencyGraph",
    "Labels",
    "NamedSet",
    "NoDependency",
    "PackageDep",
    "PackageIdentity",
    "PackageVersion",
    "Universe",
    "GraphEmitter",
    "GraphService",
    "UniverseService",
    "build_graph",
    "build_universe",
    "filter_label_scopes",
    "select_best",
    "RepositoryStore",
    "parse_dependencies",
    "PackageNotFoundError",
    "RenderError",
    "RepositoryNotFoundError",
    "RepositoryUnavailableError",
    "load_config",
    "save_config",
]
