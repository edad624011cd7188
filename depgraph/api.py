"""
High-level API for depgraph.

Example:
    dg = DepGraph(paths=["~/repos/arbor", "~/repos/x11"])
    graph = dg.graph("dev-lang/python", depth_max=3)
    print(graph.dependency_count, "dependencies found")
    dg.write(graph, Path("out"))
"""

import copy
from pathlib import Path
from typing import Any, Dict, List, Optional
import logging

from .config import load_config
from .domain import DependencyGraph, Universe
from .infra import RepositoryStore
from .services import EmitResult, GraphEmitter, GraphService, UniverseService

logger = logging.getLogger(__name__)


class DepGraph:
    """
    High-level API for depgraph.

    Wires the repository store, universe indexing, graph extraction and
    emission together from one configuration.
    """

    def __init__(
        self,
        paths: Optional[List[str]] = None,
        config: Optional[Dict[str, Any]] = None,
        provider: Optional[Any] = None
    ):
        """
        Initialize DepGraph.

        Args:
            paths: Repository files or directories (overrides config)
            config: Full config dict (loads from file if None)
            provider: Metadata provider (defaults to a RepositoryStore over the paths)
        """
        self._config = copy.deepcopy(config) if config is not None else load_config()

        repositories = self._config.setdefault('repositories', {})
        if paths:
            repositories['paths'] = list(paths)

        self._provider = provider or RepositoryStore(repositories.get('paths', []))
        self._universe: Optional[Universe] = None

    @property
    def config(self) -> Dict[str, Any]:
        """Access the configuration."""
        return self._config

    def universe(self) -> Universe:
        """Index the repositories once and return the universe."""
        if self._universe is None:
            self._universe = UniverseService(self._provider, config=self._config).build()
        return self._universe

    def graph(self, package: str, depth_max: Optional[int] = None) -> DependencyGraph:
        """
        Extract the dependency graph of a package.

        Raises:
            PackageNotFoundError: If package is not in the universe
        """
        if depth_max is None:
            depth_max = int(self._config.get('graph', {}).get('depth_max', 132))
        return GraphService(self.universe(), depth_max=depth_max).build(package)

    def write(
        self,
        graph: DependencyGraph,
        output_dir: Optional[Path] = None,
        fmt: Optional[str] = 'svg',
        directed: Optional[bool] = None
    ) -> EmitResult:
        """
        Write the .dot description and rendered image of a graph.

        Raises:
            RenderError: If rendering fails after the .dot file was written
        """
        graph_config = self._config.get('graph', {})
        if output_dir is None:
            output_dir = Path(graph_config.get('output_dir', '.')).expanduser()
        if directed is None:
            directed = bool(graph_config.get('directed', False))
        return GraphEmitter(directed=directed).write(graph, output_dir, fmt)
