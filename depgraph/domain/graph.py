"""
Dependency graph result for depgraph.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple


Edge = Tuple[str, str]


@dataclass
class DependencyGraph:
    """
    Graph extracted for one root package.

    Attributes:
        root: Root package name
        nodes: Distinct package names in first-seen order (root first)
        edges: (from, to) pairs in discovery order; targets may lie outside nodes
        depth_max: Depth bound used for the walk
    """
    root: str
    nodes: List[str] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)
    depth_max: int = 0

    @property
    def dependency_count(self) -> int:
        """Number of recorded packages, root excluded."""
        return max(len(self.nodes) - 1, 0)

    @property
    def artifact_stem(self) -> str:
        """File name stem for output artifacts ("dev-lang/python" -> "dev-lang-python")."""
        return self.root.replace('/', '-')

    def to_dict(self) -> Dict[str, Any]:
        return {
            'root': self.root,
            'depth_max': self.depth_max,
            'dependency_count': self.dependency_count,
            'nodes': list(self.nodes),
            'edges': [list(edge) for edge in self.edges],
        }
