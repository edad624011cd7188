"""
Graph emission service for depgraph.

Turns a DependencyGraph into a Graphviz graph with pydot, serializes it to
DOT text and renders it to an image with the Graphviz ``dot`` program.

Output artifacts are named after the root package with '/' replaced by '-':
    dev-lang/python -> dev-lang-python.dot, dev-lang-python.svg
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

import pydot

from ..domain import DependencyGraph, Edge
from ..exit_codes import RenderError

logger = logging.getLogger(__name__)


RENDER_FORMATS = ('svg', 'png', 'pdf')


def quote_identifier(identifier: str) -> str:
    """Quote an identifier for DOT, escaping backslashes and double quotes."""
    escaped = identifier.replace('\\', '\\\\').replace('"', '\\"')
    return f'"{escaped}"'


@dataclass
class EmitResult:
    """Paths of the artifacts written for one graph."""
    dot_path: Path
    image_path: Optional[Path] = None

    def to_dict(self) -> dict:
        return {
            'dot': str(self.dot_path),
            'image': str(self.image_path) if self.image_path else None,
        }


class GraphEmitter:
    """
    Service for serializing and rendering dependency graphs.

    Example:
        emitter = GraphEmitter()
        dot = emitter.emit("dev-lang/python", graph.nodes, graph.edges)
        text = emitter.serialize(dot)
        svg = emitter.render(dot, "svg")
    """

    def __init__(self, directed: bool = False):
        """
        Initialize GraphEmitter.

        Args:
            directed: Emit a digraph instead of an undirected graph
        """
        self.directed = directed

    def emit(self, graph_name: str, nodes: Iterable[str], edges: Iterable[Edge]) -> pydot.Dot:
        """
        Build a Graphviz graph: one node statement per node, then one edge
        statement per edge, both in the given order.
        """
        dot = pydot.Dot(
            graph_name=quote_identifier(graph_name),
            graph_type='digraph' if self.directed else 'graph',
            strict=False,
        )
        for node in nodes:
            dot.add_node(pydot.Node(quote_identifier(node)))
        for source, target in edges:
            dot.add_edge(pydot.Edge(quote_identifier(source), quote_identifier(target)))
        return dot

    def serialize(self, dot: pydot.Dot) -> str:
        """DOT text of the graph."""
        return dot.to_string()

    def render(self, dot: pydot.Dot, fmt: str = 'svg') -> bytes:
        """
        Render the graph with Graphviz.

        Raises:
            RenderError: If the format is unsupported, dot is missing, or rendering fails
        """
        if fmt not in RENDER_FORMATS:
            raise RenderError(f"Unsupported render format: {fmt}")
        try:
            return dot.create(prog='dot', format=fmt)
        except (OSError, AssertionError) as e:
            raise RenderError(f"Graphviz rendering failed: {e}") from e

    def write(
        self,
        graph: DependencyGraph,
        output_dir: Path,
        fmt: Optional[str] = 'svg'
    ) -> EmitResult:
        """
        Write the .dot description and, unless fmt is None, the rendered image.

        The .dot file is written first and kept even if rendering fails.

        Raises:
            RenderError: If rendering fails (dot_path is set on the error)
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        dot = self.emit(graph.root, graph.nodes, graph.edges)
        dot_path = output_dir / f"{graph.artifact_stem}.dot"
        dot_path.write_text(self.serialize(dot), encoding='utf-8')
        logger.info(f"Wrote {dot_path}")

        result = EmitResult(dot_path=dot_path)
        if fmt is None:
            return result

        try:
            image = self.render(dot, fmt)
        except RenderError as e:
            e.dot_path = str(dot_path)
            raise

        image_path = output_dir / f"{graph.artifact_stem}.{fmt}"
        image_path.write_bytes(image)
        logger.info(f"Wrote {image_path}")
        result.image_path = image_path
        return result
