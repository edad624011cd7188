"""
Graph command for depgraph.

Extracts the dependency graph of one package and writes it as a Graphviz
description plus a rendered image.
"""

import click
from pathlib import Path
from typing import Optional

from ..api import DepGraph
from ..cli_utils import standard_command, add_common_options
from ..config import load_config, configure_logging
from ..exit_codes import ConfigError
from ..services import RENDER_FORMATS


@click.command('graph')
@click.argument('package')
@click.option('-d', '--depth', type=click.IntRange(min=0), default=None,
              help='Dependency levels expanded below the package (default: graph.depth_max)')
@click.option('-o', '--output-dir', type=click.Path(file_okay=False), default=None,
              help='Directory for the .dot and image files (default: graph.output_dir)')
@click.option('-f', '--format', 'fmt', type=click.Choice(RENDER_FORMATS), default=None,
              help='Image format (default: graph.format)')
@click.option('--directed', is_flag=True, help='Emit a digraph instead of an undirected graph')
@click.option('--no-render', is_flag=True, help='Only write the .dot description')
@add_common_options('repo', 'pretty', 'debug')
@standard_command
def graph_handler(
    package: str,
    depth: Optional[int],
    output_dir: Optional[str],
    fmt: Optional[str],
    directed: bool,
    no_render: bool,
    repos: tuple,
    pretty: bool,
    debug: bool,
):
    """
    Extract the dependency graph of PACKAGE.

    Writes <PACKAGE>.dot and <PACKAGE>.<format> with '/' replaced by '-'.
    Test, suggestion, test-expensive and built-against dependencies and
    conditional dependencies are left out.

    \b
    Examples:
        depgraph graph dev-lang/python
        depgraph graph dev-lang/python --depth 2 --format png
        depgraph graph sys-apps/paludis -r ~/repos/arbor -o out --no-render
    """
    config = load_config()
    configure_logging(config, debug)

    graph_config = config.get('graph', {})
    if no_render:
        fmt = None
    elif fmt is None:
        fmt = graph_config.get('format', 'svg')
        if fmt not in RENDER_FORMATS:
            raise ConfigError(f"graph.format must be one of {', '.join(RENDER_FORMATS)}, got {fmt!r}")
    if depth is None:
        depth = graph_config.get('depth_max', 132)
        if not isinstance(depth, int) or isinstance(depth, bool) or depth < 0:
            raise ConfigError(f"graph.depth_max must be a non-negative integer, got {depth!r}")

    dg = DepGraph(paths=list(repos) or None, config=config)

    if pretty:
        from rich.console import Console
        with Console(stderr=True).status("Indexing repositories..."):
            dg.universe()

    graph = dg.graph(package, depth_max=depth)
    result = dg.write(
        graph,
        output_dir=Path(output_dir) if output_dir else None,
        fmt=fmt,
        directed=True if directed else None,
    )

    if pretty:
        from ..render import render_graph_summary
        render_graph_summary(graph, result.to_dict())
        return None

    summary = {
        'package': graph.root,
        'depth_max': graph.depth_max,
        'dependency_count': graph.dependency_count,
        'nodes': len(graph.nodes),
        'edges': len(graph.edges),
    }
    summary.update(result.to_dict())
    return summary
