"""
Rendering functions for depgraph output.

This module handles all pretty-printing and table formatting.
Services return data, this module makes it human-readable.
"""

from rich.table import Table
from rich.console import Console
from rich import box
from typing import Optional

from .domain import DependencyGraph, Universe

console = Console(stderr=True)


def render_universe_table(universe: Universe) -> None:
    """
    Render the canonical identity of every package.

    Args:
        universe: Indexed universe
    """
    if not universe:
        console.print("[yellow]No packages found.[/yellow]")
        return

    table = Table(
        title=f"Universe ({len(universe)} packages)",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )
    table.add_column("Package", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Repository", style="dim")

    for name, identity in universe.items():
        version = str(identity.version)
        if identity.version.is_scm:
            version += " [yellow](scm)[/yellow]"
        table.add_row(name, version, identity.repository or "")

    console.print(table)


def render_graph_summary(graph: DependencyGraph, artifacts: Optional[dict] = None) -> None:
    """
    Render a summary of an extracted graph.

    Args:
        graph: Extracted graph
        artifacts: Written artifact paths ({'dot': ..., 'image': ...})
    """
    console.print(f"\n[bold]{graph.root}[/bold] (depth {graph.depth_max})")

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold magenta")
    table.add_column("Item", style="cyan")
    table.add_column("Count", justify="right", style="green")
    table.add_row("Packages", str(len(graph.nodes)))
    table.add_row("Edges", str(len(graph.edges)))
    console.print(table)

    console.print(f"\n{graph.dependency_count} dependencies found")

    if artifacts:
        for kind, path in artifacts.items():
            if path:
                console.print(f"  • [cyan]{kind}[/cyan] {path}")
