"""
Universe command for depgraph.

Lists the canonical version chosen for every package across the configured
repositories.
"""

import click

from ..api import DepGraph
from ..cli_utils import standard_command, add_common_options
from ..config import load_config, configure_logging


@click.command('universe')
@add_common_options('repo', 'pretty', 'debug')
@standard_command
def universe_handler(repos: tuple, pretty: bool, debug: bool):
    """
    List the canonical identity of every package.

    Outputs one JSON object per package (JSONL); use --pretty for a table.

    \b
    Examples:
        depgraph universe
        depgraph universe -r ~/repos/arbor --pretty
    """
    config = load_config()
    configure_logging(config, debug)

    universe = DepGraph(paths=list(repos) or None, config=config).universe()

    if pretty:
        from ..render import render_universe_table
        render_universe_table(universe)
        return None

    return universe.to_list()
