#!/usr/bin/env python3

import click

from depgraph.commands.graph import graph_handler
from depgraph.commands.universe import universe_handler
from depgraph.commands.config import config_cmd


@click.group()
@click.version_option(package_name="depgraph")
def cli():
    """depgraph - Dependency graphs for packages in a repository universe.

    Picks one version per package across the configured repositories,
    filters test/suggestion dependency scopes and writes the dependency
    graph of a package as Graphviz DOT and a rendered image.
    """
    pass


cli.add_command(graph_handler, name='graph')
cli.add_command(universe_handler, name='universe')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
