"""
Service layer for depgraph.

Services contain the business logic and orchestrate domain objects:
- UniverseService: index repositories, one canonical version per package
- GraphService: walk dependency specs into a node/edge graph
- GraphEmitter: serialize and render graphs with Graphviz

Services use infrastructure (the metadata provider, pydot) but do no
console output; they return data.
"""

from .universe_service import (
    EXCLUDED_REPOSITORIES,
    UniverseService,
    build_universe,
    select_best,
)
from .label_scope import UNAUTHORIZED_LABELS, filter_label_scopes, labels_authorized
from .graph_service import (
    DEFAULT_DEPTH_MAX,
    RESERVED_PREFIXES,
    GraphService,
    build_graph,
)
from .emit_service import (
    RENDER_FORMATS,
    EmitResult,
    GraphEmitter,
    quote_identifier,
)

__all__ = [
    'EXCLUDED_REPOSITORIES',
    'UniverseService',
    'build_universe',
    'select_best',
    'UNAUTHORIZED_LABELS',
    'filter_label_scopes',
    'labels_authorized',
    'DEFAULT_DEPTH_MAX',
    'RESERVED_PREFIXES',
    'GraphService',
    'build_graph',
    'RENDER_FORMATS',
    'EmitResult',
    'GraphEmitter',
    'quote_identifier',
]
