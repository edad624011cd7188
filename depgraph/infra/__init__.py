"""
Infrastructure layer for depgraph.

Contains the concrete package metadata provider:
- RepositoryStore: lists and loads repository files
- Repository: package names and identities of one repository
- parse_dependencies: DEPENDENCIES string -> dependency spec tree

These provide clean interfaces that can be replaced by fakes in tests.
"""

from .repository_store import Repository, RepositoryStore, load_document
from .spec_parser import (
    DependencySpecParseError,
    parse_dependencies,
    parse_package_reference,
)

__all__ = [
    'Repository',
    'RepositoryStore',
    'load_document',
    'DependencySpecParseError',
    'parse_dependencies',
    'parse_package_reference',
]
