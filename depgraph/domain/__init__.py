"""
Domain layer for depgraph.

Contains pure domain objects with no I/O or side effects:
- PackageVersion: ordered version with live/SCM flag
- PackageIdentity: one version of a package with its metadata
- DependencySpecTree variants: the DEPENDENCIES metadata tree
- Universe: package name -> canonical identity
- DependencyGraph: nodes and edges extracted for a root package
"""

from .version import PackageVersion, InvalidPackageVersionError
from .package import PackageIdentity, DEPENDENCIES_KEY
from .depspec import (
    AllOf,
    Conditional,
    DependencySpecTree,
    Labels,
    NamedSet,
    NoDependency,
    PackageDep,
    is_dependency_spec,
)
from .universe import Universe
from .graph import DependencyGraph, Edge

__all__ = [
    'PackageVersion',
    'InvalidPackageVersionError',
    'PackageIdentity',
    'DEPENDENCIES_KEY',
    'AllOf',
    'Conditional',
    'DependencySpecTree',
    'Labels',
    'NamedSet',
    'NoDependency',
    'PackageDep',
    'is_dependency_spec',
    'Universe',
    'DependencyGraph',
    'Edge',
]
