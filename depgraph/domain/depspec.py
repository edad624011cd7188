"""
Dependency specification tree for depgraph.

A package's DEPENDENCIES metadata is a recursive tree over a closed set of
variants:

    NoDependency            - nothing
    NamedSet(name)          - reference to a named set, never expanded
    Labels(labels)          - scope marker for the following siblings
    PackageDep(category, package, spec)
                            - dependency on a single package
    Conditional(predicate, child)
                            - dependency gated by a build-time predicate
    AllOf(children)         - ordered sibling group

The tree is read-only: filtering always builds new sequences.
"""

from dataclasses import dataclass
from typing import FrozenSet, Tuple, Union


@dataclass(frozen=True)
class NoDependency:
    """Empty dependency."""


@dataclass(frozen=True)
class NamedSet:
    """Reference to a named group of dependencies."""
    name: str


@dataclass(frozen=True)
class Labels:
    """Label scope marker (e.g. build, run, test)."""
    labels: FrozenSet[str]

    @classmethod
    def of(cls, *labels: str) -> 'Labels':
        return cls(frozenset(labels))


@dataclass(frozen=True)
class PackageDep:
    """
    Dependency on a single package.

    Attributes:
        category: Package category ("dev-lang")
        package: Package name within the category ("python")
        spec: Reference text as written, including version and slot parts
    """
    category: str
    package: str
    spec: str = ""

    @classmethod
    def named(cls, full_name: str) -> 'PackageDep':
        category, package = full_name.split('/', 1)
        return cls(category, package, full_name)

    def full_name(self) -> str:
        return f"{self.category}/{self.package}"


@dataclass(frozen=True)
class Conditional:
    """Dependency subtree gated by a predicate such as "ssl?" or "||"."""
    predicate: str
    child: 'DependencySpecTree'


@dataclass(frozen=True)
class AllOf:
    """Ordered group of sibling specs; label scoping is positional."""
    children: Tuple['DependencySpecTree', ...] = ()

    @classmethod
    def of(cls, *children: 'DependencySpecTree') -> 'AllOf':
        return cls(tuple(children))


DependencySpecTree = Union[NoDependency, NamedSet, Labels, PackageDep, Conditional, AllOf]

SPEC_TYPES = (NoDependency, NamedSet, Labels, PackageDep, Conditional, AllOf)


def is_dependency_spec(value: object) -> bool:
    """Check whether a metadata value is a dependency spec tree."""
    return isinstance(value, SPEC_TYPES)
