"""
Universe domain object for depgraph.

The universe maps every package name to the single canonical identity chosen
to represent it. It is built once per run and never modified afterwards.
"""

from collections.abc import Mapping
from typing import Any, Dict, Iterator, List

from .package import PackageIdentity


class Universe(Mapping):
    """
    Read-only mapping of package name -> canonical PackageIdentity.

    Iteration follows insertion order, i.e. the order in which the indexer
    first met each name.
    """

    def __init__(self, packages: Dict[str, PackageIdentity]):
        self._packages = dict(packages)

    def __getitem__(self, name: str) -> PackageIdentity:
        return self._packages[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._packages)

    def __len__(self) -> int:
        return len(self._packages)

    def __repr__(self) -> str:
        return f"Universe({len(self._packages)} packages)"

    def to_list(self) -> List[Dict[str, Any]]:
        """Serialize as a list of identity dicts for JSONL output."""
        return [pid.to_dict() for pid in self._packages.values()]
