"""
PackageIdentity domain object for depgraph.

A PackageIdentity is one concrete buildable version of a package, as supplied
by a repository. Many identities share a name; the universe keeps one of them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .version import PackageVersion


DEPENDENCIES_KEY = "DEPENDENCIES"


@dataclass(frozen=True)
class PackageIdentity:
    """
    One version of a package.

    Attributes:
        name: Qualified package name ("category/name")
        version: Parsed version
        repository: Name of the repository providing this version
        metadata: Key/value metadata; DEPENDENCIES holds a dependency spec tree
    """

    name: str
    version: PackageVersion
    repository: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    def fetch_metadata(self, key: str) -> Optional[Any]:
        """Return the metadata value for key, or None if absent."""
        return self.metadata.get(key)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'version': str(self.version),
            'scm': self.version.is_scm,
            'repository': self.repository,
        }

    def __str__(self) -> str:
        return f"{self.name}-{self.version}"
