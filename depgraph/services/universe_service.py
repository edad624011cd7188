"""
Universe service for depgraph.

Builds the package name -> canonical identity map from every content
repository of a metadata provider, choosing one version per name.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Sequence

from ..domain import PackageIdentity, Universe

logger = logging.getLogger(__name__)


# Synthetic and housekeeping repositories that never provide content
EXCLUDED_REPOSITORIES = frozenset({
    'installed',
    'accounts',
    'graveyard',
    'unavailable',
    'unavailable-unofficial',
    'unwritten',
    'repository',
    'installed-accounts',
    'installed_unpackaged',
})


def select_best(candidates: Sequence[PackageIdentity]) -> Optional[PackageIdentity]:
    """
    Pick the canonical identity among the versions of one package.

    SCM versions are only chosen when nothing else exists. Equal versions
    keep their source order, so the later candidate wins.

    Args:
        candidates: Identities sharing a package name

    Returns:
        Highest non-SCM identity, the highest SCM identity if all are SCM,
        or None when there are no candidates
    """
    ordered = sorted(candidates, key=lambda pid: pid.version)
    if not ordered:
        return None

    if all(pid.version.is_scm for pid in ordered):
        return ordered[-1]

    released = [pid for pid in ordered if not pid.version.is_scm]
    return released[-1]


class UniverseService:
    """
    Service for indexing package repositories.

    Example:
        service = UniverseService(RepositoryStore(paths))
        universe = service.build()
        python = universe["dev-lang/python"]
    """

    def __init__(
        self,
        provider: Any,
        exclude: Optional[Iterable[str]] = None,
        config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize UniverseService.

        Args:
            provider: Metadata provider (list_repositories / fetch_repository)
            exclude: Extra repository names to skip on top of EXCLUDED_REPOSITORIES
            config: Configuration dict; repositories.exclude is read when exclude is None
        """
        self.provider = provider
        self.config = config or {}
        if exclude is None:
            exclude = self.config.get('repositories', {}).get('exclude', [])
        self.excluded = EXCLUDED_REPOSITORIES | frozenset(exclude)

    def content_repositories(self):
        """Yield names of repositories that take part in indexing, in listing order."""
        for name in self.provider.list_repositories():
            if name in self.excluded:
                logger.debug(f"Skipping repository {name}")
                continue
            yield name

    def build(self) -> Universe:
        """
        Index all content repositories.

        The first repository listing a name decides its identity; later
        repositories providing the same name are not consulted.

        Returns:
            Universe of canonical identities
        """
        packages: Dict[str, PackageIdentity] = {}

        for repo_name in self.content_repositories():
            repo = self.provider.fetch_repository(repo_name)
            added = 0
            for name in repo.package_names():
                if name in packages:
                    continue
                best = select_best(repo.package_ids(name))
                if best is not None:
                    packages[name] = best
                    added += 1
            logger.debug(f"Repository {repo_name}: {added} packages indexed")

        logger.info(f"Universe holds {len(packages)} packages")
        return Universe(packages)


def build_universe(provider: Any, exclude: Optional[Iterable[str]] = None) -> Universe:
    """Build a universe from provider. Shortcut for UniverseService(...).build()."""
    return UniverseService(provider, exclude=exclude).build()
