"""
File-backed package metadata provider for depgraph.

Repositories are described by JSON/YAML/TOML files:

    name: arbor                    # optional, defaults to the file stem
    packages:
      dev-lang/python:
        - version: "3.11.4"
          DEPENDENCIES: "build+run: sys-libs/zlib test: dev-python/pytest"
        - version: scm

Every key of a version entry other than ``version`` is metadata. A
DEPENDENCIES string is parsed into a dependency spec tree when the entry is
loaded.
"""

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import yaml

from ..domain import (
    DEPENDENCIES_KEY,
    InvalidPackageVersionError,
    PackageIdentity,
    PackageVersion,
)
from ..exit_codes import RepositoryNotFoundError, RepositoryUnavailableError
from .spec_parser import DependencySpecParseError, parse_dependencies

logger = logging.getLogger(__name__)


REPOSITORY_SUFFIXES = ('.json', '.yaml', '.yml', '.toml')


def load_document(path: Path) -> Any:
    """
    Load a JSON, YAML or TOML document, chosen by file suffix.

    Args:
        path: File to read

    Returns:
        Parsed document
    """
    suffix = path.suffix.lower()
    if suffix == '.toml':
        with open(path, 'rb') as f:
            return tomllib.load(f)
    with open(path, 'r', encoding='utf-8') as f:
        if suffix in ('.yaml', '.yml'):
            return yaml.safe_load(f)
        return json.load(f)


class Repository:
    """
    One package repository.

    Example:
        repo = store.fetch_repository("arbor")
        for name in repo.package_names():
            ids = repo.package_ids(name)
    """

    def __init__(self, name: str, packages: Dict[str, List[Dict[str, Any]]]):
        """
        Initialize Repository.

        Args:
            name: Repository identifier
            packages: Package name -> list of raw version entries
        """
        self.name = name
        self._packages = packages

    def package_names(self) -> List[str]:
        """Package names in file order."""
        return list(self._packages)

    def package_ids(self, name: str) -> List[PackageIdentity]:
        """
        All identities this repository provides for a package name.

        Entries with an invalid version are skipped with a warning.
        """
        entries = self._packages.get(name) or []
        if isinstance(entries, dict):
            entries = [entries]

        identities = []
        for entry in entries:
            identity = self._make_identity(name, entry)
            if identity is not None:
                identities.append(identity)
        return identities

    def _make_identity(self, name: str, entry: Any) -> Optional[PackageIdentity]:
        if not isinstance(entry, dict) or 'version' not in entry:
            logger.warning(f"{self.name}: entry for {name} has no version, skipped")
            return None

        try:
            version = PackageVersion.parse(entry['version'])
        except InvalidPackageVersionError as e:
            logger.warning(f"{self.name}: {name}: {e}, skipped")
            return None

        metadata = {k: v for k, v in entry.items() if k != 'version'}
        dependencies = metadata.get(DEPENDENCIES_KEY)
        if isinstance(dependencies, str):
            try:
                metadata[DEPENDENCIES_KEY] = parse_dependencies(dependencies)
            except DependencySpecParseError as e:
                # Raw string is kept and later treated as "no dependencies"
                logger.warning(f"{self.name}: {name}-{version}: bad {DEPENDENCIES_KEY}: {e}")

        return PackageIdentity(
            name=name,
            version=version,
            repository=self.name,
            metadata=metadata,
        )

    def __repr__(self) -> str:
        return f"Repository({self.name!r}, {len(self._packages)} packages)"


class RepositoryStore:
    """
    Package metadata provider reading repository files from disk.

    Repositories are listed in the order of the configured paths; a directory
    contributes its repository files sorted by file name.

    Example:
        store = RepositoryStore(["~/.depgraph/repositories"])
        for repo_name in store.list_repositories():
            repo = store.fetch_repository(repo_name)
    """

    def __init__(self, paths: Iterable[Union[str, Path]]):
        """
        Initialize RepositoryStore.

        Args:
            paths: Repository files or directories of repository files
        """
        self.paths = [Path(p).expanduser() for p in paths]
        self._files: Optional[Dict[str, Path]] = None
        self._cache: Dict[str, Repository] = {}

    def _discover(self) -> Dict[str, Path]:
        """Map repository names to files, first occurrence wins."""
        if self._files is not None:
            return self._files

        files: Dict[str, Path] = {}
        for path in self.paths:
            if path.is_dir():
                candidates = sorted(
                    p for p in path.iterdir()
                    if p.is_file() and p.suffix.lower() in REPOSITORY_SUFFIXES
                )
            elif path.is_file():
                candidates = [path]
            else:
                logger.warning(f"Repository path does not exist: {path}")
                continue

            for candidate in candidates:
                name = self._repository_name(candidate)
                if name in files:
                    logger.warning(f"Duplicate repository {name!r} in {candidate}, ignored")
                    continue
                files[name] = candidate

        self._files = files
        return files

    def _repository_name(self, path: Path) -> str:
        # Only the name header is needed here; the full file is read on fetch
        try:
            document = load_document(path)
        except Exception as e:
            logger.debug(f"Cannot read name from {path}: {e}")
            return path.stem
        if isinstance(document, dict) and isinstance(document.get('name'), str):
            return document['name']
        return path.stem

    def list_repositories(self) -> List[str]:
        """Repository identifiers in listing order."""
        return list(self._discover())

    def fetch_repository(self, name: str) -> Repository:
        """
        Load a repository by identifier.

        Raises:
            RepositoryNotFoundError: If no repository has this name
            RepositoryUnavailableError: If its file cannot be read or parsed
        """
        if name in self._cache:
            return self._cache[name]

        files = self._discover()
        if name not in files:
            raise RepositoryNotFoundError(name)

        path = files[name]
        try:
            document = load_document(path)
        except (OSError, ValueError, yaml.YAMLError) as e:
            raise RepositoryUnavailableError(f"Cannot read repository {name} from {path}: {e}", name) from e

        if not isinstance(document, dict):
            raise RepositoryUnavailableError(f"Repository file {path} is not a mapping", name)

        packages = document.get('packages') or {}
        if not isinstance(packages, dict):
            raise RepositoryUnavailableError(f"'packages' in {path} must be a mapping", name)

        repo = Repository(name, packages)
        self._cache[name] = repo
        logger.debug(f"Loaded repository {name} ({len(packages)} packages) from {path}")
        return repo
