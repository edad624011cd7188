"""
Shared fixtures for depgraph tests.
"""

import os

import pytest

from depgraph.domain import DEPENDENCIES_KEY, PackageIdentity, PackageVersion, Universe
from depgraph.exit_codes import RepositoryNotFoundError
from depgraph.infra import parse_dependencies


class FakeRepository:
    """In-memory repository: package name -> list of identities."""

    def __init__(self, name, packages):
        self.name = name
        self._packages = packages

    def package_names(self):
        return list(self._packages)

    def package_ids(self, name):
        return list(self._packages[name])


class FakeProvider:
    """In-memory metadata provider keeping repository listing order."""

    def __init__(self, repositories):
        self.repositories = repositories
        self.fetched = []

    def list_repositories(self):
        return list(self.repositories)

    def fetch_repository(self, name):
        if name not in self.repositories:
            raise RepositoryNotFoundError(name)
        self.fetched.append(name)
        return self.repositories[name]


@pytest.fixture
def make_identity():
    """Factory for PackageIdentity; deps is a DEPENDENCIES string or raw value."""
    def _make(name, version="1.0", repository="arbor", deps=None):
        metadata = {}
        if isinstance(deps, str):
            metadata[DEPENDENCIES_KEY] = parse_dependencies(deps)
        elif deps is not None:
            metadata[DEPENDENCIES_KEY] = deps
        return PackageIdentity(
            name=name,
            version=PackageVersion.parse(version),
            repository=repository,
            metadata=metadata,
        )
    return _make


@pytest.fixture
def make_universe(make_identity):
    """Factory for a Universe from {name: DEPENDENCIES string or None}."""
    def _make(packages):
        return Universe({
            name: make_identity(name, deps=deps)
            for name, deps in packages.items()
        })
    return _make


@pytest.fixture
def make_provider():
    """Factory for a FakeProvider from {repo: {package: [identities]}}."""
    def _make(repositories):
        return FakeProvider({
            repo_name: FakeRepository(repo_name, packages)
            for repo_name, packages in repositories.items()
        })
    return _make


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config lookup at an empty temporary home."""
    for key in list(os.environ):
        if key.startswith("DEPGRAPH_"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home
