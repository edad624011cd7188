"""Tests for the domain layer."""

import pytest

from depgraph.domain import (
    AllOf,
    Conditional,
    DependencyGraph,
    Labels,
    NamedSet,
    NoDependency,
    PackageDep,
    PackageIdentity,
    PackageVersion,
    Universe,
    is_dependency_spec,
)


class TestPackageIdentity:
    """Tests for PackageIdentity."""

    def test_fetch_metadata(self, make_identity):
        pid = make_identity("dev-lang/python", deps="build: sys-libs/zlib")
        assert isinstance(pid.fetch_metadata("DEPENDENCIES"), AllOf)
        assert pid.fetch_metadata("SUMMARY") is None

    def test_metadata_not_part_of_equality(self):
        version = PackageVersion.parse("1.0")
        a = PackageIdentity("a/a", version, "arbor", {"DEPENDENCIES": AllOf()})
        b = PackageIdentity("a/a", version, "arbor", {})
        assert a == b
        assert hash(a) == hash(b)

    def test_to_dict(self, make_identity):
        d = make_identity("dev-lang/python", version="scm", repository="arbor").to_dict()
        assert d == {
            'name': "dev-lang/python",
            'version': "scm",
            'scm': True,
            'repository': "arbor",
        }

    def test_str(self, make_identity):
        assert str(make_identity("dev-lang/python", version="3.11")) == "dev-lang/python-3.11"


class TestDependencySpec:
    """Tests for the dependency spec variants."""

    def test_full_name(self):
        dep = PackageDep("dev-lang", "python", ">=dev-lang/python-3.8")
        assert dep.full_name() == "dev-lang/python"

    def test_named(self):
        assert PackageDep.named("sys-libs/zlib") == PackageDep("sys-libs", "zlib", "sys-libs/zlib")

    def test_labels_of(self):
        assert Labels.of("build", "run").labels == frozenset({"build", "run"})

    @pytest.mark.parametrize("value", [
        NoDependency(),
        NamedSet("system"),
        Labels.of("run"),
        PackageDep.named("a/b"),
        Conditional("ssl?", AllOf()),
        AllOf.of(PackageDep.named("a/b")),
    ])
    def test_is_dependency_spec(self, value):
        assert is_dependency_spec(value)

    @pytest.mark.parametrize("value", ["build: a/b", None, 42, ["a/b"]])
    def test_other_values_are_not_specs(self, value):
        assert not is_dependency_spec(value)


class TestUniverse:
    """Tests for Universe."""

    def test_mapping_behaviour(self, make_identity):
        pid = make_identity("a/a")
        universe = Universe({"a/a": pid})
        assert universe["a/a"] is pid
        assert "a/a" in universe
        assert universe.get("b/b") is None
        assert len(universe) == 1

    def test_copy_on_construction(self, make_identity):
        packages = {"a/a": make_identity("a/a")}
        universe = Universe(packages)
        packages["b/b"] = make_identity("b/b")
        assert "b/b" not in universe

    def test_to_list_keeps_insertion_order(self, make_identity):
        universe = Universe({
            "z/z": make_identity("z/z"),
            "a/a": make_identity("a/a"),
        })
        assert [d['name'] for d in universe.to_list()] == ["z/z", "a/a"]


class TestDependencyGraph:
    """Tests for DependencyGraph."""

    def test_dependency_count_excludes_root(self):
        graph = DependencyGraph(root="a/a", nodes=["a/a", "b/b", "c/c"])
        assert graph.dependency_count == 2

    def test_dependency_count_empty(self):
        assert DependencyGraph(root="a/a").dependency_count == 0

    def test_artifact_stem(self):
        assert DependencyGraph(root="dev-texlive/texlive-xetex").artifact_stem == "dev-texlive-texlive-xetex"

    def test_to_dict(self):
        graph = DependencyGraph(root="a/a", nodes=["a/a", "b/b"], edges=[("a/a", "b/b")], depth_max=3)
        assert graph.to_dict() == {
            'root': "a/a",
            'depth_max': 3,
            'dependency_count': 1,
            'nodes': ["a/a", "b/b"],
            'edges': [["a/a", "b/b"]],
        }
