"""Tests for version selection and universe indexing."""

import pytest

from depgraph.exit_codes import RepositoryUnavailableError
from depgraph.services import EXCLUDED_REPOSITORIES, UniverseService, build_universe, select_best


class TestSelectBest:
    """Tests for select_best."""

    def test_empty(self):
        assert select_best([]) is None

    def test_highest_release(self, make_identity):
        ids = [make_identity("a/a", v) for v in ("1.10", "1.2", "1.9")]
        assert str(select_best(ids).version) == "1.10"

    def test_release_preferred_over_scm(self, make_identity):
        ids = [make_identity("a/a", v) for v in ("1.0", "scm", "2.0-scm")]
        assert str(select_best(ids).version) == "1.0"

    def test_all_scm_picks_highest(self, make_identity):
        ids = [make_identity("a/a", v) for v in ("scm", "9999", "1.0-scm")]
        assert str(select_best(ids).version) == "scm"

    def test_single_scm(self, make_identity):
        ids = [make_identity("a/a", "scm")]
        assert select_best(ids) is ids[0]

    def test_equal_versions_later_wins(self, make_identity):
        first = make_identity("a/a", "1.0", repository="first")
        second = make_identity("a/a", "1.0.0", repository="second")
        assert select_best([first, second]).repository == "second"
        assert select_best([second, first]).repository == "first"

    def test_does_not_mutate_input(self, make_identity):
        ids = [make_identity("a/a", v) for v in ("2.0", "1.0")]
        select_best(ids)
        assert [str(pid.version) for pid in ids] == ["2.0", "1.0"]


class TestUniverseService:
    """Tests for UniverseService.build."""

    def test_first_repository_wins(self, make_identity, make_provider):
        provider = make_provider({
            "arbor": {"a/a": [make_identity("a/a", "1.0", "arbor")]},
            "python": {"a/a": [make_identity("a/a", "9.0", "python")]},
        })
        universe = UniverseService(provider).build()
        assert universe["a/a"].repository == "arbor"
        assert str(universe["a/a"].version) == "1.0"

    def test_later_repository_fills_missing_names(self, make_identity, make_provider):
        provider = make_provider({
            "arbor": {"a/a": [make_identity("a/a", repository="arbor")]},
            "python": {"b/b": [make_identity("b/b", repository="python")]},
        })
        universe = UniverseService(provider).build()
        assert list(universe) == ["a/a", "b/b"]
        assert universe["b/b"].repository == "python"

    def test_name_without_candidates_left_to_later_repositories(self, make_identity, make_provider):
        provider = make_provider({
            "arbor": {"a/a": []},
            "python": {"a/a": [make_identity("a/a", repository="python")]},
        })
        assert UniverseService(provider).build()["a/a"].repository == "python"

    def test_denylisted_repositories_not_fetched(self, make_identity, make_provider):
        provider = make_provider({
            "installed": {"a/a": [make_identity("a/a", repository="installed")]},
            "graveyard": {"b/b": [make_identity("b/b", repository="graveyard")]},
            "arbor": {"a/a": [make_identity("a/a", repository="arbor")]},
        })
        universe = UniverseService(provider).build()
        assert provider.fetched == ["arbor"]
        assert universe["a/a"].repository == "arbor"
        assert "b/b" not in universe

    @pytest.mark.parametrize("name", sorted(EXCLUDED_REPOSITORIES))
    def test_every_denylisted_name(self, name, make_identity, make_provider):
        provider = make_provider({name: {"a/a": [make_identity("a/a")]}})
        assert len(UniverseService(provider).build()) == 0

    def test_extra_exclude(self, make_identity, make_provider):
        provider = make_provider({
            "local": {"a/a": [make_identity("a/a", repository="local")]},
            "arbor": {"a/a": [make_identity("a/a", repository="arbor")]},
        })
        universe = UniverseService(provider, exclude=["local"]).build()
        assert universe["a/a"].repository == "arbor"

    def test_exclude_from_config(self, make_identity, make_provider):
        provider = make_provider({
            "local": {"a/a": [make_identity("a/a", repository="local")]},
        })
        config = {'repositories': {'exclude': ["local"]}}
        assert "a/a" not in UniverseService(provider, config=config).build()

    def test_content_repositories(self, make_provider):
        provider = make_provider({"installed": {}, "arbor": {}, "accounts": {}, "python": {}})
        assert list(UniverseService(provider).content_repositories()) == ["arbor", "python"]

    def test_selects_best_version(self, make_identity, make_provider):
        provider = make_provider({
            "arbor": {"a/a": [make_identity("a/a", v) for v in ("scm", "1.2", "1.10")]},
        })
        assert str(build_universe(provider)["a/a"].version) == "1.10"

    def test_provider_error_propagates(self, make_provider):
        provider = make_provider({"arbor": {}})

        def broken(name):
            raise RepositoryUnavailableError("disk gone", name)

        provider.fetch_repository = broken
        with pytest.raises(RepositoryUnavailableError):
            build_universe(provider)

    def test_deterministic(self, make_identity, make_provider):
        provider = make_provider({
            "arbor": {
                "b/b": [make_identity("b/b")],
                "a/a": [make_identity("a/a", "2.0"), make_identity("a/a", "1.0")],
            },
        })
        first = build_universe(provider)
        second = build_universe(provider)
        assert first.to_list() == second.to_list()
