"""Tests for multi-repository Maven release resolution."""

import logging
from unittest.mock import patch

import pytest

from common.http_client import HttpStatusError
from registry.maven import (
    LookupStatus,
    RegistryFailureError,
    get_pkg_releases,
    lookup_releases,
)
from registry.maven.models import ResolutionState
from registry.maven.resolver import merge_versions


REPO_A = "https://repo-a.example.com/maven2/"
REPO_B = "https://repo-b.example.com/maven2"
CENTRAL = "https://repo1.maven.org/maven2/"


def metadata_xml(*versions):
    items = "".join(f"<version>{v}</version>" for v in versions)
    return f"<metadata><versioning><versions>{items}</versions></versioning></metadata>"


def pom_xml(url=None, scm_url=None):
    parts = []
    if url:
        parts.append(f"<url>{url}</url>")
    if scm_url:
        parts.append(f"<scm><url>{scm_url}</url></scm>")
    return f"<project xmlns=\"http://maven.apache.org/POM/4.0.0\">{''.join(parts)}</project>"


class FakeRepositories:
    """Serves canned bodies by URL; unknown URLs answer 404."""

    def __init__(self, responses):
        self.responses = responses
        self.requested = []

    def __call__(self, url, context=None):
        self.requested.append(url)
        response = self.responses.get(url)
        if isinstance(response, int):
            raise HttpStatusError(url, response)
        if response is None:
            raise HttpStatusError(url, 404)
        return response


def meta_url(repo, path="com/example/lib"):
    return f"{repo.rstrip('/')}/{path}/maven-metadata.xml"


def pom_url(repo, version, path="com/example/lib", name="lib"):
    return f"{repo.rstrip('/')}/{path}/{version}/{name}-{version}.pom"


@pytest.fixture
def fake_repos():
    repos = FakeRepositories({})
    with patch("common.http_client.fetch_text", side_effect=repos):
        yield repos


class TestMergeVersions:
    """Test the per-repository fold step."""

    def test_records_local_best_for_new_versions(self):
        state = merge_versions(ResolutionState(), REPO_A, ["1.0", "1.2", "1.1"])

        assert state.versions == ("1.0", "1.2", "1.1")
        assert state.best_sources == {"1.2": REPO_A}

    def test_skips_versions_seen_earlier(self):
        state = merge_versions(ResolutionState(), REPO_A, ["1.0", "1.1"])
        state = merge_versions(state, REPO_B, ["1.1", "1.0", "0.9"])

        assert state.versions == ("1.0", "1.1", "0.9")
        assert state.best_sources == {"1.1": REPO_A, "0.9": REPO_B}

    def test_nothing_new_records_nothing(self):
        state = merge_versions(ResolutionState(), REPO_A, ["1.0"])
        state = merge_versions(state, REPO_B, ["1.0"])

        assert state.best_sources == {"1.0": REPO_A}

    def test_later_repository_overwrites_same_local_best(self):
        """A version string that becomes some later repository's local best is re-attributed."""
        state = merge_versions(ResolutionState(best_sources={"2.0": REPO_A}), REPO_B, ["2.0"])

        assert state.best_sources["2.0"] == REPO_B

    def test_does_not_mutate_input_state(self):
        original = ResolutionState()
        merge_versions(original, REPO_A, ["1.0"])

        assert original.versions == ()
        assert original.best_sources == {}
        assert original.origins == {}

    def test_records_first_repository_of_every_version(self):
        state = merge_versions(ResolutionState(), REPO_A, ["1.0", "1.1"])
        state = merge_versions(state, REPO_B, ["1.1", "0.9", "1.0-rc1"])

        assert state.origins == {"1.0": REPO_A, "1.1": REPO_A, "0.9": REPO_B, "1.0-rc1": REPO_B}


class TestLookupReleases:
    """Test the full lookup across repositories."""

    def test_merges_and_enriches_from_repository_holding_latest(self, fake_repos):
        fake_repos.responses.update({
            meta_url(REPO_A): metadata_xml("1.0", "1.2", "1.1"),
            meta_url(REPO_B): metadata_xml("1.3"),
            pom_url(REPO_B, "1.3"): pom_xml("https://lib.example.com", "https://github.com/example/lib"),
        })

        result = get_pkg_releases("com.example:lib", [REPO_A, REPO_B])

        assert result.versions == ["1.0", "1.2", "1.1", "1.3"]
        assert result.homepage == "https://lib.example.com"
        assert result.source_url == "https://github.com/example/lib"
        assert fake_repos.requested[-1] == pom_url(REPO_B, "1.3")

    def test_releases_are_deduplicated_union_in_first_seen_order(self, fake_repos):
        fake_repos.responses.update({
            meta_url(REPO_A): metadata_xml("1.0", "2.0"),
            meta_url(REPO_B): metadata_xml("2.0", "1.5", "1.0"),
        })

        result = get_pkg_releases("com.example:lib", [REPO_A, REPO_B])

        assert result.versions == ["1.0", "2.0", "1.5"]
        assert fake_repos.requested[-1] == pom_url(REPO_A, "2.0")

    def test_queries_every_repository_even_after_a_hit(self, fake_repos):
        fake_repos.responses.update({meta_url(REPO_A): metadata_xml("1.0")})

        get_pkg_releases("com.example:lib", [REPO_A, REPO_B])

        assert meta_url(REPO_B) in fake_repos.requested

    def test_result_shape(self, fake_repos):
        fake_repos.responses.update({
            meta_url(REPO_A): metadata_xml("1.0"),
            pom_url(REPO_A, "1.0"): pom_xml(url="${project.url}"),
        })

        data = get_pkg_releases("com.example:lib", [REPO_A]).to_dict()

        assert data == {
            "display": "com.example:lib",
            "group": "com.example",
            "name": "lib",
            "dependencyUrl": "com/example/lib",
            "releases": [{"version": "1.0"}],
        }

    def test_missing_pom_still_resolves_versions(self, fake_repos):
        fake_repos.responses.update({meta_url(REPO_A): metadata_xml("1.0")})

        result = get_pkg_releases("com.example:lib", [REPO_A])

        assert result.versions == ["1.0"]
        assert result.homepage is None
        assert result.source_url is None

    def test_is_idempotent(self, fake_repos):
        fake_repos.responses.update({
            meta_url(REPO_A): metadata_xml("1.0", "1.2"),
            meta_url(REPO_B): metadata_xml("1.3", "1.2"),
            pom_url(REPO_B, "1.3"): pom_xml("https://lib.example.com"),
        })

        first = get_pkg_releases("com.example:lib", [REPO_A, REPO_B])
        second = get_pkg_releases("com.example:lib", [REPO_A, REPO_B])

        assert first == second

    def test_no_repositories_returns_none_without_fetching(self, fake_repos, caplog):
        with caplog.at_level(logging.ERROR):
            assert get_pkg_releases("com.example:lib", []) is None
            assert get_pkg_releases("com.example:lib", None) is None

        assert fake_repos.requested == []
        assert any("No repositories defined" in r.getMessage() for r in caplog.records)

    def test_invalid_lookup_name_returns_not_found_without_fetching(self, fake_repos):
        outcome = lookup_releases("not-a-coordinate", [REPO_A])

        assert outcome.status is LookupStatus.NOT_FOUND
        assert fake_repos.requested == []

    def test_all_repositories_absent_returns_none(self, fake_repos, caplog):
        fake_repos.responses.update({
            meta_url(REPO_A): 404,
            meta_url(REPO_B): 503,
        })

        with caplog.at_level(logging.INFO):
            outcome = lookup_releases("com.example:lib", [REPO_A, REPO_B])

        assert outcome.status is LookupStatus.NOT_FOUND
        assert outcome.result is None
        assert any("No versions found" in r.getMessage() for r in caplog.records)

    def test_index_without_versions_returns_none(self, fake_repos):
        fake_repos.responses.update({meta_url(REPO_A): "<metadata/>"})

        assert get_pkg_releases("com.example:lib", [REPO_A]) is None

    def test_not_found_and_unparseable_repositories_are_skipped(self, fake_repos):
        fake_repos.responses.update({
            meta_url(REPO_A): "<metadata><oops>",
            meta_url(REPO_B): metadata_xml("3.0"),
        })

        result = get_pkg_releases("com.example:lib", [REPO_A, REPO_B])

        assert result.versions == ["3.0"]

    def test_primary_repository_server_error_is_registry_failure(self, fake_repos):
        fake_repos.responses.update({
            meta_url(REPO_A): metadata_xml("1.0"),
            meta_url(CENTRAL): 500,
        })

        outcome = lookup_releases("com.example:lib", [REPO_A, CENTRAL, REPO_B])

        assert outcome.status is LookupStatus.REGISTRY_FAILURE
        assert outcome.result is None
        assert meta_url(REPO_B) not in fake_repos.requested

    def test_primary_repository_server_error_raises_from_get_pkg_releases(self, fake_repos):
        fake_repos.responses.update({meta_url(CENTRAL): 503})

        with pytest.raises(RegistryFailureError):
            get_pkg_releases("com.example:lib", [CENTRAL])

    def test_primary_repository_failure_during_enrichment(self, fake_repos):
        fake_repos.responses.update({
            meta_url(CENTRAL): metadata_xml("1.0"),
            pom_url(CENTRAL, "1.0"): 429,
        })

        outcome = lookup_releases("com.example:lib", [CENTRAL])

        assert outcome.status is LookupStatus.REGISTRY_FAILURE

    def test_primary_repository_not_found_is_not_fatal(self, fake_repos):
        fake_repos.responses.update({
            meta_url(CENTRAL): 404,
            meta_url(REPO_A): metadata_xml("1.0"),
        })

        result = get_pkg_releases("com.example:lib", [CENTRAL, REPO_A])

        assert result.versions == ["1.0"]

    def test_injected_comparator_selects_enrichment_source(self, fake_repos):
        fake_repos.responses.update({
            meta_url(REPO_A): metadata_xml("10"),
            meta_url(REPO_B): metadata_xml("9"),
        })

        def lexical(a, b):
            return (a > b) - (a < b)

        get_pkg_releases("com.example:lib", [REPO_A, REPO_B], comparator=lexical)

        assert fake_repos.requested[-1] == pom_url(REPO_B, "9")

    def test_qualifier_segments_enrich_from_repository_holding_latest(self, fake_repos):
        """1.0-alpha < 1 < 1-ga-sp regardless of which pair is compared."""
        fake_repos.responses.update({
            meta_url(REPO_A): metadata_xml("1"),
            meta_url(REPO_B): metadata_xml("1.0-alpha", "1-ga-sp"),
            pom_url(REPO_B, "1-ga-sp"): pom_xml("https://lib.example.com"),
        })

        result = get_pkg_releases("com.example:lib", [REPO_A, REPO_B])

        assert result.versions == ["1", "1.0-alpha", "1-ga-sp"]
        assert result.homepage == "https://lib.example.com"
        assert fake_repos.requested[-1] == pom_url(REPO_B, "1-ga-sp")

    def test_cyclic_comparator_falls_back_to_first_listing_repository(self, fake_repos):
        """x > y > z > x: B keeps y locally, but the global fold settles on z."""
        fake_repos.responses.update({
            meta_url(REPO_A): metadata_xml("x"),
            meta_url(REPO_B): metadata_xml("y", "z"),
        })
        greater = {("x", "y"), ("y", "z"), ("z", "x")}

        def cyclic(a, b):
            if a == b:
                return 0
            return 1 if (a, b) in greater else -1

        outcome = lookup_releases("com.example:lib", [REPO_A, REPO_B], comparator=cyclic)

        assert outcome.status is LookupStatus.RESOLVED
        assert outcome.result.versions == ["x", "y", "z"]
        assert fake_repos.requested[-1] == pom_url(REPO_B, "z")


def test_file_repositories(tmp_path):
    """Local repositories resolve through the file:// scheme."""
    repo_a = tmp_path / "a"
    repo_b = tmp_path / "b"
    lib_a = repo_a / "org" / "acme" / "widget"
    lib_b = repo_b / "org" / "acme" / "widget"
    lib_a.mkdir(parents=True)
    (lib_b / "2.0").mkdir(parents=True)
    (lib_a / "maven-metadata.xml").write_text(metadata_xml("1.0", "1.1"), encoding="utf-8")
    (lib_b / "maven-metadata.xml").write_text(metadata_xml("1.1", "2.0"), encoding="utf-8")
    (lib_b / "2.0" / "widget-2.0.pom").write_text(
        pom_xml("https://widget.acme.org", "https://github.com/acme/widget"), encoding="utf-8"
    )

    result = get_pkg_releases("org.acme:widget", [repo_a.as_uri(), repo_b.as_uri()])

    assert result.versions == ["1.0", "1.1", "2.0"]
    assert result.homepage == "https://widget.acme.org"
    assert result.source_url == "https://github.com/acme/widget"
