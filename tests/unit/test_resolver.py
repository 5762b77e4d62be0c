"""Tests for version normalization, comparison and release selection."""

from __future__ import annotations

import pytest

from goupdate.updater.models import Release, ResolutionStatus
from goupdate.updater.resolver import (
    Comparison,
    compare,
    find_release,
    find_upgrade,
    newer_releases,
    normalize,
    parse_semver,
    resolve,
    select_artifact,
)


class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize("raw", ["go1.25.0", "1.25.0", "v1.25.0"])
    def test_canonical_form(self, raw):
        assert normalize(raw) == "v1.25.0"

    @pytest.mark.parametrize(
        "raw", ["go1.25.0", "1.21", "v2", "go1.25rc1", "weird", "go", "v", "gogo1"]
    )
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once

    def test_keeps_prerelease(self):
        assert normalize("go1.26.0-rc.1") == "v1.26.0-rc.1"

    def test_strips_surrounding_whitespace(self):
        """`go env GOVERSION` output ends with a newline."""
        assert normalize("go1.24.3\n") == "v1.24.3"


class TestParseSemver:
    """Tests for parse_semver()."""

    def test_full_version(self):
        assert parse_semver("v1.25.3") == (1, 25, 3, ())

    def test_missing_patch_is_zero(self):
        assert parse_semver("v1.21") == (1, 21, 0, ())

    def test_missing_minor_is_zero(self):
        assert parse_semver("v2") == (2, 0, 0, ())

    def test_prerelease_identifiers(self):
        assert parse_semver("v1.2.3-rc.1") == (1, 2, 3, ("rc", "1"))

    def test_build_metadata_dropped(self):
        assert parse_semver("v1.2.3+meta.5") == (1, 2, 3, ())

    @pytest.mark.parametrize(
        "value",
        ["1.2.3", "v1.2.3.4", "v01.2.3", "v1.2.3-01", "v1.25rc1", "vabc", "v", "v1.2-pre"],
    )
    def test_invalid(self, value):
        assert parse_semver(value) is None


class TestCompare:
    """Tests for compare()."""

    def test_less(self):
        assert compare(normalize("go1.24.0"), normalize("go1.25.0")) is Comparison.LESS

    def test_greater(self):
        assert compare("v1.25.1", "v1.25.0") is Comparison.GREATER

    @pytest.mark.parametrize("value", ["v1.25.0", "v1.2.3-rc.1", "v0.0.1"])
    def test_equal_to_itself(self, value):
        assert compare(value, value) is Comparison.EQUAL

    def test_numeric_not_lexicographic(self):
        assert compare("v1.10.0", "v1.9.0") is Comparison.GREATER

    def test_missing_patch_equals_zero_patch(self):
        assert compare("v1.21", "v1.21.0") is Comparison.EQUAL

    def test_build_metadata_ignored(self):
        assert compare("v1.2.3+a", "v1.2.3+b") is Comparison.EQUAL

    def test_prerelease_precedes_release(self):
        assert compare("v1.26.0-rc.1", "v1.26.0") is Comparison.LESS
        assert compare("v1.26.0", "v1.26.0-rc.1") is Comparison.GREATER

    def test_prerelease_after_previous_release(self):
        assert compare("v1.26.0-rc.1", "v1.25.9") is Comparison.GREATER

    def test_semver_precedence_chain(self):
        """The ordering example from the Semantic Versioning 2.0.0 document."""
        chain = [
            "v1.0.0-alpha",
            "v1.0.0-alpha.1",
            "v1.0.0-alpha.beta",
            "v1.0.0-beta",
            "v1.0.0-beta.2",
            "v1.0.0-beta.11",
            "v1.0.0-rc.1",
            "v1.0.0",
        ]
        for lower, higher in zip(chain, chain[1:]):
            assert compare(lower, higher) is Comparison.LESS, (lower, higher)
            assert compare(higher, lower) is Comparison.GREATER, (higher, lower)

    def test_invalid_sorts_below_valid(self):
        assert compare("v1.25rc1", "v0.0.1") is Comparison.LESS
        assert compare("v0.0.1", "v1.25rc1") is Comparison.GREATER

    def test_invalid_versions_equal(self):
        assert compare("vfoo", "vbar") is Comparison.EQUAL


class TestFindUpgrade:
    """Tests for find_upgrade()."""

    def test_returns_newest(self, catalog):
        result = find_upgrade(catalog, "go1.24.3")
        assert result is not None
        assert result.version == "go1.25.0"

    def test_up_to_date(self, catalog):
        assert find_upgrade(catalog, "go1.25.0") is None

    def test_local_ahead_of_catalog(self, catalog):
        assert find_upgrade(catalog, "go1.26.0") is None

    def test_accepts_any_local_spelling(self, catalog):
        for local in ("1.24.3", "v1.24.3", "go1.24.3"):
            assert find_upgrade(catalog, local).version == "go1.25.0"

    def test_first_newer_entry_wins_over_maximum(self, make_release):
        """An unsorted catalog yields its first newer entry, not the highest one."""
        unsorted = [make_release("go1.24.3"), make_release("go1.25.0")]
        result = find_upgrade(unsorted, "go1.23.0")
        assert result is not None
        assert result.version == "go1.24.3"

    def test_empty_catalog(self):
        assert find_upgrade([], "go1.24.3") is None

    def test_skips_unparseable_entries(self, make_release):
        catalog = [make_release("go1.26rc1"), make_release("go1.25.0")]
        assert find_upgrade(catalog, "go1.24.0").version == "go1.25.0"

    def test_newer_releases_keeps_catalog_order(self, catalog):
        versions = [r.version for r in newer_releases(catalog, "go1.23.0")]
        assert versions == ["go1.25.0", "go1.24.3", "go1.23.1"]


class TestFindRelease:
    """Tests for find_release()."""

    def test_matches_normalized(self, catalog):
        assert find_release(catalog, "1.24.3").version == "go1.24.3"

    def test_missing(self, catalog):
        assert find_release(catalog, "go1.10.0") is None


class TestSelectArtifact:
    """Tests for select_artifact()."""

    def test_match(self, make_release):
        release = make_release("go1.25.0")
        artifact = select_artifact(release, "darwin", "arm64")
        assert artifact is not None
        assert artifact.filename == "go1.25.0.darwin-arm64.tar.gz"

    def test_no_match(self, make_release):
        release = make_release("go1.25.0")
        assert select_artifact(release, "windows", "amd64") is None

    def test_case_sensitive(self, make_release):
        release = make_release("go1.25.0")
        assert select_artifact(release, "Linux", "amd64") is None

    def test_first_match_wins(self, make_file):
        from goupdate.updater.models import Artifact

        release = Release(
            version="go1.25.0",
            files=(
                Artifact.from_dict(make_file("linux", "amd64", kind="archive")),
                Artifact.from_dict(
                    make_file("linux", "amd64", kind="installer", filename="second.pkg")
                ),
            ),
        )
        assert select_artifact(release, "linux", "amd64").kind == "archive"

    def test_release_without_files(self):
        assert select_artifact(Release(version="go1.25.0"), "linux", "amd64") is None


class TestResolve:
    """Tests for resolve()."""

    def test_available(self, catalog):
        resolution = resolve(catalog, "go1.24.3", "linux", "amd64")
        assert resolution.status is ResolutionStatus.AVAILABLE
        assert resolution.current_version == "v1.24.3"
        assert resolution.release.version == "go1.25.0"
        assert resolution.artifact.filename == "go1.25.0.linux-amd64.tar.gz"

    def test_no_update(self, catalog):
        resolution = resolve(catalog, "go1.25.0", "linux", "amd64")
        assert resolution.status is ResolutionStatus.NO_UPDATE
        assert resolution.release is None
        assert resolution.artifact is None

    def test_no_artifact(self, catalog):
        resolution = resolve(catalog, "go1.24.3", "windows", "amd64")
        assert resolution.status is ResolutionStatus.NO_ARTIFACT
        assert resolution.release.version == "go1.25.0"
        assert resolution.artifact is None
