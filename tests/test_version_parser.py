"""Tests for version and repos-line parsing."""

import pytest

from versioning.models import RepoSpec, SemanticVersion
from versioning.parser import (
    ParseError,
    parse_repo_line,
    parse_tag,
    parse_version,
    strip_v_prefix,
)


class TestParseVersion:
    """Test strict semantic version parsing."""

    def test_parses_stable_release(self):
        v = parse_version("1.9.3")
        assert (v.major, v.minor, v.patch) == (1, 9, 3)
        assert v.prerelease == ()

    def test_parses_prerelease_identifiers(self):
        v = parse_version("2.0.0-rc.1")
        assert (v.major, v.minor, v.patch) == (2, 0, 0)
        assert v.prerelease == ("rc", "1")

    def test_strips_surrounding_whitespace(self):
        assert parse_version("  1.2.3\n") == parse_version("1.2.3")

    def test_drops_build_metadata(self):
        v = parse_version("1.2.3+build.5")
        assert v == parse_version("1.2.3")
        assert str(v) == "1.2.3"

    @pytest.mark.parametrize("text", ["", "   ", "1.2", "1", "abc", "v1.2.3", "1.2.3.4", "1.x.0",
                                      "01.2.3", "1.02.3", "1.2.03", "1.0.0-01"])
    def test_rejects_malformed_versions(self, text):
        with pytest.raises(ParseError):
            parse_version(text)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_version("not-a-version")


class TestParseTag:
    """Test tag parsing at the release-listing boundary."""

    def test_strip_v_prefix(self):
        assert strip_v_prefix("v1.8.0") == "1.8.0"
        assert strip_v_prefix("V1.8.0") == "1.8.0"
        assert strip_v_prefix("1.8.0") == "1.8.0"
        assert strip_v_prefix("vv1.8.0") == "v1.8.0"

    def test_tag_with_v_prefix(self):
        outcome = parse_tag("v1.10.2")
        assert outcome.ok
        assert outcome.value == parse_version("1.10.2")

    def test_invalid_tag_returns_error_outcome(self):
        outcome = parse_tag("release-2020-01")
        assert not outcome.ok
        assert outcome.value is None
        assert "release-2020-01" in outcome.error

    def test_non_string_tag(self):
        outcome = parse_tag(None)
        assert not outcome.ok


class TestParseRepoLine:
    """Test 'owner/name,minVersion' descriptor parsing."""

    def test_parses_descriptor(self):
        outcome = parse_repo_line("kubernetes/kubernetes,1.8.0")
        assert outcome.ok
        repo = outcome.value
        assert isinstance(repo, RepoSpec)
        assert repo.owner == "kubernetes"
        assert repo.name == "kubernetes"
        assert repo.path == "kubernetes/kubernetes"
        assert repo.min_version == parse_version("1.8.0")

    def test_accepts_whitespace_and_v_prefix(self):
        outcome = parse_repo_line("  prometheus / prometheus , v2.2.0  ")
        assert outcome.ok
        assert outcome.value.path == "prometheus/prometheus"
        assert outcome.value.min_version == parse_version("2.2.0")

    @pytest.mark.parametrize("line", [
        "kubernetes/kubernetes",
        "kubernetes,1.8.0",
        "/kubernetes,1.8.0",
        "kubernetes/,1.8.0",
        "a/b/c,1.0.0",
        "kubernetes/kubernetes,",
        "kubernetes/kubernetes,1.8.0,extra",
        "bad owner/repo,1.0.0",
    ])
    def test_rejects_malformed_lines(self, line):
        outcome = parse_repo_line(line)
        assert not outcome.ok
        assert outcome.error

    def test_bad_version_names_repository(self):
        outcome = parse_repo_line("golang/go,one.two")
        assert not outcome.ok
        assert "golang/go" in outcome.error
        assert "one.two" in outcome.error

    def test_repo_spec_is_frozen(self):
        repo = parse_repo_line("a/b,1.0.0").value
        with pytest.raises(AttributeError):
            repo.owner = "c"  # type: ignore[misc]

    def test_semantic_version_alias(self):
        assert isinstance(parse_version("1.0.0"), SemanticVersion)
