"""Tests for display and VCS inference."""

import pytest

from vanity.config import PathEntry, VanityConfig
from vanity.errors import MetadataResolutionError
from vanity.resolve import infer_display, infer_vcs, resolve_config, resolve_entry

GITHUB = "https://github.com/org/repo"
BITBUCKET = "https://bitbucket.org/org/repo"


class TestInference:
    def test_github_display(self) -> None:
        display = infer_display(GITHUB)
        assert display == (
            f"{GITHUB} {GITHUB}/tree/master{{/dir}} {GITHUB}/blob/master{{/dir}}/{{file}}#L{{line}}"
        )

    def test_bitbucket_display(self) -> None:
        display = infer_display(BITBUCKET)
        assert display == (
            f"{BITBUCKET} {BITBUCKET}/src/default{{/dir}} "
            f"{BITBUCKET}/src/default{{/dir}}/{{file}}#{{file}}-{{line}}"
        )

    def test_unknown_display(self) -> None:
        assert infer_display("https://git.example.com/repo") == ""

    @pytest.mark.parametrize("repo", [GITHUB, BITBUCKET])
    def test_known_hosts_are_git(self, repo: str) -> None:
        assert infer_vcs(repo) == "git"

    def test_unknown_vcs(self) -> None:
        assert infer_vcs("https://git.example.com/repo") is None

    def test_http_github_not_recognised(self) -> None:
        assert infer_vcs("http://github.com/org/repo") is None


class TestResolveEntry:
    def test_github_fills_everything(self) -> None:
        entry = resolve_entry(PathEntry("/repo", GITHUB))
        assert entry.vcs == "git"
        assert f"{GITHUB}/tree/master{{/dir}}" in entry.display
        assert f"{GITHUB}/blob/master{{/dir}}/{{file}}#L{{line}}" in entry.display

    def test_explicit_values_kept(self) -> None:
        entry = resolve_entry(PathEntry("/repo", GITHUB, display="custom", vcs="hg"))
        assert entry.display == "custom"
        assert entry.vcs == "hg"

    @pytest.mark.parametrize("vcs", ["bzr", "git", "hg", "svn"])
    def test_supported_vcs(self, vcs: str) -> None:
        entry = resolve_entry(PathEntry("/x", "https://code.example.com/x", vcs=vcs))
        assert entry.vcs == vcs

    def test_unknown_host_explicit_vcs_has_empty_display(self) -> None:
        entry = resolve_entry(PathEntry("/x", "https://code.example.com/x", vcs="svn"))
        assert entry.display == ""

    def test_unsupported_vcs_names_repo(self) -> None:
        with pytest.raises(MetadataResolutionError) as exc_info:
            resolve_entry(PathEntry("/x", "https://code.example.com/x", vcs="cvs"))
        message = str(exc_info.value)
        assert "https://code.example.com/x" in message
        assert "unknown VCS cvs" in message

    def test_unsupported_vcs_on_known_host(self) -> None:
        with pytest.raises(MetadataResolutionError, match="unknown VCS"):
            resolve_entry(PathEntry("/x", GITHUB, vcs="cvs"))

    def test_cannot_infer(self) -> None:
        with pytest.raises(MetadataResolutionError, match="cannot infer VCS"):
            resolve_entry(PathEntry("/x", "https://code.example.com/x"))

    def test_bitbucket_without_slash_gets_display_but_no_vcs(self) -> None:
        with pytest.raises(MetadataResolutionError, match="cannot infer VCS"):
            resolve_entry(PathEntry("/x", "https://bitbucket.orgx"))


class TestResolveConfig:
    def test_resolves_all(self) -> None:
        config = VanityConfig(
            host="h",
            max_age=10,
            paths=(PathEntry("/a", GITHUB), PathEntry("/b", BITBUCKET)),
        )
        resolved = resolve_config(config)
        assert resolved.max_age == 10
        assert all(entry.vcs == "git" for entry in resolved.paths)
        assert all(entry.display for entry in resolved.paths)

    def test_first_failure_raises(self) -> None:
        config = VanityConfig(host="h", paths=(PathEntry("/a", GITHUB), PathEntry("/b", "svn://x")))
        with pytest.raises(MetadataResolutionError, match="svn://x"):
            resolve_config(config)
