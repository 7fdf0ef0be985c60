"""Metadata resolution: fill in display and VCS for each path entry.

A path entry only has to name its repository. When the repository lives
on a known host the ``go-source`` display template and the VCS kind are
derived from the URL; otherwise the VCS must be given explicitly.
"""

from dataclasses import dataclass, replace

from vanity.config import PathEntry, VanityConfig
from vanity.errors import MetadataResolutionError

SUPPORTED_VCS: frozenset[str] = frozenset({"bzr", "git", "hg", "svn"})


@dataclass(frozen=True, slots=True)
class RepositoryHost:
    """A hosting service recognised by repository URL prefix.

    ``display`` is a ``str.format`` pattern receiving ``repo``.
    ``vcs_prefix`` is matched separately because the display rule for
    Bitbucket also accepts URLs without the trailing slash.
    """

    name: str
    display_prefix: str
    vcs_prefix: str
    vcs: str
    display: str

    def display_for(self, repo: str) -> str:
        return self.display.format(repo=repo)


KNOWN_HOSTS: tuple[RepositoryHost, ...] = (
    RepositoryHost(
        name="github",
        display_prefix="https://github.com/",
        vcs_prefix="https://github.com/",
        vcs="git",
        display="{repo} {repo}/tree/master{{/dir}} {repo}/blob/master{{/dir}}/{{file}}#L{{line}}",
    ),
    RepositoryHost(
        name="bitbucket",
        display_prefix="https://bitbucket.org",
        vcs_prefix="https://bitbucket.org/",
        vcs="git",
        display=(
            "{repo} {repo}/src/default{{/dir}} {repo}/src/default{{/dir}}/{{file}}#{{file}}-{{line}}"
        ),
    ),
)


def infer_display(repo: str) -> str:
    """Return the display template for a known host, or ``""``."""
    for host in KNOWN_HOSTS:
        if repo.startswith(host.display_prefix):
            return host.display_for(repo)
    return ""


def infer_vcs(repo: str) -> str | None:
    """Return the VCS implied by a known host, or None."""
    for host in KNOWN_HOSTS:
        if repo.startswith(host.vcs_prefix):
            return host.vcs
    return None


def resolve_entry(entry: PathEntry) -> PathEntry:
    """Return *entry* with ``display`` and ``vcs`` populated.

    Raises:
        MetadataResolutionError: If an explicit VCS is unsupported, or
            no VCS is given and the repository host is not recognised.
    """
    display = entry.display or infer_display(entry.repo)

    if entry.vcs:
        if entry.vcs not in SUPPORTED_VCS:
            msg = f"configuration for {entry.repo}: unknown VCS {entry.vcs}"
            raise MetadataResolutionError(msg)
        vcs = entry.vcs
    else:
        inferred = infer_vcs(entry.repo)
        if inferred is None:
            msg = f"cannot infer VCS from {entry.repo}"
            raise MetadataResolutionError(msg)
        vcs = inferred

    return replace(entry, display=display, vcs=vcs)


def resolve_config(config: VanityConfig) -> VanityConfig:
    """Resolve every entry of *config*. Fails on the first bad entry."""
    return replace(config, paths=tuple(resolve_entry(entry) for entry in config.paths))
