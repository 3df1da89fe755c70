"""
Release reference data.

A release (pack or set) may belong to a release group (cycle or block).
Printings are labelled with the release name and, when it differs, the
name of the group in parentheses.
"""

from dataclasses import dataclass, field

from cardsync.models.failure import MissingReferenceError


@dataclass(frozen=True, slots=True)
class ReleaseGroup:
    code: str
    name: str


@dataclass(frozen=True, slots=True)
class Release:
    code: str
    name: str
    group_code: str | None = None


def compose_release_label(release_name: str, group_name: str | None) -> str:
    """
    Build the human-readable "printed in" label.

    The group name is appended in parentheses only when it differs
    from the release name (e.g. "Core Set" stays "Core Set").
    """
    if group_name and group_name != release_name:
        return f"{release_name} ({group_name})"
    return release_name


@dataclass(frozen=True)
class ReleaseCatalog:
    """Releases and release groups, each keyed by code."""

    releases: dict[str, Release] = field(default_factory=dict)
    groups: dict[str, ReleaseGroup] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.releases)

    def get_release(self, code: str, referenced_by: str | None = None) -> Release:
        release = self.releases.get(code)
        if release is None:
            raise MissingReferenceError("release", code, referenced_by)
        return release

    def get_group(self, release: Release) -> ReleaseGroup | None:
        """
        Get the group a release belongs to.

        Returns None for releases without a group. Raises MissingReferenceError
        if the release names a group code that is not in the catalog.
        """
        if release.group_code is None:
            return None
        group = self.groups.get(release.group_code)
        if group is None:
            raise MissingReferenceError("release group", release.group_code, release.code)
        return group

    def printed_in(self, code: str, referenced_by: str | None = None) -> str:
        """Resolve a release code to its printed-in label."""
        release = self.get_release(code, referenced_by)
        group = self.get_group(release)
        return compose_release_label(release.name, group.name if group else None)
