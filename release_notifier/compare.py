"""Version matching and staleness comparison.

A version is "out of date" when the release it names was published before
the reference release (the newest stable release, or the newest prerelease
when checking a prerelease channel). No semantic-version ordering is
involved: tags are only matched, never compared.
"""

from __future__ import annotations

from collections.abc import Sequence

from release_notifier.models import Release, VersionCheckResult
from release_notifier.resolver import latest_prerelease, latest_stable
from release_notifier.source.github import RawRelease

__all__ = ["normalize", "find_release", "reference_release", "check_version"]


def normalize(tag: str) -> str:
    """Normalize a tag for matching: trim whitespace, drop one leading v/V.

    >>> normalize(" V2.0.0 ")
    '2.0.0'
    """
    tag = tag.strip()
    if tag[:1] in ("v", "V"):
        return tag[1:]
    return tag


def find_release(current_version: str, releases: Sequence[RawRelease]) -> RawRelease | None:
    """Find the release a version string refers to.

    A release matches on its verbatim tag or its normalized tag. The first
    match in list order wins, so with a newest-first list the newest release
    a version could name is the one compared.
    """
    wanted = normalize(current_version)
    for release in releases:
        if release.tag_name == current_version or normalize(release.tag_name) == wanted:
            return release
    return None


def reference_release(releases: Sequence[RawRelease], prerelease: bool = False) -> RawRelease | None:
    """Newest non-draft release of the requested stability class."""
    if prerelease:
        return latest_prerelease(releases)
    return latest_stable(releases, include_prerelease=False)


def check_version(
    current_version: str,
    releases: Sequence[RawRelease],
    prerelease: bool = False,
) -> VersionCheckResult:
    """Decide whether a newer release than current_version exists.

    Args:
        current_version: Tag the caller runs (e.g. "v1.2.3" or "1.2.3")
        releases: Release list sorted newest first
        prerelease: Compare against the newest prerelease instead of stable

    Returns:
        VersionCheckResult. Versions unknown to the feed are reported as
        outdated; equal publish times never count as an update.
    """
    no_update = VersionCheckResult(update_available=False, current_version=current_version)
    if not releases:
        return no_update

    matched = find_release(current_version, releases)

    reference = reference_release(releases, prerelease)
    if reference is None:
        return no_update

    latest = Release.from_raw(reference)

    if matched is None:
        return VersionCheckResult(
            update_available=True,
            current_version=current_version,
            latest_version=reference.tag_name,
            latest_release=latest,
        )

    return VersionCheckResult(
        update_available=matched.published < reference.published,
        current_version=current_version,
        latest_version=reference.tag_name,
        latest_release=latest,
    )
