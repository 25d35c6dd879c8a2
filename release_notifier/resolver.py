"""Release selection: ordering and the "latest" views.

All functions are pure. ``latest_stable`` and ``latest_prerelease`` assume
their input is already sorted newest first (see ``sort_releases``).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from release_notifier.source.github import RawRelease

__all__ = ["sort_releases", "latest_stable", "latest_prerelease"]


def sort_releases(releases: Iterable[RawRelease]) -> list[RawRelease]:
    """Return releases ordered by publish time, newest first.

    The sort is stable: releases published at the same instant keep their
    relative order from the source.
    """
    return sorted(releases, key=lambda r: r.published, reverse=True)


def latest_stable(
    releases: Sequence[RawRelease],
    include_prerelease: bool = False,
) -> RawRelease | None:
    """Most recent non-draft release.

    Prereleases are skipped unless include_prerelease is set.
    """
    for release in releases:
        if release.draft:
            continue
        if release.prerelease and not include_prerelease:
            continue
        return release
    return None


def latest_prerelease(releases: Sequence[RawRelease]) -> RawRelease | None:
    """Most recent non-draft prerelease."""
    for release in releases:
        if release.prerelease and not release.draft:
            return release
    return None
