"""Public result types returned by ReleaseNotifier."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from release_notifier.source.github import RawRelease

__all__ = ["Release", "VersionCheckResult"]


@dataclass(frozen=True, slots=True)
class Release:
    """A published release.

    Attributes:
        tag_name: Git tag of the release (e.g. "v1.2.3")
        name: Display name, if any
        html_url: Web page of the release
        published_at: ISO-8601 publish time
        prerelease: Flagged as not production-stable
        draft: Always False for releases handed to callers
    """

    tag_name: str
    name: str | None
    html_url: str
    published_at: str | None
    prerelease: bool
    draft: bool

    @classmethod
    def from_raw(cls, raw: RawRelease) -> Release:
        return cls(
            tag_name=raw.tag_name,
            name=raw.name,
            html_url=raw.html_url,
            published_at=raw.published_at,
            prerelease=raw.prerelease,
            draft=raw.draft,
        )


@dataclass(frozen=True, slots=True)
class VersionCheckResult:
    """Outcome of comparing a version against the release feed.

    Attributes:
        update_available: A newer qualifying release exists
        current_version: The version passed in, verbatim
        latest_version: Tag of the reference release, if one qualifies
        latest_release: The reference release, if one qualifies
    """

    update_available: bool
    current_version: str
    latest_version: str | None = None
    latest_release: Release | None = None
