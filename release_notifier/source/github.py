"""Release records and the GitHub Releases source.

``RawRelease`` mirrors one entry of the GitHub "list releases" response and
is also the record format of the cache file. ``GitHubReleaseSource`` is the
only component that talks to the network.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal, Protocol

from release_notifier.core.result import Err, Ok, Result
from release_notifier.core.structured import as_obj_list, as_str_dict, get_bool

if TYPE_CHECKING:
    from release_notifier.source.http import HttpClient, HttpError

__all__ = [
    "RawRelease",
    "FetchError",
    "ReleaseSource",
    "GitHubReleaseSource",
    "parse_release",
    "parse_releases",
    "GITHUB_API_URL",
]

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"

# Sort key for releases without a usable publish time: older than anything real.
_NEVER_PUBLISHED = datetime.min.replace(tzinfo=UTC)

FetchErrorKind = Literal["transport", "remote_status", "invalid_payload"]


@dataclass(frozen=True, slots=True)
class RawRelease:
    """A release record as returned by the releases API.

    Attributes:
        tag_name: Git tag (unique within one repository)
        name: Display name, if any
        html_url: Web page of the release
        published_at: ISO-8601 publish time as sent by the API (None for drafts)
        prerelease: Flagged as not production-stable
        draft: Not yet published
    """

    tag_name: str
    name: str | None
    html_url: str
    published_at: str | None
    prerelease: bool = False
    draft: bool = False

    @property
    def published(self) -> datetime:
        """Publish time as an aware datetime.

        Missing or unparsable timestamps map to the earliest possible time, so
        such releases sort last and never compare as newer.
        """
        if not self.published_at:
            return _NEVER_PUBLISHED
        try:
            parsed = datetime.fromisoformat(self.published_at)
        except ValueError:
            return _NEVER_PUBLISHED
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        return parsed

    def to_dict(self) -> dict[str, object]:
        """Serialize using the API's field names."""
        return {
            "tag_name": self.tag_name,
            "name": self.name,
            "html_url": self.html_url,
            "published_at": self.published_at,
            "prerelease": self.prerelease,
            "draft": self.draft,
        }


def parse_release(obj: object) -> RawRelease | None:
    """Build a RawRelease from one decoded JSON record.

    Returns None if the record is not an object or has no string tag_name.
    Optional fields of the wrong type are treated as absent.
    """
    data = as_str_dict(obj)
    if data is None:
        return None

    tag_name = data.get("tag_name")
    if not isinstance(tag_name, str):
        return None

    name = data.get("name")
    html_url = data.get("html_url")
    published_at = data.get("published_at")

    return RawRelease(
        tag_name=tag_name,
        name=name if isinstance(name, str) else None,
        html_url=html_url if isinstance(html_url, str) else "",
        published_at=published_at if isinstance(published_at, str) else None,
        prerelease=get_bool(data, "prerelease") or False,
        draft=get_bool(data, "draft") or False,
    )


def parse_releases(obj: object) -> list[RawRelease] | None:
    """Parse a JSON array of release records, all or nothing.

    Returns None if obj is not a list or any element is malformed.
    """
    items = as_obj_list(obj)
    if items is None:
        return None

    releases: list[RawRelease] = []
    for item in items:
        release = parse_release(item)
        if release is None:
            return None
        releases.append(release)
    return releases


@dataclass(frozen=True, slots=True)
class FetchError:
    """Failure to fetch the release list.

    Attributes:
        kind: "transport" (no response), "remote_status" (non-2xx) or
            "invalid_payload" (response is not a list of releases)
        message: Human-readable description, preserving the underlying cause
        status: HTTP status for remote_status failures, else 0
    """

    kind: FetchErrorKind
    message: str
    status: int = 0

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_http(cls, error: HttpError) -> FetchError:
        if error.is_transport:
            return cls(kind="transport", message=error.message)
        return cls(
            kind="remote_status",
            message=f"GitHub API error: {error.status} {error.message}",
            status=error.status,
        )


class ReleaseSource(Protocol):
    """Anything that can list all releases of a repository."""

    def fetch_all(
        self,
        repo: str,
        token: str | None = None,
    ) -> Result[list[RawRelease], FetchError]:
        """Fetch every release record of repo, in the order the source provides."""
        ...


class GitHubReleaseSource:
    """Release source backed by the GitHub REST API.

    Example:
        >>> source = GitHubReleaseSource(RealHttpClient())
        >>> result = source.fetch_all("cli/cli")
        >>> if isinstance(result, Ok):
        ...     print(len(result.value))
    """

    def __init__(self, http: HttpClient, api_url: str = GITHUB_API_URL) -> None:
        self._http = http
        self._api_url = api_url.rstrip("/")

    def releases_url(self, repo: str) -> str:
        return f"{self._api_url}/repos/{repo}/releases"

    def fetch_all(
        self,
        repo: str,
        token: str | None = None,
    ) -> Result[list[RawRelease], FetchError]:
        """Fetch all releases of repo (unsorted).

        Args:
            repo: Repository in "owner/name" format
            token: Optional bearer token

        Returns:
            Ok with the release records, or Err with FetchError
        """
        url = self.releases_url(repo)
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"

        result = self._http.get_json(url, headers)
        if isinstance(result, Err):
            return Err(FetchError.from_http(result.error))

        releases = parse_releases(result.value)
        if releases is None:
            return Err(
                FetchError(kind="invalid_payload", message=f"Unexpected response from {url}")
            )
        return Ok(releases)
