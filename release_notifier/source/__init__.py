"""Release sources: the HTTP layer and the GitHub Releases adapter."""

from release_notifier.source.github import (
    GITHUB_API_URL,
    FetchError,
    GitHubReleaseSource,
    RawRelease,
    ReleaseSource,
    parse_release,
    parse_releases,
)
from release_notifier.source.http import (
    HttpClient,
    HttpError,
    MockHttpClient,
    RealHttpClient,
)

__all__ = [
    # Records
    "RawRelease",
    "parse_release",
    "parse_releases",
    # Sources
    "GITHUB_API_URL",
    "FetchError",
    "GitHubReleaseSource",
    "ReleaseSource",
    # HTTP
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "RealHttpClient",
]
