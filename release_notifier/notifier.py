"""ReleaseNotifier: the public entry point of the library.

Every public operation runs the same pipeline: consult the cache, fetch and
sort on a miss, then resolve or compare. Fetch failures are raised as
``NotifierError`` with a prefix naming the operation; cache failures are
never raised.

Example:
    >>> notifier = ReleaseNotifier(NotifierConfig(repo="cli/cli"))
    >>> result = notifier.check_version("v2.40.0")
    >>> if result.update_available:
    ...     print(f"{result.latest_version} is available")
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING

from release_notifier.cache import JsonFileCacheStore, ReleaseCache
from release_notifier.compare import check_version
from release_notifier.core.config import NotifierConfig
from release_notifier.core.errors import NotifierError
from release_notifier.core.result import Err
from release_notifier.models import Release, VersionCheckResult
from release_notifier.output.console import Style
from release_notifier.resolver import latest_prerelease, latest_stable, sort_releases
from release_notifier.source.github import GitHubReleaseSource, RawRelease, ReleaseSource
from release_notifier.source.http import RealHttpClient

if TYPE_CHECKING:
    from release_notifier.cache import CacheStore
    from release_notifier.output.console import ConsoleProtocol

__all__ = ["ReleaseNotifier"]

Clock = Callable[[], int]


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class ReleaseNotifier:
    """Checks a repository's releases, caching the list between calls.

    Args:
        config: Repository, freshness window, cache file and token
        source: Release source (defaults to the GitHub API over urllib)
        cache_store: Persistence backend; defaults to a JSON file at
            config.cache_file, or memory only when that is None
        clock: Returns the current time in milliseconds since the epoch
        console: Receives diagnostic lines (fetches, cache hits)
    """

    def __init__(
        self,
        config: NotifierConfig,
        *,
        source: ReleaseSource | None = None,
        cache_store: CacheStore | None = None,
        clock: Clock | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self.config = config
        self._source: ReleaseSource = source or GitHubReleaseSource(RealHttpClient())
        self._clock: Clock = clock or _wall_clock_ms
        self._console = console

        if cache_store is None and config.cache_file is not None:
            cache_store = JsonFileCacheStore(config.cache_file)
        self._cache = ReleaseCache(cache_store, console=console)

    @property
    def cache(self) -> ReleaseCache:
        return self._cache

    def get_latest_release(self, include_prerelease: bool = False) -> Release | None:
        """Most recent published release.

        Args:
            include_prerelease: Also consider prereleases

        Returns:
            The newest non-draft release, or None if there is none

        Raises:
            NotifierError: "Failed to fetch releases: ..."
        """
        releases = self._releases("fetch releases")
        latest = latest_stable(releases, include_prerelease)
        return Release.from_raw(latest) if latest else None

    def get_latest_prerelease(self) -> Release | None:
        """Most recent published prerelease, or None.

        Raises:
            NotifierError: "Failed to fetch prereleases: ..."
        """
        releases = self._releases("fetch prereleases")
        latest = latest_prerelease(releases)
        return Release.from_raw(latest) if latest else None

    def check_version(self, current_version: str, prerelease: bool = False) -> VersionCheckResult:
        """Check whether a release newer than current_version exists.

        Args:
            current_version: The running version's tag ("1.2.3" or "v1.2.3")
            prerelease: Compare against the newest prerelease instead of stable

        Raises:
            NotifierError: "Failed to check version: ..."
        """
        releases = self._releases("check version")
        return check_version(current_version, releases, prerelease)

    def clear_cache(self) -> None:
        """Discard cached releases so the next call fetches again."""
        self._cache.clear()

    def _releases(self, operation: str) -> Sequence[RawRelease]:
        """Release list newest first, from the cache when fresh."""
        now = self._clock()
        entry = self._cache.get()
        if entry is not None and self._cache.is_fresh(now, self.config.check_interval):
            self._note(f"using cached releases for {self.config.repo}")
            return entry.releases

        self._note(f"fetching releases for {self.config.repo} (cache: {self._cache.describe()})")
        result = self._source.fetch_all(self.config.repo, self.config.token)
        if isinstance(result, Err):
            raise NotifierError(operation, str(result.error))

        releases = sort_releases(result.value)
        self._cache.put(releases, now)
        return releases

    def _note(self, message: str) -> None:
        if self._console is not None:
            self._console.print(message, Style.DIM)
