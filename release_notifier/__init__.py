"""Check a repository's GitHub releases for newer versions.

Public surface:
- ReleaseNotifier: get_latest_release, get_latest_prerelease, check_version, clear_cache
- NotifierConfig: repository, freshness window, cache file, token
- Release, VersionCheckResult: result types
- NotifierError: raised when the release list cannot be fetched
"""

from release_notifier.compare import normalize
from release_notifier.core.config import DEFAULT_CHECK_INTERVAL_MS, NotifierConfig
from release_notifier.core.errors import NotifierError
from release_notifier.models import Release, VersionCheckResult
from release_notifier.notifier import ReleaseNotifier

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CHECK_INTERVAL_MS",
    "NotifierConfig",
    "NotifierError",
    "Release",
    "ReleaseNotifier",
    "VersionCheckResult",
    "normalize",
    "__version__",
]
