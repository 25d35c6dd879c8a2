"""Two-tier release cache: process memory plus an optional JSON file.

The in-memory state is an explicit tagged union:

- ``Absent``: nothing fetched yet (or the cache file was missing/unreadable)
- ``Populated``: a release list and the time it was fetched. ``clear()``
  produces ``Populated((), 0)``, which is distinct from ``Absent`` even though
  neither is ever fresh.

Persistence goes through a ``CacheStore``. Store failures are returned as
``Err`` and discarded in exactly one place, ``ReleaseCache._discard``, so a
broken cache file can never break a release lookup.

Cache file format::

    {"releases": [{"tag_name": ..., "name": ..., "html_url": ...,
                   "published_at": ..., "prerelease": ..., "draft": ...}],
     "lastFetchTime": 1704067200000}
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, TypeAlias, TypeVar

from release_notifier.core.result import Err, Ok, Result
from release_notifier.core.structured import as_str_dict, get_int
from release_notifier.output.console import Style
from release_notifier.platform.files import atomic_write_text, read_text_if_exists
from release_notifier.source.github import RawRelease, parse_releases

if TYPE_CHECKING:
    from release_notifier.output.console import ConsoleProtocol

T = TypeVar("T")

__all__ = [
    "Absent",
    "Populated",
    "CacheState",
    "CacheStoreError",
    "CacheStore",
    "JsonFileCacheStore",
    "ReleaseCache",
]


@dataclass(frozen=True, slots=True)
class Absent:
    """No release data has been fetched or loaded."""


@dataclass(frozen=True, slots=True)
class Populated:
    """Releases from one fetch.

    Attributes:
        releases: Release records, newest first
        fetched_at: Fetch time in milliseconds since the epoch (0 when cleared)
    """

    releases: tuple[RawRelease, ...]
    fetched_at: int

    @classmethod
    def cleared(cls) -> Populated:
        return cls(releases=(), fetched_at=0)

    @property
    def is_cleared(self) -> bool:
        return self.fetched_at == 0 and not self.releases


CacheState: TypeAlias = Absent | Populated


@dataclass(frozen=True, slots=True)
class CacheStoreError:
    """Cache persistence failure (I/O error or malformed content)."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message} ({self.path})"


class CacheStore(Protocol):
    """Persistence backend for a ReleaseCache."""

    def load(self) -> Result[Populated | None, CacheStoreError]:
        """Load the persisted entry; Ok(None) when nothing was persisted."""
        ...

    def save(self, entry: Populated) -> Result[None, CacheStoreError]:
        """Persist entry, replacing whatever was stored before."""
        ...


class JsonFileCacheStore:
    """CacheStore writing one JSON file, replaced atomically on every save."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Result[Populated | None, CacheStoreError]:
        try:
            text = read_text_if_exists(self.path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(CacheStoreError(self.path, f"Cannot read cache file: {e}"))
        if text is None:
            return Ok(None)

        try:
            data_obj: object = json.loads(text)
        except json.JSONDecodeError as e:
            return Err(CacheStoreError(self.path, f"Invalid JSON in cache file: {e}"))

        data = as_str_dict(data_obj)
        if data is None:
            return Err(CacheStoreError(self.path, "Cache root must be a JSON object"))

        fetched_at = get_int(data, "lastFetchTime")
        releases = parse_releases(data.get("releases"))
        if fetched_at is None or releases is None:
            return Err(CacheStoreError(self.path, "Incomplete or malformed cache entry"))

        return Ok(Populated(releases=tuple(releases), fetched_at=fetched_at))

    def save(self, entry: Populated) -> Result[None, CacheStoreError]:
        payload = {
            "releases": [release.to_dict() for release in entry.releases],
            "lastFetchTime": entry.fetched_at,
        }
        try:
            atomic_write_text(self.path, json.dumps(payload))
        except OSError as e:
            return Err(CacheStoreError(self.path, f"Cannot write cache file: {e}"))
        return Ok(None)


class ReleaseCache:
    """In-memory release cache, optionally mirrored to a CacheStore.

    Construction never raises: an unreadable or malformed store leaves the
    cache Absent.
    """

    def __init__(
        self,
        store: CacheStore | None = None,
        console: ConsoleProtocol | None = None,
    ) -> None:
        self._store = store
        self._console = console
        self._state: CacheState = Absent()

        if store is not None:
            loaded = self._discard(store.load(), action="load")
            if loaded is not None:
                self._state = loaded
                self._note(f"cache: loaded {len(loaded.releases)} releases")

    @property
    def state(self) -> CacheState:
        return self._state

    def get(self) -> Populated | None:
        """Current entry, or None if the cache is Absent."""
        match self._state:
            case Populated() as entry:
                return entry
            case Absent():
                return None

    def is_fresh(self, now: int, window: int) -> bool:
        """True iff an entry exists and was fetched less than window ms ago.

        A window of zero or less is never fresh.
        """
        entry = self.get()
        if entry is None or window <= 0:
            return False
        return now - entry.fetched_at < window

    def put(self, releases: Iterable[RawRelease], now: int) -> None:
        """Replace the entry wholesale and persist it."""
        self._state = Populated(releases=tuple(releases), fetched_at=now)
        self._persist()

    def clear(self) -> None:
        """Replace the entry with the explicit cleared state and persist it."""
        previous = self._state
        self._state = Populated.cleared()
        if isinstance(previous, Absent):
            self._note("cache: cleared (was never populated)")
        else:
            self._note("cache: cleared")
        self._persist()

    def describe(self) -> str:
        """One-line description of the cache state for diagnostics."""
        match self._state:
            case Absent():
                return "never fetched"
            case Populated() as entry if entry.is_cleared:
                return "cleared"
            case Populated(releases=releases, fetched_at=fetched_at):
                return f"{len(releases)} releases fetched at {fetched_at}"

    def _persist(self) -> None:
        if self._store is None:
            return
        entry = self.get()
        if entry is not None:
            self._discard(self._store.save(entry), action="save")

    def _discard(self, result: Result[T, CacheStoreError], *, action: str) -> T | None:
        """Drop a store failure. Cache errors never reach callers."""
        if isinstance(result, Err):
            self._note(f"cache: {action} failed, ignoring: {result.error}")
            return None
        return result.value

    def _note(self, message: str) -> None:
        if self._console is not None:
            self._console.print(message, Style.DIM)
