"""Typed configuration for the notifier.

``NotifierConfig`` is what the library is constructed with. ``FileConfig`` is
the optional ``[notifier]`` table of a TOML file read by the CLI; its values
are defaults that command-line flags override.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_int, get_str, get_table

__all__ = [
    "DEFAULT_CHECK_INTERVAL_MS",
    "ConfigError",
    "NotifierConfig",
    "FileConfig",
    "load_config",
]

# One hour, in milliseconds
DEFAULT_CHECK_INTERVAL_MS = 60 * 60 * 1000

_REPO_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+$")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when configuration is invalid or cannot be loaded."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class NotifierConfig:
    """Settings for a ReleaseNotifier.

    Attributes:
        repo: Repository in "owner/name" format
        check_interval: Freshness window in milliseconds; 0 or less disables caching
        cache_file: JSON file persisting the last fetch, or None for memory only
        token: Bearer token for the releases API, or None for anonymous access
    """

    repo: str
    check_interval: int = DEFAULT_CHECK_INTERVAL_MS
    cache_file: Path | None = None
    token: str | None = None

    @classmethod
    def create(
        cls,
        repo: str,
        *,
        check_interval: int | None = None,
        cache_file: Path | str | None = None,
        token: str | None = None,
    ) -> Result[NotifierConfig, ConfigError]:
        """Validate inputs and build a config.

        Returns:
            Ok(NotifierConfig), or Err(ConfigError) if repo is not "owner/name"
        """
        repo = repo.strip()
        if not _REPO_PATTERN.match(repo):
            return Err(ConfigError(f"Invalid repository '{repo}' (expected owner/name)"))

        return Ok(
            cls(
                repo=repo,
                check_interval=DEFAULT_CHECK_INTERVAL_MS if check_interval is None else check_interval,
                cache_file=Path(cache_file).expanduser() if cache_file else None,
                token=token or None,
            )
        )


@dataclass(frozen=True, slots=True)
class FileConfig:
    """Values from the ``[notifier]`` table of a config file. All optional."""

    repo: str | None = None
    check_interval: int | None = None
    cache_file: Path | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, base_dir: Path | None = None) -> FileConfig:
        """Create FileConfig from a mapping (parsed TOML).

        A relative ``cache_file`` is resolved against base_dir when given.
        """
        table: StrDict = get_table(data, "notifier") or {}

        cache_file: Path | None = None
        raw_cache = get_str(table, "cache_file")
        if raw_cache:
            cache_file = Path(raw_cache).expanduser()
            if base_dir is not None and not cache_file.is_absolute():
                cache_file = base_dir / cache_file

        return cls(
            repo=get_str(table, "repo"),
            check_interval=get_int(table, "check_interval"),
            cache_file=cache_file,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Config root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[FileConfig, ConfigError]:
    """Load the ``[notifier]`` table from a TOML file.

    Args:
        path: Path to the config file

    Returns:
        Ok(FileConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result
    return Ok(FileConfig.from_dict(result.value, base_dir=path.parent))
