from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from release_notifier.core.config import FileConfig, NotifierConfig, load_config
from release_notifier.core.errors import ErrorCode
from release_notifier.core.result import Err
from release_notifier.notifier import ReleaseNotifier
from release_notifier.output.console import ConsoleProtocol, RichConsole

DEFAULT_CONFIG_NAME = "release-notifier.toml"


@dataclass(frozen=True, slots=True)
class CLIContext:
    notifier: ReleaseNotifier
    console: ConsoleProtocol


def _file_config(config_path: Path | None, console: ConsoleProtocol) -> FileConfig:
    path = config_path
    if path is None:
        default = Path.cwd() / DEFAULT_CONFIG_NAME
        if not default.is_file():
            return FileConfig()
        path = default

    result = load_config(path)
    if isinstance(result, Err):
        console.error(result.error.message)
        raise typer.Exit(code=int(ErrorCode.IO_ERROR))
    return result.value


def build_context(
    *,
    repo: str | None,
    cache_file: Path | None,
    interval: int | None,
    token: str | None,
    config_path: Path | None,
    verbose: bool = False,
) -> CLIContext:
    """Merge flags over the config file and build a notifier.

    Flags win over file values. Exits with USER_ERROR when no valid
    repository is given.
    """
    console = RichConsole()
    file_config = _file_config(config_path, console)

    repo = repo or file_config.repo
    if not repo:
        console.error("no repository given (use --repo or set repo in the config file)")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = NotifierConfig.create(
        repo,
        check_interval=interval if interval is not None else file_config.check_interval,
        cache_file=cache_file or file_config.cache_file,
        token=token,
    )
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    notifier = ReleaseNotifier(config_result.value, console=console if verbose else None)
    return CLIContext(notifier=notifier, console=console)
