from __future__ import annotations

from pathlib import Path

import typer

from release_notifier.cli.context import build_context


def clear_cache(
    repo: str | None = typer.Option(None, "--repo", "-r", help="Repository (owner/name)"),
    cache_file: Path | None = typer.Option(None, "--cache-file", help="JSON cache file"),
    config: Path | None = typer.Option(None, "--config", help="TOML config file"),
) -> None:
    """Discard cached releases so the next command fetches again."""
    ctx = build_context(
        repo=repo,
        cache_file=cache_file,
        interval=None,
        token=None,
        config_path=config,
    )

    ctx.notifier.clear_cache()

    cache_path = ctx.notifier.config.cache_file
    if cache_path is None:
        ctx.console.info("no cache file configured; nothing persisted to clear")
    else:
        ctx.console.success(f"cleared {cache_path}")
