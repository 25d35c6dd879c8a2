from __future__ import annotations

from pathlib import Path

import typer

from release_notifier.cli.commands._helpers import exit_on_notifier_error
from release_notifier.cli.context import CLIContext, build_context
from release_notifier.models import Release
from release_notifier.output.console import Style


def latest(
    repo: str | None = typer.Option(None, "--repo", "-r", help="Repository (owner/name)"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Also consider prereleases"),
    cache_file: Path | None = typer.Option(None, "--cache-file", help="JSON cache file"),
    interval: int | None = typer.Option(None, "--interval", help="Cache freshness window (ms)"),
    token: str | None = typer.Option(None, "--token", envvar="GITHUB_TOKEN", help="API token"),
    config: Path | None = typer.Option(None, "--config", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show cache diagnostics"),
) -> None:
    """Show the latest release."""
    ctx = build_context(
        repo=repo,
        cache_file=cache_file,
        interval=interval,
        token=token,
        config_path=config,
        verbose=verbose,
    )

    with exit_on_notifier_error(ctx):
        release = ctx.notifier.get_latest_release(include_prerelease=prerelease)

    _print_release(ctx, release)


def prerelease(
    repo: str | None = typer.Option(None, "--repo", "-r", help="Repository (owner/name)"),
    cache_file: Path | None = typer.Option(None, "--cache-file", help="JSON cache file"),
    interval: int | None = typer.Option(None, "--interval", help="Cache freshness window (ms)"),
    token: str | None = typer.Option(None, "--token", envvar="GITHUB_TOKEN", help="API token"),
    config: Path | None = typer.Option(None, "--config", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show cache diagnostics"),
) -> None:
    """Show the latest prerelease."""
    ctx = build_context(
        repo=repo,
        cache_file=cache_file,
        interval=interval,
        token=token,
        config_path=config,
        verbose=verbose,
    )

    with exit_on_notifier_error(ctx):
        release = ctx.notifier.get_latest_prerelease()

    _print_release(ctx, release)


def check(
    version: str = typer.Argument(..., help="Version currently in use (e.g. v1.2.3)"),
    repo: str | None = typer.Option(None, "--repo", "-r", help="Repository (owner/name)"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Compare against prereleases"),
    cache_file: Path | None = typer.Option(None, "--cache-file", help="JSON cache file"),
    interval: int | None = typer.Option(None, "--interval", help="Cache freshness window (ms)"),
    token: str | None = typer.Option(None, "--token", envvar="GITHUB_TOKEN", help="API token"),
    config: Path | None = typer.Option(None, "--config", help="TOML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show cache diagnostics"),
) -> None:
    """Check whether a newer release than VERSION exists."""
    ctx = build_context(
        repo=repo,
        cache_file=cache_file,
        interval=interval,
        token=token,
        config_path=config,
        verbose=verbose,
    )

    with exit_on_notifier_error(ctx):
        result = ctx.notifier.check_version(version, prerelease=prerelease)

    console = ctx.console
    if result.latest_release is None:
        console.info("no qualifying release found")
    elif result.update_available:
        console.warning(f"update available: {result.current_version} -> {result.latest_version}")
        console.print(result.latest_release.html_url, Style.DIM)
    else:
        console.success(f"{result.current_version} is up to date")


def _print_release(ctx: CLIContext, release: Release | None) -> None:
    console = ctx.console
    if release is None:
        console.info("no releases found")
        return

    title = release.tag_name
    if release.name and release.name != release.tag_name:
        title += f" ({release.name})"
    if release.prerelease:
        title += " [prerelease]"
    console.print(title, Style.BOLD)
    if release.published_at:
        console.print(f"published: {release.published_at}", Style.DIM)
    if release.html_url:
        console.print(release.html_url, Style.DIM)
