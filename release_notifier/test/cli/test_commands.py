from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
import typer

from release_notifier.cli.context import CLIContext, build_context
from release_notifier.core.config import NotifierConfig
from release_notifier.core.errors import ErrorCode
from release_notifier.notifier import ReleaseNotifier
from release_notifier.output.console import MockConsole, RichConsole, Style
from release_notifier.source.github import GitHubReleaseSource
from release_notifier.source.http import HttpError, MockHttpClient

REPO = "owner/name"
URL = f"https://api.github.com/repos/{REPO}/releases"

RELEASES = [
    {
        "tag_name": "v1.0.0",
        "name": "v1.0.0",
        "html_url": "https://github.com/owner/name/releases/tag/v1.0.0",
        "published_at": "2024-01-01T00:00:00Z",
        "prerelease": False,
        "draft": False,
    },
    {
        "tag_name": "v1.1.0-rc.1",
        "name": "Release candidate",
        "html_url": "https://github.com/owner/name/releases/tag/v1.1.0-rc.1",
        "published_at": "2024-01-02T00:00:00Z",
        "prerelease": True,
        "draft": False,
    },
]

_FLAGS: dict[str, object] = {
    "repo": None,
    "cache_file": None,
    "interval": None,
    "token": None,
    "config": None,
    "verbose": False,
}


def _ctx(response: object, cache_file: Path | None = None) -> CLIContext:
    client = MockHttpClient()
    client.set_json(URL, response)
    config = NotifierConfig(repo=REPO, check_interval=3_600_000, cache_file=cache_file, token=None)
    notifier = ReleaseNotifier(config, source=GitHubReleaseSource(client), clock=lambda: 1_000)
    return CLIContext(notifier=notifier, console=MockConsole())


def _patch(monkeypatch: pytest.MonkeyPatch, module: object, ctx: CLIContext) -> MockConsole:
    monkeypatch.setattr(module, "build_context", lambda **_: ctx)
    assert isinstance(ctx.console, MockConsole)
    return ctx.console


# =============================================================================
# latest / prerelease
# =============================================================================


def test_latest_prints_release(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    console = _patch(monkeypatch, releases_cmd, _ctx(RELEASES))

    releases_cmd.latest(prerelease=False, **_FLAGS)  # type: ignore[arg-type]

    assert console.outputs[0].message == "v1.0.0"
    assert console.outputs[0].style == Style.BOLD
    assert console.find("published: 2024-01-01T00:00:00Z")
    assert not console.has_error()


def test_latest_with_prerelease(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    console = _patch(monkeypatch, releases_cmd, _ctx(RELEASES))

    releases_cmd.latest(prerelease=True, **_FLAGS)  # type: ignore[arg-type]

    assert console.outputs[0].message == "v1.1.0-rc.1 (Release candidate) [prerelease]"


def test_latest_empty_feed(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    console = _patch(monkeypatch, releases_cmd, _ctx([]))

    releases_cmd.latest(prerelease=False, **_FLAGS)  # type: ignore[arg-type]

    assert console.messages == ["info: no releases found"]


def test_latest_fetch_failure_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    error = HttpError(url=URL, status=404, message="Not Found")
    console = _patch(monkeypatch, releases_cmd, _ctx(error))

    with pytest.raises(typer.Exit) as exc:
        releases_cmd.latest(prerelease=False, **_FLAGS)  # type: ignore[arg-type]

    assert exc.value.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert console.messages == ["error: Failed to fetch releases: GitHub API error: 404 Not Found"]


def test_latest_renders_brackets_literally(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    record = {**RELEASES[1], "name": "Fix [/b] parsing"}
    ctx = _ctx([record])
    out = StringIO()
    rich_ctx = CLIContext(notifier=ctx.notifier, console=RichConsole(file=out, stderr_file=StringIO()))
    monkeypatch.setattr(releases_cmd, "build_context", lambda **_: rich_ctx)

    releases_cmd.latest(prerelease=True, **_FLAGS)  # type: ignore[arg-type]

    assert out.getvalue().splitlines()[0] == "v1.1.0-rc.1 (Fix [/b] parsing) [prerelease]"


def test_prerelease_prints_prerelease(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    console = _patch(monkeypatch, releases_cmd, _ctx(RELEASES))

    releases_cmd.prerelease(**_FLAGS)  # type: ignore[arg-type]

    assert console.outputs[0].message.startswith("v1.1.0-rc.1")


def test_prerelease_failure_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    error = HttpError(url=URL, status=0, message="Network error")
    console = _patch(monkeypatch, releases_cmd, _ctx(error))

    with pytest.raises(typer.Exit) as exc:
        releases_cmd.prerelease(**_FLAGS)  # type: ignore[arg-type]

    assert exc.value.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert console.find("Failed to fetch prereleases: Network error")


# =============================================================================
# check
# =============================================================================


def test_check_update_available(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    console = _patch(monkeypatch, releases_cmd, _ctx(RELEASES))

    releases_cmd.check(version="v0.9.0", prerelease=True, **_FLAGS)  # type: ignore[arg-type]

    assert console.messages[0] == "warning: update available: v0.9.0 -> v1.1.0-rc.1"
    assert console.messages[1] == "https://github.com/owner/name/releases/tag/v1.1.0-rc.1"


def test_check_up_to_date(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    console = _patch(monkeypatch, releases_cmd, _ctx(RELEASES))

    releases_cmd.check(version="1.0.0", prerelease=False, **_FLAGS)  # type: ignore[arg-type]

    assert console.messages == ["OK 1.0.0 is up to date"]


def test_check_no_release(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    console = _patch(monkeypatch, releases_cmd, _ctx([]))

    releases_cmd.check(version="v1.0.0", prerelease=False, **_FLAGS)  # type: ignore[arg-type]

    assert console.messages == ["info: no qualifying release found"]


def test_check_failure_exits(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.releases as releases_cmd

    error = HttpError(url=URL, status=500, message="Internal Server Error")
    console = _patch(monkeypatch, releases_cmd, _ctx(error))

    with pytest.raises(typer.Exit) as exc:
        releases_cmd.check(version="v1.0.0", prerelease=False, **_FLAGS)  # type: ignore[arg-type]

    assert exc.value.exit_code == int(ErrorCode.NETWORK_ERROR)
    assert console.find("Failed to check version: GitHub API error: 500 Internal Server Error")


# =============================================================================
# clear-cache
# =============================================================================


def test_clear_cache_without_file(monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.cache as cache_cmd

    console = _patch(monkeypatch, cache_cmd, _ctx(RELEASES))

    cache_cmd.clear_cache(repo=None, cache_file=None, config=None)

    assert console.messages == ["info: no cache file configured; nothing persisted to clear"]


def test_clear_cache_with_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import release_notifier.cli.commands.cache as cache_cmd

    cache_file = tmp_path / "cache.json"
    console = _patch(monkeypatch, cache_cmd, _ctx(RELEASES, cache_file=cache_file))

    cache_cmd.clear_cache(repo=None, cache_file=None, config=None)

    assert console.messages == [f"OK cleared {cache_file}"]
    assert cache_file.read_text(encoding="utf-8") == '{"releases": [], "lastFetchTime": 0}'


# =============================================================================
# build_context
# =============================================================================


def test_build_context_requires_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(typer.Exit) as exc:
        build_context(repo=None, cache_file=None, interval=None, token=None, config_path=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_build_context_rejects_invalid_repo(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    with pytest.raises(typer.Exit) as exc:
        build_context(repo="not-a-repo", cache_file=None, interval=None, token=None, config_path=None)

    assert exc.value.exit_code == int(ErrorCode.USER_ERROR)


def test_build_context_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(typer.Exit) as exc:
        build_context(
            repo=REPO,
            cache_file=None,
            interval=None,
            token=None,
            config_path=tmp_path / "missing.toml",
        )

    assert exc.value.exit_code == int(ErrorCode.IO_ERROR)


def test_build_context_merges_config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "release-notifier.toml").write_text(
        '[notifier]\nrepo = "owner/name"\ncheck_interval = 5000\ncache_file = "cache.json"\n',
        encoding="utf-8",
    )

    ctx = build_context(repo=None, cache_file=None, interval=None, token="", config_path=None)

    config = ctx.notifier.config
    assert config.repo == "owner/name"
    assert config.check_interval == 5000
    assert config.cache_file == Path.cwd() / "cache.json"
    assert config.token is None


def test_build_context_flags_win(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "release-notifier.toml").write_text(
        '[notifier]\nrepo = "owner/name"\ncheck_interval = 5000\n',
        encoding="utf-8",
    )

    ctx = build_context(repo="other/repo", cache_file=None, interval=0, token="t", config_path=None)

    config = ctx.notifier.config
    assert config.repo == "other/repo"
    assert config.check_interval == 0
    assert config.token == "t"
