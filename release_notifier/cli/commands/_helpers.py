"""Shared helpers for CLI commands."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING

import typer

from release_notifier.core.errors import ErrorCode, NotifierError

if TYPE_CHECKING:
    from release_notifier.cli.context import CLIContext


@contextmanager
def exit_on_notifier_error(
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.NETWORK_ERROR,
) -> Iterator[None]:
    """Print a NotifierError and exit instead of showing a traceback.

    Replaces the boilerplate:
        try:
            ...
        except NotifierError as e:
            ctx.console.error(str(e))
            raise typer.Exit(code=int(ErrorCode.NETWORK_ERROR))
    """
    try:
        yield
    except NotifierError as e:
        ctx.console.error(str(e))
        raise typer.Exit(code=int(error_code)) from e
