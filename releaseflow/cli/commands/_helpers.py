"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import typer

from releaseflow.core.errors import ErrorCode
from releaseflow.core.result import Err, Result
from releaseflow.output.errors import print_release_error, release_error_exit_code
from releaseflow.release.effects import Effect
from releaseflow.release.errors import ReleaseFlowError
from releaseflow.release.version import Version, parse_version

if TYPE_CHECKING:
    from releaseflow.cli.context import CLIContext


T = TypeVar("T")


def unwrap_or_exit[T](result: Result[T, ReleaseFlowError], ctx: CLIContext) -> T:
    """Value of an Ok result; print the error and exit for an Err."""
    if isinstance(result, Err):
        print_release_error(result.error, ctx.console)
        raise typer.Exit(code=release_error_exit_code(result.error))
    return result.value


def version_argument(text: str | None, ctx: CLIContext) -> Version | None:
    if text is None:
        return None
    parsed = parse_version(text)
    if isinstance(parsed, Err):
        print_release_error(parsed.error, ctx.console)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    return parsed.value


def dry_run_note(ctx: CLIContext, effect: Effect) -> None:
    if effect.is_dry_run:
        ctx.console.info("dry run: nothing was changed")
