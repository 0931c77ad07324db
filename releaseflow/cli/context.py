from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from releaseflow.core.config import ReleaseFlowConfig, load_config_or_default
from releaseflow.core.errors import ErrorCode
from releaseflow.core.result import Err
from releaseflow.git.repository import Repository
from releaseflow.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: ReleaseFlowConfig
    repo: Repository
    console: ConsoleProtocol


def build_context() -> CLIContext:
    root = Path.cwd()
    config_result = load_config_or_default(root)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(
        root=root,
        config=config_result.value,
        repo=Repository(root),
        console=RichConsole(),
    )
