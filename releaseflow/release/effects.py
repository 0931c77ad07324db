"""Perform / dry-run switch for side-effecting release steps.

A workflow receives one ``Effect`` and routes every external command, every
precondition and every file write through it:

- ``Perform`` runs commands, fails on unmet preconditions and writes files.
- ``DryRun`` prints what would happen, downgrades unmet preconditions to
  warnings and leaves the filesystem alone.

Read-only queries (``git status``, ``git config``) bypass the effect and run
in both modes so a dry run sees the real repository state.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from releaseflow.core.result import Err, Ok, Result
from releaseflow.output.console import ConsoleProtocol, Style
from releaseflow.platform.browser import open_url as open_default_app
from releaseflow.platform.process import format_command
from releaseflow.platform.process import run as run_process
from releaseflow.release.errors import ExternalCommandError, FileAccessError, ReleaseFlowError
from releaseflow.release.textio import write_exact

__all__ = ["DryRun", "Effect", "Perform", "effect_for"]


@dataclass(frozen=True, slots=True)
class Perform:
    console: ConsoleProtocol
    cwd: Path

    is_dry_run: ClassVar[bool] = False

    def run(self, cmd: list[str]) -> Result[str, ExternalCommandError]:
        self.console.command(format_command(cmd))
        result = run_process(cmd, cwd=self.cwd)
        if isinstance(result, Err):
            e = result.error
            return Err(
                ExternalCommandError(command=e.command, returncode=e.returncode, stderr=e.stderr)
            )
        return result

    def require[E: ReleaseFlowError](self, condition: bool, error: E) -> Result[None, E]:
        if condition:
            return Ok(None)
        return Err(error)

    def persist(self, path: Path, content: str) -> Result[None, FileAccessError]:
        try:
            write_exact(path, content)
        except OSError as e:
            return Err(FileAccessError(path=path, reason=f"failed to write: {e}"))
        self.console.print(f"wrote {path.name}", Style.DIM)
        return Ok(None)

    def open_url(self, url: str) -> Result[None, ExternalCommandError]:
        self.console.print(f"open: {url}", Style.DIM)
        result = open_default_app(url)
        if isinstance(result, Err):
            return Err(
                ExternalCommandError(command=("open", url), returncode=-1, stderr=result.error)
            )
        return Ok(None)


@dataclass(frozen=True, slots=True)
class DryRun:
    console: ConsoleProtocol
    cwd: Path

    is_dry_run: ClassVar[bool] = True

    def run(self, cmd: list[str]) -> Result[str, ExternalCommandError]:
        self.console.info(f"Dry run: {format_command(cmd)}")
        return Ok("")

    def require[E: ReleaseFlowError](self, condition: bool, error: E) -> Result[None, E]:
        if condition:
            return Ok(None)
        self.console.warning(f"Dry run (continuing as if this did not happen): {error.message}")
        if error.hint:
            self.console.print(f"hint: {error.hint}", Style.DIM)
        return Ok(None)

    def persist(self, path: Path, content: str) -> Result[None, FileAccessError]:
        del content
        self.console.info(f"Dry run: {path.name} would be modified (skipped)")
        return Ok(None)

    def open_url(self, url: str) -> Result[None, ExternalCommandError]:
        self.console.info(f"Dry run: open URL: {url}")
        return Ok(None)


Effect = Perform | DryRun


def effect_for(*, dry_run: bool, console: ConsoleProtocol, cwd: Path) -> Effect:
    if dry_run:
        return DryRun(console=console, cwd=cwd)
    return Perform(console=console, cwd=cwd)
