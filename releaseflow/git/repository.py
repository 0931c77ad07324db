"""Read-only git queries for the project being released.

Mutating git commands (add, commit, tag, push, ...) are issued through the
release effect so that they honour dry-run; this module only inspects
repository state, which is safe to do in both modes.

Usage:
    repo = Repository(Path("."))
    match repo.dirty_files():
        case Ok(entries) if not entries:
            print("clean")
        case Ok(entries):
            print(f"{len(entries)} uncommitted files")
        case Err(e):
            print(f"Error: {e.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from releaseflow.core.result import Err, Ok, Result
from releaseflow.platform.process import ProcessError
from releaseflow.platform.process import run as run_process

__all__ = [
    "GitError",
    "Repository",
    "StatusEntry",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git query.

    Attributes:
        command: The git command that failed
        message: Error message
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single entry of ``git status --porcelain``.

    Attributes:
        xy: Two-character status code (e.g., "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    def __str__(self) -> str:
        return f"{self.xy} {self.path}"


class Repository:
    """Git repository at a given path.

    Attributes:
        path: Path to the working tree root
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def dirty_files(self) -> Result[tuple[StatusEntry, ...], GitError]:
        """List uncommitted changes (staged, unstaged and untracked)."""
        result = self._run(["status", "--porcelain"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="status",
                        message=e.stderr.strip() or "git status failed",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                entries: list[StatusEntry] = []
                for line in stdout.splitlines():
                    entry = _parse_entry(line)
                    if entry is not None:
                        entries.append(entry)
                return Ok(tuple(entries))

    def remote_url(self, name: str = "origin") -> Result[str, GitError]:
        """URL configured for a remote."""
        result = self._run(["config", "--get", f"remote.{name}.url"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="config",
                        message=e.stderr.strip() or f"remote '{name}' is not configured",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                url = stdout.strip()
                if not url:
                    return Err(
                        GitError(command="config", message=f"remote '{name}' has no url")
                    )
                return Ok(url)

    def show_file(self, ref: str, path: str) -> Result[str, GitError]:
        """Content of path (relative to self.path) as of ref."""
        result = self._run(["show", f"{ref}:./{path}"])
        match result:
            case Err(e):
                return Err(
                    GitError(
                        command="show",
                        message=e.stderr.strip() or f"cannot read {path} at {ref}",
                        returncode=e.returncode,
                    )
                )
            case Ok(stdout):
                return Ok(stdout)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path)


def _parse_entry(line: str) -> StatusEntry | None:
    if len(line) < 4:
        return None
    return StatusEntry(xy=line[:2], path=line[3:])
