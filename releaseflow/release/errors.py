"""Error kinds for release workflows.

Each kind is a value returned inside ``Err``; ``ReleaseFlowError`` is the
union a workflow can fail with. ``message`` gives the one-line text shown
by the CLI and ``hint`` an optional follow-up line.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from releaseflow.release.version import Version


@dataclass(frozen=True, slots=True)
class DirtyRepositoryError:
    files: tuple[str, ...]

    @property
    def message(self) -> str:
        return "Git repository is not clean"

    @property
    def hint(self) -> str:
        listing = "\n".join(f"  {f}" for f in self.files)
        return f"commit or stash these files first:\n{listing}"


@dataclass(frozen=True, slots=True)
class MissingVersionError:
    project: Path | None = None

    @property
    def message(self) -> str:
        where = f"`{self.project.name}`" if self.project is not None else "the manifest"
        return f"no version given and {where} has no `version` to derive one from"

    @property
    def hint(self) -> str:
        return "pass the version explicitly, e.g. `bump-version 0.1.0`"


@dataclass(frozen=True, slots=True)
class VersionOrderError:
    previous: Version
    specified: Version

    @property
    def message(self) -> str:
        return (
            "version number must be increased "
            f"(previous: {self.previous}, specified: {self.specified})"
        )

    @property
    def hint(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class InvalidVersionError:
    value: str

    @property
    def message(self) -> str:
        return f"invalid version: {self.value!r}"

    @property
    def hint(self) -> str:
        return "expected MAJOR.MINOR.PATCH[-PRERELEASE], e.g. 1.2.3 or 1.2.4-DEV"


@dataclass(frozen=True, slots=True)
class MissingConfigurationError:
    path: Path | None
    detail: str
    fix: str | None = None

    @property
    def message(self) -> str:
        if self.path is None:
            return self.detail
        return f"{self.path.name}: {self.detail}"

    @property
    def hint(self) -> str | None:
        return self.fix


@dataclass(frozen=True, slots=True)
class ExternalCommandError:
    command: tuple[str, ...]
    returncode: int
    stderr: str = ""

    @property
    def message(self) -> str:
        if self.returncode == -1:
            return f"could not run `{' '.join(self.command)}`"
        return f"`{' '.join(self.command)}` failed (exit {self.returncode})"

    @property
    def hint(self) -> str | None:
        return self.stderr.strip() or None


@dataclass(frozen=True, slots=True)
class FileAccessError:
    path: Path
    reason: str

    @property
    def message(self) -> str:
        return f"{self.path}: {self.reason}"

    @property
    def hint(self) -> None:
        return None


ReleaseFlowError = (
    DirtyRepositoryError
    | MissingVersionError
    | VersionOrderError
    | InvalidVersionError
    | MissingConfigurationError
    | ExternalCommandError
    | FileAccessError
)
