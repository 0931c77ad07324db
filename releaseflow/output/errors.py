"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from releaseflow.core.errors import ErrorCode
from releaseflow.output.console import Style
from releaseflow.release.errors import (
    DirtyRepositoryError,
    ExternalCommandError,
    FileAccessError,
    InvalidVersionError,
    MissingConfigurationError,
    MissingVersionError,
    ReleaseFlowError,
    VersionOrderError,
)

if TYPE_CHECKING:
    from releaseflow.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseFlowError, console: ConsoleProtocol) -> None:
    """Print a release error with its hint (if any)."""
    match error:
        case VersionOrderError(previous=previous, specified=specified):
            console.error("version number must be increased")
            console.print(f"previous:  {previous}", Style.DIM)
            console.print(f"specified: {specified}", Style.DIM)
        case _:
            console.error(error.message)
            if error.hint:
                console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseFlowError) -> int:
    match error:
        case MissingVersionError() | VersionOrderError() | InvalidVersionError():
            return int(ErrorCode.USER_ERROR)
        case DirtyRepositoryError() | MissingConfigurationError():
            return int(ErrorCode.ENV_ERROR)
        case ExternalCommandError():
            return int(ErrorCode.COMMAND_ERROR)
        case FileAccessError():
            return int(ErrorCode.IO_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)
