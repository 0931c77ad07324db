"""Exit codes for the releaseflow CLI.

The numeric values are part of the command-line contract:
- 0: Success
- 1: User error (bad version argument, version not increasing)
- 2: Environment error (dirty repository, missing manifest fields)
- 3: Command error (git exited non-zero or could not be launched)
- 4: I/O error (manifest or README unreadable or unwritable)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    COMMAND_ERROR = 3
    IO_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
