"""Platform glue: subprocesses and the default browser."""

from .browser import open_url
from .process import ProcessError, format_command, run

__all__ = [
    "ProcessError",
    "format_command",
    "open_url",
    "run",
]
