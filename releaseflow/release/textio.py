"""Byte-exact text access for the manifest and the badge file.

Both files are edited by splicing a single span, so they are read and written
without newline translation: a CRLF file stays CRLF and only the spliced
characters change on disk.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path

__all__ = ["read_exact", "write_exact"]


def read_exact(path: Path) -> str:
    """UTF-8 content of path with line endings as stored.

    Raises:
        OSError: if the file cannot be read.
        UnicodeDecodeError: if it is not valid UTF-8.
    """
    return path.read_bytes().decode("utf-8")


def write_exact(path: Path, text: str) -> None:
    """Replace path with text encoded as UTF-8.

    The new content goes to a sibling temp file that is renamed over path, so
    a reader never sees a half-written manifest. An existing file keeps its
    permission bits.

    Raises:
        OSError: if the file cannot be written.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(text.encode("utf-8"))
            handle.flush()
            os.fsync(handle.fileno())
        if path.exists():
            shutil.copymode(path, tmp)
        os.replace(tmp, path)
    finally:
        tmp.unlink(missing_ok=True)
