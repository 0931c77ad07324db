"""Project manifest (``Project.toml``) access.

The manifest is parsed with tomllib for reading, but written back by editing
the ``version`` line of the original text, so key order, comments and every
other table survive a bump untouched.
"""

from __future__ import annotations

import re
import tomllib
from dataclasses import dataclass
from pathlib import Path

from releaseflow.core.result import Err, Ok, Result
from releaseflow.core.structured import StrDict, as_str_dict, get_str, get_table
from releaseflow.release.errors import (
    FileAccessError,
    InvalidVersionError,
    MissingConfigurationError,
)
from releaseflow.release.textio import read_exact
from releaseflow.release.version import Version, parse_version

__all__ = ["Manifest", "ManifestError", "load_manifest", "parse_manifest"]

ManifestError = FileAccessError | MissingConfigurationError

_TABLE_HEADER_RE = re.compile(r"(?m)^[ \t]*\[\[?[^\[\]\n]+\]\]?[ \t]*(?:#[^\r\n]*)?\r?$")
_VERSION_LINE_RE = re.compile(r"(?m)^([ \t]*version[ \t]*=[ \t]*)([\"'])(.*?)\2")
_ANCHOR_LINE_RE = re.compile(r"(?m)^[ \t]*(?:name|uuid)[ \t]*=.*$")


@dataclass(frozen=True, slots=True)
class Manifest:
    path: Path
    text: str
    data: StrDict

    @property
    def raw_version(self) -> str | None:
        return get_str(self.data, "version")

    def version(self) -> Result[Version | None, InvalidVersionError]:
        """Parsed ``version``; Ok(None) if the key is absent or empty."""
        value = self.data.get("version")
        if value is not None and not isinstance(value, str):
            # A bare `version = 1` cannot be rewritten in place.
            return Err(InvalidVersionError(str(value)))
        raw = self.raw_version
        if raw is None:
            return Ok(None)
        return parse_version(raw)

    def has_compat(self, key: str) -> bool:
        compat = get_table(self.data, "compat")
        return compat is not None and key in compat

    def with_version(self, version: Version) -> Manifest:
        """Copy of this manifest with ``version`` set; text is edited in place."""
        data = dict(self.data)
        data["version"] = str(version)
        return Manifest(path=self.path, text=_set_version_text(self.text, version), data=data)


def _newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def _set_version_text(text: str, version: Version) -> str:
    header = _TABLE_HEADER_RE.search(text)
    top_end = header.start() if header is not None else len(text)
    top, rest = text[:top_end], text[top_end:]

    m = _VERSION_LINE_RE.search(top)
    if m is not None:
        start, end = m.span(3)
        return top[:start] + str(version) + top[end:] + rest

    nl = _newline(text)
    line = f'version = "{version}"{nl}'
    anchors = list(_ANCHOR_LINE_RE.finditer(top))
    if not anchors:
        return line + text

    pos = anchors[-1].end()
    if pos < len(top):
        # Skip the newline ending the anchor line.
        pos += 1
        return top[:pos] + line + top[pos:] + rest
    return top + nl + line + rest


def parse_manifest(path: Path, text: str) -> Result[Manifest, MissingConfigurationError]:
    """Manifest from text already read (from disk or from a git ref)."""
    try:
        obj: object = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        return Err(MissingConfigurationError(path=path, detail=f"invalid TOML: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(MissingConfigurationError(path=path, detail="manifest root must be a table"))
    return Ok(Manifest(path=path, text=text, data=data))


def load_manifest(path: Path) -> Result[Manifest, ManifestError]:
    try:
        text = read_exact(path)
    except FileNotFoundError:
        return Err(
            MissingConfigurationError(
                path=path,
                detail="manifest not found",
                fix="run from the project root or pass --project",
            )
        )
    except (OSError, UnicodeDecodeError) as e:
        return Err(FileAccessError(path=path, reason=f"failed to read: {e}"))

    return parse_manifest(path, text)
