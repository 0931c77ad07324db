"""Version values and the next-version policy.

The policy encodes the development cycle a package goes through:

    1.2.3  --bump-->  1.2.4-DEV  --start release-->  1.2.4  --bump-->  1.2.5-DEV

``compute_next_version`` is pure; persisting and logging the result is the
caller's job.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from functools import total_ordering
from typing import Literal

from releaseflow.core.result import Err, Ok, Result
from releaseflow.release.errors import InvalidVersionError, MissingVersionError, VersionOrderError

BumpMode = Literal["prerelease", "release"]
PrereleaseIdent = int | str

DEV_MARKER = "DEV"

_VERSION_RE = re.compile(
    r"^v?(0|[1-9]\d*)(?:\.(0|[1-9]\d*))?(?:\.(0|[1-9]\d*))?"
    r"(?:-([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def _ident_key(ident: PrereleaseIdent) -> tuple[int, int, str]:
    # Numeric identifiers sort below alphanumeric ones.
    if isinstance(ident, int):
        return (0, ident, "")
    return (1, 0, ident)


@total_ordering
@dataclass(frozen=True, slots=True)
class Version:
    major: int
    minor: int = 0
    patch: int = 0
    prerelease: tuple[PrereleaseIdent, ...] = ()

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    def _key(self) -> tuple[object, ...]:
        return (
            self.major,
            self.minor,
            self.patch,
            0 if self.prerelease else 1,
            tuple(_ident_key(p) for p in self.prerelease),
        )

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        base = f"{self.major}.{self.minor}.{self.patch}"
        if not self.prerelease:
            return base
        return base + "-" + ".".join(str(p) for p in self.prerelease)

    def to_tag(self) -> str:
        return f"v{self}"

    def finalized(self) -> Version:
        """Same version with the prerelease segment dropped."""
        return replace(self, prerelease=())

    def next_patch(self, prerelease: tuple[PrereleaseIdent, ...] = ()) -> Version:
        return Version(self.major, self.minor, self.patch + 1, prerelease)


def parse_version(text: str) -> Result[Version, InvalidVersionError]:
    """Parse ``1.2.3``, ``v1.2.3``, ``1.2.4-DEV`` or a shortened ``1.2``."""
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return Err(InvalidVersionError(text))

    prerelease: tuple[PrereleaseIdent, ...] = ()
    if m.group(4) is not None:
        prerelease = tuple(int(p) if p.isdigit() else p for p in m.group(4).split("."))

    return Ok(
        Version(
            major=int(m.group(1)),
            minor=int(m.group(2) or 0),
            patch=int(m.group(3) or 0),
            prerelease=prerelease,
        )
    )


def compute_next_version(
    previous: Version | None,
    explicit: Version | None,
    mode: BumpMode,
) -> Result[Version, MissingVersionError | VersionOrderError]:
    """Decide which version a bump should produce.

    Args:
        previous: Version currently recorded in the manifest, if any.
        explicit: Version requested by the user, if any. Wins over the policy.
        mode: ``"release"`` promotes a prerelease to its release (or starts
            the next patch release); ``"prerelease"`` moves a release to the
            next development version (or finalizes a prerelease).

    Returns:
        Ok(candidate) strictly greater than previous, or the reason it is not.
    """
    if explicit is not None:
        candidate = explicit
    elif previous is None:
        return Err(MissingVersionError())
    elif mode == "release":
        candidate = previous.finalized() if previous.is_prerelease else previous.next_patch()
    else:
        if previous.is_prerelease:
            candidate = previous.finalized()
        else:
            candidate = previous.next_patch(prerelease=(DEV_MARKER,))

    if previous is not None and candidate <= previous:
        return Err(VersionOrderError(previous=previous, specified=candidate))
    return Ok(candidate)
