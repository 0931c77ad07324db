"""Commits-since badge rewriting.

READMEs often carry a shields.io badge counting the commits made since the
last release tag:

    https://img.shields.io/github/commits-since/USER/PACKAGE.jl/v1.2.3.svg

When a release is cut the tag segment has to point at the new tag. A match
is recorded as three spans over the text (prefix, tag, suffix) and rewriting
is plain span splicing, so nothing outside the tag span can change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

__all__ = [
    "BadgeChange",
    "BadgeMatch",
    "TAG_PLACEHOLDER",
    "describe_change",
    "find_badge",
    "rewrite_badge",
]

_COMMITS_SINCE_RE = re.compile(
    r"(https://img\.shields\.io/github/commits-since/[^/]+/[^/]+/)(v[0-9.]+)(\.svg)"
)

TAG_PLACEHOLDER = "$tag"

Span = tuple[int, int]


@dataclass(frozen=True, slots=True)
class BadgeMatch:
    """Location of a badge URL inside a text.

    Attributes:
        text: The text that was searched.
        prefix: Span of scheme, host and path up to the tag.
        tag: Span of the version tag (e.g. ``v1.2.3``).
        suffix: Span of the ``.svg`` suffix.
    """

    text: str
    prefix: Span
    tag: Span
    suffix: Span

    @property
    def prefix_text(self) -> str:
        return self.text[self.prefix[0] : self.prefix[1]]

    @property
    def tag_text(self) -> str:
        return self.text[self.tag[0] : self.tag[1]]

    @property
    def suffix_text(self) -> str:
        return self.text[self.suffix[0] : self.suffix[1]]


@dataclass(frozen=True, slots=True)
class BadgeChange:
    """Observable summary of a badge rewrite.

    Attributes:
        template: Badge URL with the tag replaced by ``$tag``.
        old_tag: Tag before the rewrite.
        new_tag: Tag after the rewrite.
    """

    template: str
    old_tag: str
    new_tag: str

    def format(self) -> str:
        return (
            f"Replacing `{TAG_PLACEHOLDER}` in `{self.template}`\n"
            f"From: {self.old_tag}\n"
            f"To  : {self.new_tag}"
        )


def find_badge(text: str) -> BadgeMatch | None:
    """First commits-since badge in text, or None."""
    m = _COMMITS_SINCE_RE.search(text)
    if m is None:
        return None
    return BadgeMatch(text=text, prefix=m.span(1), tag=m.span(2), suffix=m.span(3))


def rewrite_badge(text: str, match: BadgeMatch, new_tag: str) -> str:
    """Replace the tag span of match with new_tag.

    match must come from ``find_badge(text)``.
    """
    if match.text != text:
        raise ValueError("badge match does not belong to this text")
    start, end = match.tag
    return text[:start] + new_tag + text[end:]


def describe_change(match: BadgeMatch, rewritten: str) -> BadgeChange:
    """Summarize the rewrite from match.text to rewritten.

    rewritten must come from ``rewrite_badge(match.text, match, ...)``; the
    new tag is read back from the spliced span.
    """
    start, end = match.tag
    new_end = end + len(rewritten) - len(match.text)
    return BadgeChange(
        template=match.prefix_text + TAG_PLACEHOLDER + match.suffix_text,
        old_tag=match.tag_text,
        new_tag=rewritten[start:new_end],
    )
