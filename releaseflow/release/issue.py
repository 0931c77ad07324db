"""GitHub "new issue" links.

Filing the release issue is done by opening a prefilled form in the browser;
no API token is involved.
"""

from __future__ import annotations

import re
from urllib.parse import urlencode

from releaseflow.core.result import Err, Ok, Result
from releaseflow.release.errors import MissingConfigurationError

__all__ = ["new_issue_url", "registrator_comment", "repo_slug_from_remote"]

_GITHUB_REMOTE_RE = re.compile(r"github\.com[:/](.+?)(?:\.git)?/?$")

QueryValue = str | list[str] | tuple[str, ...]


def repo_slug_from_remote(url: str) -> Result[str, MissingConfigurationError]:
    """``owner/name`` from an ssh or https GitHub remote URL."""
    m = _GITHUB_REMOTE_RE.search(url.strip())
    if m is None:
        return Err(
            MissingConfigurationError(
                path=None,
                detail=f"remote is not a GitHub repository: {url.strip()}",
                fix="releases are filed as GitHub issues; set --remote to a github.com remote",
            )
        )
    return Ok(m.group(1))


def new_issue_url(repo: str, **query: QueryValue) -> str:
    """URL of the new-issue form of repo, prefilled with query.

    List values are joined with commas (GitHub's ``labels`` format). Values are
    form-encoded, so spaces become ``+``.
    """
    params: list[tuple[str, str]] = []
    for key, value in query.items():
        if isinstance(value, str):
            params.append((key, value))
        else:
            params.append((key, ",".join(value)))
    url = f"https://github.com/{repo}/issues/new"
    if not params:
        return url
    return f"{url}?{urlencode(params)}"


def registrator_comment(registrator: str, *, branch: str) -> str:
    return f"{registrator} `register(branch={branch})`"
