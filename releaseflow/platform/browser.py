"""Open URLs with the system default handler."""

from __future__ import annotations

import typer

from releaseflow.core.result import Err, Ok, Result

__all__ = ["open_url"]


def open_url(url: str) -> Result[None, str]:
    """Hand url to the default browser.

    Returns:
        Ok(None) if the handler was launched, Err(message) otherwise.
    """
    code = typer.launch(url)
    if code != 0:
        return Err(f"default application exited with {code} for {url}")
    return Ok(None)
