from __future__ import annotations

import pytest
import typer

from releaseflow import __version__
from releaseflow.cli import app as app_mod


def test_version_flag_prints_and_exits(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(typer.Exit) as exc:
        app_mod._print_version(True)  # pyright: ignore[reportPrivateUsage]

    assert exc.value.exit_code == 0
    assert capsys.readouterr().out.strip() == __version__


def test_version_flag_absent_is_noop() -> None:
    app_mod._print_version(False)  # pyright: ignore[reportPrivateUsage]


def test_commands_registered() -> None:
    names = {command.name for command in app_mod.app.registered_commands}
    assert names == {"bump-version", "start-release", "finish-release", "replace-badge"}
