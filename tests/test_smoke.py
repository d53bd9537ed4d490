from __future__ import annotations

import click
from typer.main import get_command
from typer.testing import CliRunner

from changedir import __version__
from changedir.main import app

runner = CliRunner()


def test_app_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_every_flag_is_documented() -> None:
    """Every option of the command surface shows up in --help."""
    command = get_command(app)
    assert isinstance(command, click.Command)

    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for param in command.params:
        if isinstance(param, click.Option) and not param.hidden:
            assert param.opts[0] in result.stdout, f"{param.opts[0]} missing from help"


def test_module_entry_point_imports() -> None:
    from changedir.__main__ import main

    assert callable(main)
