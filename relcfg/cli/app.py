from __future__ import annotations

import os
from pathlib import Path

import typer

from relcfg import __version__
from relcfg.cli.commands.check import check
from relcfg.cli.commands.convert import convert
from relcfg.cli.commands.diff import diff
from relcfg.cli.commands.message import message
from relcfg.cli.commands.show import show
from relcfg.cli.context import VERBOSE_ENV_VAR
from relcfg.core.config import SETTINGS_ENV_VAR
from relcfg.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(show)
app.command()(check)
app.command()(convert)
app.command()(diff)
app.command()(message)


@app.callback(invoke_without_command=True)
def _main(  # pyright: ignore[reportUnusedFunction]
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    settings: Path | None = typer.Option(
        None,
        "--settings",
        help="relcfg.toml to use (overrides auto detection)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show extra details."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if verbose:
        os.environ[VERBOSE_ENV_VAR] = "1"

    if settings is not None:
        try:
            path = settings.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --settings: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not path.is_file():
            typer.echo(f"error: --settings '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[SETTINGS_ENV_VAR] = str(path)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


def main() -> None:
    app()
