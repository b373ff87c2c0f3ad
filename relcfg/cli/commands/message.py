from __future__ import annotations

from pathlib import Path

import typer

from relcfg.cli.commands._helpers import load_or_exit
from relcfg.cli.context import build_context
from relcfg.core.errors import ErrorCode
from relcfg.core.result import Err
from relcfg.output.errors import print_template_error
from relcfg.release.templates import preview_commit_message


def message(
    path: Path = typer.Argument(Path("."), help="Config file or project directory"),
    next_version: str = typer.Option(..., "--next-version", help="Version to render, e.g. 1.4.0"),
    notes: str | None = typer.Option(None, "--notes", help="Release notes text"),
    notes_file: Path | None = typer.Option(None, "--notes-file", help="Read release notes from file"),
) -> None:
    """Render the release commit message for a version."""
    ctx = build_context()
    if notes is not None and notes_file is not None:
        ctx.console.error("use either --notes or --notes-file")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    text = notes or ""
    if notes_file is not None:
        try:
            text = notes_file.read_text(encoding="utf-8").rstrip("\n")
        except OSError as e:
            ctx.console.error(f"failed to read --notes-file: {e}")
            raise typer.Exit(code=int(ErrorCode.IO_ERROR))

    config = load_or_exit(path, ctx)
    rendered = preview_commit_message(config, next_version, text)
    if isinstance(rendered, Err):
        print_template_error(rendered.error, ctx.console)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    ctx.console.raw(rendered.value + "\n")
