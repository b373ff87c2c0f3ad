from __future__ import annotations

from pathlib import Path

import typer

from relcfg.cli.commands._helpers import load_or_exit
from relcfg.cli.context import build_context
from relcfg.core.errors import ErrorCode
from relcfg.output.console import Style
from relcfg.release.compare import compare_configs


def diff(
    left: Path = typer.Argument(..., help="First config file or directory"),
    right: Path = typer.Argument(..., help="Second config file or directory"),
    exit_code: bool = typer.Option(
        False, "--exit-code", help="Exit with status 1 when the configs differ"
    ),
) -> None:
    """List how two release config variants differ."""
    ctx = build_context()
    a = load_or_exit(left, ctx)
    b = load_or_exit(right, ctx)

    differences = compare_configs(a, b)
    if not differences:
        ctx.console.success("no differences")
        return

    ctx.console.header(f"{len(differences)} difference(s)")
    for d in differences:
        ctx.console.print(f"{d.kind}: {d.subject}", Style.BOLD)
        ctx.console.print(f"  - {d.left}", Style.DIM)
        ctx.console.print(f"  + {d.right}")

    if exit_code:
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
