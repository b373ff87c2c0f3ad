from __future__ import annotations

from pathlib import Path

import typer

from relcfg.cli.commands._helpers import load_or_exit
from relcfg.cli.context import CLIContext, build_context
from relcfg.core.errors import ErrorCode
from relcfg.output.console import Style
from relcfg.release.checks import CheckReport, CheckStatus, check_config


def check(
    paths: list[Path] = typer.Argument(None, help="Config files or project directories"),
    strict: bool | None = typer.Option(
        None,
        "--strict/--no-strict",
        help="Fail on warnings (default from relcfg.toml)",
    ),
) -> None:
    """Check structural properties of one or more release configs."""
    ctx = build_context()
    strict = ctx.settings.check.strict if strict is None else strict

    failed = False
    for path in paths or [Path(".")]:
        config = load_or_exit(path, ctx)
        title = str(config.source.path) if config.source is not None else str(path)
        report = check_config(config, ctx.settings.check)
        _print_report(ctx, title, report)
        failed = failed or report.failed(strict=strict)

    if failed:
        raise typer.Exit(code=int(ErrorCode.CHECK_ERROR))


def _print_report(ctx: CLIContext, title: str, report: CheckReport) -> None:
    console = ctx.console
    console.header(title)
    for r in report.results:
        console.print(f"{r.name}: {r.message}", _style_for_status(r.status))
        if r.hint and r.status != CheckStatus.OK:
            console.print(f"hint: {r.hint}", Style.DIM)


def _style_for_status(status: CheckStatus) -> Style:
    if status == CheckStatus.OK:
        return Style.SUCCESS
    if status == CheckStatus.WARNING:
        return Style.WARNING
    return Style.ERROR
