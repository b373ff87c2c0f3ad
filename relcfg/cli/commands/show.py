from __future__ import annotations

from pathlib import Path

import typer

from relcfg.cli.commands._helpers import load_or_exit, short_value
from relcfg.cli.context import build_context
from relcfg.output.console import Style


def show(
    path: Path = typer.Argument(Path("."), help="Config file or project directory"),
) -> None:
    """Show branches and the plugin pipeline of a release config."""
    ctx = build_context()
    console = ctx.console
    config = load_or_exit(path, ctx)

    if config.source is not None:
        console.print(f"source: {config.source.path} ({config.source.format})", Style.DIM)

    console.header("Branches")
    if config.branches is None:
        console.warning("not set (orchestrator defaults)")
    for branch in config.effective_branches():
        suffix = f" {short_value(branch.options)}" if branch.options else ""
        console.print(f"- {branch.name}{suffix}")

    console.header("Plugins")
    if config.plugins is None:
        console.warning("not set (orchestrator defaults)")
    for index, entry in enumerate(config.effective_plugins(), start=1):
        console.print(f"{index}. {entry.name} [{entry.role}]")
        for key, value in entry.options.items():
            console.print(f"   {key}: {short_value(value)}", Style.DIM)
            console.detail(f"   {key} = {value!r}")

    if config.extra:
        console.header("Other settings")
        for key, value in config.extra.items():
            console.print(f"{key}: {short_value(value)}")
