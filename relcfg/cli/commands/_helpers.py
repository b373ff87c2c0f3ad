"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import typer

from relcfg.core.result import Err
from relcfg.output.errors import load_error_exit_code, print_load_error
from relcfg.release.discovery import load_release_config
from relcfg.release.model import ReleaseConfig

if TYPE_CHECKING:
    from relcfg.cli.context import CLIContext


def load_or_exit(path: Path, ctx: CLIContext) -> ReleaseConfig:
    """Load (or discover) a release config, exiting on failure.

    Replaces the common pattern:
        result = load_release_config(path)
        if isinstance(result, Err):
            print_load_error(result.error, ctx.console)
            raise typer.Exit(code=load_error_exit_code(result.error))
    """
    result = load_release_config(path)
    if isinstance(result, Err):
        print_load_error(result.error, ctx.console)
        raise typer.Exit(code=load_error_exit_code(result.error))

    config = result.value
    if config.source is not None:
        ctx.console.detail(f"loaded {config.source.path} ({config.source.format})")
    return config


def short_value(value: object, limit: int = 60) -> str:
    text = repr(value)
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."
