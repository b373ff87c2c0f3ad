from __future__ import annotations

import os
from dataclasses import dataclass

import typer

from relcfg.core.config import Settings, find_settings_file, load_settings_or_default
from relcfg.core.errors import ErrorCode
from relcfg.core.result import Err
from relcfg.output.console import ConsoleProtocol, RichConsole
from relcfg.output.errors import print_settings_error

VERBOSE_ENV_VAR = "RELCFG_VERBOSE"


@dataclass(frozen=True, slots=True)
class CLIContext:
    settings: Settings
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole(verbose=os.environ.get(VERBOSE_ENV_VAR) == "1")

    settings_path = find_settings_file()
    settings_result = load_settings_or_default(settings_path)
    if isinstance(settings_result, Err):
        print_settings_error(settings_result.error, console)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    settings = settings_result.value
    if settings.path is not None:
        console.detail(f"settings: {settings.path}")
    return CLIContext(settings=settings, console=console)
