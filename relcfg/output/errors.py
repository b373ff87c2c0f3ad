"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relcfg.core.config import SettingsError
from relcfg.core.errors import ErrorCode
from relcfg.output.console import Style
from relcfg.release.errors import ConfigLoadError, TemplateError

if TYPE_CHECKING:
    from relcfg.output.console import ConsoleProtocol

__all__ = [
    "print_load_error",
    "load_error_exit_code",
    "print_settings_error",
    "print_template_error",
]


def print_load_error(error: ConfigLoadError, console: ConsoleProtocol) -> None:
    """Print a config load error with appropriate formatting."""
    where = f"{error.path}: " if error.path is not None else ""
    match error:
        case ConfigLoadError(kind="not_found"):
            console.error(f"{where}{error.message}")
        case ConfigLoadError(kind="io_error"):
            console.error(f"{where}{error.message}")
        case ConfigLoadError(kind="syntax_error"):
            console.error(f"{where}syntax error: {error.message}")
        case ConfigLoadError(kind="unsupported"):
            console.error(f"{where}unsupported: {error.message}")
        case ConfigLoadError(kind="invalid_shape"):
            console.error(f"{where}invalid config: {error.message}")
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def load_error_exit_code(error: ConfigLoadError) -> int:
    match error.kind:
        case "io_error":
            return int(ErrorCode.IO_ERROR)
        case "not_found" | "syntax_error" | "unsupported" | "invalid_shape":
            return int(ErrorCode.USER_ERROR)
    return int(ErrorCode.USER_ERROR)


def print_settings_error(error: SettingsError, console: ConsoleProtocol) -> None:
    console.error(error.message)
    if error.path is not None:
        console.print(f"settings: {error.path}", Style.DIM)


def print_template_error(error: TemplateError, console: ConsoleProtocol) -> None:
    console.error(f"cannot render message: {error.pretty()}")
    console.print("available: nextRelease.version, nextRelease.notes, nextRelease.gitTag, branch.name", Style.DIM)
