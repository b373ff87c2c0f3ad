from __future__ import annotations

from pathlib import Path

import pytest

from relcfg.core.config import SettingsError
from relcfg.core.errors import ErrorCode
from relcfg.output.console import MockConsole, Style
from relcfg.output.errors import (
    load_error_exit_code,
    print_load_error,
    print_settings_error,
    print_template_error,
)
from relcfg.release.errors import ConfigLoadError, LoadErrorKind, TemplateError


@pytest.mark.parametrize(
    ("kind", "line"),
    [
        ("not_found", "error: a/.releaserc: boom"),
        ("io_error", "error: a/.releaserc: boom"),
        ("syntax_error", "error: a/.releaserc: syntax error: boom"),
        ("unsupported", "error: a/.releaserc: unsupported: boom"),
        ("invalid_shape", "error: a/.releaserc: invalid config: boom"),
    ],
)
def test_print_load_error(kind: LoadErrorKind, line: str) -> None:
    console = MockConsole()
    print_load_error(ConfigLoadError(kind=kind, message="boom", path=Path("a/.releaserc")), console)
    assert console.messages == [line]


def test_hint_is_dimmed() -> None:
    console = MockConsole()
    print_load_error(ConfigLoadError(kind="not_found", message="no release config found", hint="looked for: x"), console)
    assert console.messages == ["error: no release config found", "hint: looked for: x"]
    assert console.outputs[-1].style == Style.DIM


def test_exit_codes() -> None:
    assert load_error_exit_code(ConfigLoadError(kind="io_error", message="")) == int(ErrorCode.IO_ERROR)
    assert load_error_exit_code(ConfigLoadError(kind="syntax_error", message="")) == int(ErrorCode.USER_ERROR)


def test_settings_and_template_errors() -> None:
    console = MockConsole()
    print_settings_error(SettingsError("Invalid settings: x", path=Path("relcfg.toml")), console)
    print_template_error(TemplateError("lastRelease.version", "'lastRelease' is not defined"), console)
    assert console.messages[0] == "error: Invalid settings: x"
    assert console.messages[1] == "settings: relcfg.toml"
    assert console.messages[2] == "error: cannot render message: ${lastRelease.version}: 'lastRelease' is not defined"
