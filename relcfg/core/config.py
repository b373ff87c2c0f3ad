"""Typed settings loading for relcfg itself.

Settings live in an optional `relcfg.toml` and tune how release configs are
checked and written. They are unrelated to the release config being
inspected.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_table

__all__ = [
    "CheckSettings",
    "OutputSettings",
    "Settings",
    "SettingsError",
    "RoleMultiplicity",
    "QuoteStyle",
    "SETTINGS_FILE_NAME",
    "SETTINGS_ENV_VAR",
    "find_settings_file",
    "load_settings",
    "load_settings_or_default",
]

SETTINGS_FILE_NAME = "relcfg.toml"
SETTINGS_ENV_VAR = "RELCFG_SETTINGS"

RoleMultiplicity = Literal["off", "warn", "error"]
QuoteStyle = Literal["single", "double"]

_ROLE_MULTIPLICITY: tuple[RoleMultiplicity, ...] = ("off", "warn", "error")
_QUOTE_STYLES: tuple[QuoteStyle, ...] = ("single", "double")


@dataclass(frozen=True, slots=True)
class SettingsError:
    """Error when settings cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class CheckSettings:
    """How strictly structural checks are applied.

    Attributes:
        strict: Treat warnings as failures.
        role_multiplicity: Severity when a pipeline role appears zero or
            several times.
    """

    strict: bool = False
    role_multiplicity: RoleMultiplicity = "warn"


@dataclass(frozen=True, slots=True)
class OutputSettings:
    """Formatting used when writing release configs."""

    indent: int = 2
    quote: QuoteStyle = "single"

    @property
    def quote_char(self) -> str:
        return "'" if self.quote == "single" else '"'


@dataclass(frozen=True, slots=True)
class Settings:
    """Main settings container."""

    check: CheckSettings = field(default_factory=CheckSettings)
    output: OutputSettings = field(default_factory=OutputSettings)
    path: Path | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object], path: Path | None = None) -> Settings:
        """Create Settings from a mapping (parsed TOML).

        Raises:
            ValueError: If a value is present but outside its allowed set.
            TypeError: If a value is present but has the wrong type.
        """
        check: StrDict = _table(data, "check")
        output: StrDict = _table(data, "output")
        _require_type(check, "check", "strict", bool)
        _require_type(check, "check", "role_multiplicity", str)
        _require_type(output, "output", "indent", int)
        _require_type(output, "output", "quote", str)

        multiplicity = _choice(check, "check", "role_multiplicity", _ROLE_MULTIPLICITY, "warn")
        quote = _choice(output, "output", "quote", _QUOTE_STYLES, "single")

        indent = get_int(output, "indent")
        if indent is None:
            indent = 2
        if not 0 <= indent <= 8:
            raise ValueError("output.indent must be between 0 and 8")

        strict = get_bool(check, "strict")
        return cls(
            check=CheckSettings(
                strict=bool(strict),
                role_multiplicity=multiplicity,
            ),
            output=OutputSettings(indent=indent, quote=quote),
            path=path,
        )


def _table(data: Mapping[str, object], key: str) -> StrDict:
    if key not in data:
        return {}
    table = get_table(data, key)
    if table is None:
        raise ValueError(f"[{key}] must be a table")
    return table


def _choice[T: str](table: StrDict, section: str, key: str, allowed: tuple[T, ...], default: T) -> T:
    value = table.get(key, default)
    for choice in allowed:
        if choice == value:
            return choice
    raise ValueError(f"{section}.{key} must be one of {', '.join(allowed)}")


def _require_type(table: StrDict, section: str, key: str, expected: type) -> None:
    if key not in table:
        return
    value = table[key]
    # bool is a subclass of int; an int setting never accepts true/false.
    if isinstance(value, expected) and not (expected is int and isinstance(value, bool)):
        return
    raise TypeError(f"{section}.{key} must be {expected.__name__}, got {type(value).__name__}")


def find_settings_file(start: Path | None = None) -> Path | None:
    """Locate relcfg.toml.

    The RELCFG_SETTINGS environment variable wins; otherwise the file is
    searched from `start` (default: cwd) upward.
    """
    env = os.environ.get(SETTINGS_ENV_VAR)
    if env:
        return Path(env).expanduser()

    base = (start or Path.cwd()).resolve()
    for parent in (base, *base.parents):
        candidate = parent / SETTINGS_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def _parse_toml(path: Path) -> Result[StrDict, SettingsError]:
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(SettingsError("Settings root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(SettingsError(f"Settings file not found: {path}", path=path))
    except PermissionError:
        return Err(SettingsError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(SettingsError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(SettingsError(f"Error reading settings: {e}", path=path))


def load_settings(path: Path) -> Result[Settings, SettingsError]:
    """Load and parse settings from a TOML file.

    Returns:
        Ok(Settings) on success, Err(SettingsError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Settings.from_dict(result.value, path=path))
    except (KeyError, TypeError, ValueError) as e:
        return Err(SettingsError(f"Invalid settings: {e}", path=path))


def load_settings_or_default(path: Path | None) -> Result[Settings, SettingsError]:
    """Load settings when a file was found, else return defaults."""
    if path is None:
        return Ok(Settings())
    return load_settings(path)
