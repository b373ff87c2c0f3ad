"""Error types for loading release configs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

LoadErrorKind = Literal[
    "not_found",
    "io_error",
    "syntax_error",
    "unsupported",
    "invalid_shape",
]


@dataclass(frozen=True, slots=True)
class ConfigLoadError:
    """Canonical load error payload.

    Produced by discovery, format readers and the record parser; rendered by
    `relcfg.output.errors` without importing any of them.
    """

    kind: LoadErrorKind
    message: str
    path: Path | None = None
    hint: str | None = None

    def pretty(self) -> str:
        where = f"{self.path}: " if self.path is not None else ""
        if self.hint:
            return f"{where}{self.message} (hint: {self.hint})"
        return f"{where}{self.message}"

    def with_path(self, path: Path | None) -> ConfigLoadError:
        if path is None or self.path is not None:
            return self
        return ConfigLoadError(kind=self.kind, message=self.message, path=path, hint=self.hint)


@dataclass(frozen=True, slots=True)
class TemplateError:
    """A placeholder could not be resolved while rendering a template."""

    placeholder: str
    message: str

    def pretty(self) -> str:
        return f"${{{self.placeholder}}}: {self.message}"
