"""Structural checks for release configs.

Nothing here runs a release; the checks only look at the record's shape:
branch list, pipeline roles, option types, asset globs and message
templates.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import cast

from relcfg.core.config import CheckSettings
from relcfg.core.structured import as_str_dict, is_str_list
from relcfg.release.model import PluginEntry, ReleaseConfig
from relcfg.release.plugins import (
    KNOWN_OPTION_TYPES,
    OptionType,
    PluginRole,
    is_changelog_related,
    is_publishing_related,
)
from relcfg.release.templates import NOTES_PLACEHOLDER, VERSION_PLACEHOLDER, count_placeholder

__all__ = [
    "CheckStatus",
    "CheckResult",
    "CheckReport",
    "check_config",
    "glob_problem",
]

_WINDOWS_ABSOLUTE_RE = re.compile(r"^[A-Za-z]:[\\/]")

# Roles the pipeline is expected to fill once each; notes and changelog
# share a slot for the presence check.
_REQUIRED_ROLE_GROUPS: tuple[tuple[str, tuple[PluginRole, ...]], ...] = (
    ("commit analysis", (PluginRole.ANALYZE,)),
    ("changelog/notes", (PluginRole.NOTES, PluginRole.CHANGELOG)),
    ("manifest version bump", (PluginRole.MANIFEST,)),
    ("repository write", (PluginRole.COMMIT,)),
    ("release publishing", (PluginRole.PUBLISH,)),
)


class CheckStatus(Enum):
    """Status of a check result."""

    OK = auto()
    """Property holds."""

    WARNING = auto()
    """Property holds only through orchestrator defaults, or is unusual."""

    ERROR = auto()
    """Property is violated."""


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of a single check.

    Attributes:
        name: What was checked (e.g. "branches", "assets.@semantic-release/git")
        status: Whether the check passed, warned, or failed
        message: Human-readable result message
        hint: Optional fix suggestion
    """

    name: str
    status: CheckStatus
    message: str
    hint: str | None = None

    @property
    def ok(self) -> bool:
        return self.status != CheckStatus.ERROR

    @property
    def is_error(self) -> bool:
        return self.status == CheckStatus.ERROR

    @property
    def is_warning(self) -> bool:
        return self.status == CheckStatus.WARNING

    @classmethod
    def success(cls, name: str, message: str) -> "CheckResult":
        return cls(name=name, status=CheckStatus.OK, message=message)

    @classmethod
    def warning(cls, name: str, message: str, hint: str | None = None) -> "CheckResult":
        return cls(name=name, status=CheckStatus.WARNING, message=message, hint=hint)

    @classmethod
    def error(cls, name: str, message: str, hint: str | None = None) -> "CheckResult":
        return cls(name=name, status=CheckStatus.ERROR, message=message, hint=hint)


def _empty_results() -> list[CheckResult]:
    return []


@dataclass
class CheckReport:
    results: list[CheckResult] = field(default_factory=_empty_results)

    def add(self, result: CheckResult) -> None:
        self.results.append(result)

    def has_errors(self) -> bool:
        return any(r.is_error for r in self.results)

    def has_warnings(self) -> bool:
        return any(r.is_warning for r in self.results)

    def failed(self, strict: bool = False) -> bool:
        return self.has_errors() or (strict and self.has_warnings())

    def find(self, name: str) -> list[CheckResult]:
        return [r for r in self.results if r.name == name]

    @property
    def errors(self) -> list[CheckResult]:
        return [r for r in self.results if r.is_error]


def _check_branches(config: ReleaseConfig) -> CheckResult:
    if config.branches is None:
        return CheckResult.warning(
            "branches",
            "not set; orchestrator default branches apply",
            hint="set branches explicitly, e.g. branches: ['main']",
        )
    if not config.branches:
        return CheckResult.error("branches", "empty list; no branch can trigger a release")

    dupes = [name for name, n in Counter(config.branch_names()).items() if n > 1]
    if dupes:
        return CheckResult.error("branches", f"duplicate branch names: {', '.join(dupes)}")
    return CheckResult.success("branches", ", ".join(config.branch_names()))


def _check_pipeline(config: ReleaseConfig, settings: CheckSettings) -> list[CheckResult]:
    results: list[CheckResult] = []
    plugins = config.effective_plugins()
    roles = [p.role for p in plugins]

    if config.plugins is None:
        results.append(
            CheckResult.warning(
                "pipeline",
                "plugins not set; orchestrator default pipeline applies",
                hint=", ".join(p.name for p in plugins),
            )
        )

    changelog = [p.name for p in plugins if is_changelog_related(p.role)]
    if changelog:
        results.append(CheckResult.success("pipeline.changelog", ", ".join(changelog)))
    else:
        results.append(
            CheckResult.error(
                "pipeline.changelog",
                "no changelog or release-notes step",
                hint="add @semantic-release/release-notes-generator",
            )
        )

    publish = [p.name for p in plugins if is_publishing_related(p.role)]
    if publish:
        results.append(CheckResult.success("pipeline.publish", ", ".join(publish)))
    else:
        results.append(
            CheckResult.error(
                "pipeline.publish",
                "no publishing step",
                hint="add @semantic-release/github or a package-manager plugin",
            )
        )

    if settings.role_multiplicity != "off":
        results.extend(_check_roles(roles, plugins, settings))

    dupes = [name for name, n in Counter(p.short_name for p in plugins).items() if n > 1]
    if dupes:
        results.append(
            CheckResult.warning("pipeline.duplicates", f"plugins listed more than once: {', '.join(dupes)}")
        )
    return results


def _check_roles(
    roles: list[PluginRole],
    plugins: tuple[PluginEntry, ...],
    settings: CheckSettings,
) -> list[CheckResult]:
    counts = Counter(roles)
    problems: list[str] = []
    for label, group in _REQUIRED_ROLE_GROUPS:
        if not any(counts[role] for role in group):
            problems.append(f"missing {label} step")
    for role in PluginRole:
        if role is not PluginRole.OTHER and counts[role] > 1:
            names = ", ".join(p.name for p in plugins if p.role == role)
            problems.append(f"{counts[role]} {role} steps ({names})")

    if not problems:
        return [CheckResult.success("pipeline.roles", "one step per role")]
    make = CheckResult.error if settings.role_multiplicity == "error" else CheckResult.warning
    return [make("pipeline.roles", problem) for problem in problems]


def _type_problem(value: object, expected: OptionType) -> str | None:
    match expected:
        case "bool":
            return None if isinstance(value, bool) else "expected true or false"
        case "str":
            return None if isinstance(value, str) else "expected a string"
        case "str_list":
            return None if is_str_list(value) else "expected a list of strings"
        case "assets":
            if value is False or isinstance(value, str):
                return None
            if not isinstance(value, list):
                return "expected a glob, a list of globs or false"
            for item in cast(list[object], value):
                if isinstance(item, str):
                    continue
                entry = as_str_dict(item)
                if entry is None or not isinstance(entry.get("path"), str):
                    return "asset entries must be globs or {path: glob} objects"
            return None
    return None


def _check_options(entry: PluginEntry) -> list[CheckResult]:
    results: list[CheckResult] = []
    for key, value in entry.options.items():
        expected = KNOWN_OPTION_TYPES.get(key)
        if expected is None:
            continue
        problem = _type_problem(value, expected)
        if problem is not None:
            results.append(
                CheckResult.error(
                    f"options.{entry.name}.{key}",
                    f"{problem}, got {type(value).__name__}",
                )
            )
    return results


def glob_problem(pattern: str) -> str | None:
    """Return why pattern is not a usable repository-relative glob, or None.

    >>> glob_problem("dist/**/*.{js,css}") is None
    True
    >>> glob_problem("/etc/passwd")
    'absolute path'
    """
    body = pattern.strip()
    if body.startswith("!"):
        body = body[1:]
    if not body:
        return "empty pattern"
    if "\0" in body:
        return "contains a NUL character"
    if body.startswith(("/", "\\")) or _WINDOWS_ABSOLUTE_RE.match(body):
        return "absolute path"
    if ".." in re.split(r"[\\/]", body):
        return "points outside the repository"

    in_class = False
    braces = 0
    escaped = False
    for ch in body:
        if escaped:
            escaped = False
        elif ch == "\\":
            escaped = True
        elif in_class:
            in_class = ch != "]"
        elif ch == "[":
            in_class = True
        elif ch == "{":
            braces += 1
        elif ch == "}":
            braces -= 1
            if braces < 0:
                return "unbalanced braces"
    if in_class:
        return "unclosed character class"
    if braces:
        return "unbalanced braces"
    return None


def _asset_patterns(value: object) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    patterns: list[str] = []
    for item in cast(list[object], value):
        if isinstance(item, str):
            patterns.append(item)
            continue
        entry = as_str_dict(item)
        path = entry.get("path") if entry is not None else None
        if isinstance(path, str):
            patterns.append(path)
    return patterns


def _check_assets(entry: PluginEntry) -> CheckResult | None:
    if "assets" not in entry.options:
        return None
    name = f"assets.{entry.name}"
    value = entry.options["assets"]
    if value is False:
        return CheckResult.success(name, "disabled")
    if not isinstance(value, (str, list)):
        return None
    patterns = _asset_patterns(value)
    bad = [(p, problem) for p in patterns if (problem := glob_problem(p)) is not None]
    if bad:
        detail = "; ".join(f"{p!r}: {problem}" for p, problem in bad)
        return CheckResult.error(name, f"invalid glob(s): {detail}")
    if not patterns:
        return CheckResult.warning(name, "no asset globs")
    return CheckResult.success(name, ", ".join(patterns))


def _check_message(entry: PluginEntry) -> CheckResult | None:
    template = entry.options.get("message")
    if not isinstance(template, str):
        return None
    name = f"message.{entry.name}"
    problems: list[str] = []
    for placeholder in (VERSION_PLACEHOLDER, NOTES_PLACEHOLDER):
        n = count_placeholder(template, placeholder)
        if n != 1:
            problems.append(f"${{{placeholder}}} appears {n} times")
    if problems:
        return CheckResult.error(name, "; ".join(problems), hint="each placeholder must appear exactly once")
    return CheckResult.success(name, "version and notes placeholders present once")


def check_config(config: ReleaseConfig, settings: CheckSettings | None = None) -> CheckReport:
    """Run all structural checks against a record."""
    settings = settings or CheckSettings()
    report = CheckReport()
    report.add(_check_branches(config))
    for result in _check_pipeline(config, settings):
        report.add(result)

    for entry in config.plugins or ():
        for result in _check_options(entry):
            report.add(result)
        for check in (_check_assets, _check_message):
            found = check(entry)
            if found is not None:
                report.add(found)
    return report
