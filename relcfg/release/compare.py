"""Compare two release config variants."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Literal

from relcfg.release.model import PluginEntry, ReleaseConfig

DifferenceKind = Literal[
    "branches",
    "plugin_added",
    "plugin_removed",
    "plugin_order",
    "plugin_form",
    "option",
    "extra",
]

_MISSING = "<unset>"


@dataclass(frozen=True, slots=True)
class ConfigDifference:
    kind: DifferenceKind
    subject: str
    left: str
    right: str

    def pretty(self) -> str:
        return f"{self.kind} {self.subject}: {self.left} -> {self.right}"


def _fmt(value: object) -> str:
    if value is _MISSING:
        return _MISSING
    return repr(value)


def _by_name(plugins: tuple[PluginEntry, ...]) -> dict[str, PluginEntry]:
    """Key entries by short name; repeats of a name become `name#2`, `name#3`."""
    out: dict[str, PluginEntry] = {}
    seen: Counter[str] = Counter()
    for entry in plugins:
        seen[entry.short_name] += 1
        n = seen[entry.short_name]
        out[entry.short_name if n == 1 else f"{entry.short_name}#{n}"] = entry
    return out


def _label(key: str, entry: PluginEntry) -> str:
    return entry.name + key.removeprefix(entry.short_name)


def _branches(config: ReleaseConfig) -> str:
    if config.branches is None:
        return _MISSING
    return _fmt([b.to_raw() for b in config.branches])


def _compare_options(key: str, left: PluginEntry, right: PluginEntry) -> list[ConfigDifference]:
    label = _label(key, left)
    diffs: list[ConfigDifference] = []
    if left.form != right.form:
        diffs.append(ConfigDifference("plugin_form", label, left.form, right.form))
    options = list(left.options) + [k for k in right.options if k not in left.options]
    for option in options:
        lv = left.options.get(option, _MISSING)
        rv = right.options.get(option, _MISSING)
        if lv != rv:
            diffs.append(ConfigDifference("option", f"{label}.{option}", _fmt(lv), _fmt(rv)))
    return diffs


def compare_configs(left: ReleaseConfig, right: ReleaseConfig) -> tuple[ConfigDifference, ...]:
    """List how right differs from left.

    Plugins are matched by short name, so `git` and `@semantic-release/git`
    are the same step.
    """
    diffs: list[ConfigDifference] = []

    if left.branches != right.branches:
        diffs.append(
            ConfigDifference(
                "branches",
                "branches",
                _branches(left),
                _branches(right),
            )
        )

    lp = _by_name(left.effective_plugins())
    rp = _by_name(right.effective_plugins())

    for name, entry in lp.items():
        if name not in rp:
            diffs.append(ConfigDifference("plugin_removed", _label(name, entry), "present", "absent"))
    for name, entry in rp.items():
        if name not in lp:
            diffs.append(ConfigDifference("plugin_added", _label(name, entry), "absent", "present"))

    common_left = [n for n in lp if n in rp]
    common_right = [n for n in rp if n in lp]
    if common_left != common_right:
        diffs.append(
            ConfigDifference(
                "plugin_order",
                "plugins",
                ", ".join(common_left),
                ", ".join(common_right),
            )
        )

    for name in common_left:
        diffs.extend(_compare_options(name, lp[name], rp[name]))

    keys = list(left.extra) + [k for k in right.extra if k not in left.extra]
    for key in keys:
        lv = left.extra.get(key, _MISSING)
        rv = right.extra.get(key, _MISSING)
        if lv != rv:
            diffs.append(ConfigDifference("extra", key, _fmt(lv), _fmt(rv)))

    return tuple(diffs)
