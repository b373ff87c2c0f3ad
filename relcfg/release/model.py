from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from relcfg.release.js_literal import JsModuleStyle
from relcfg.release.plugins import (
    DEFAULT_PLUGINS,
    PluginRole,
    normalize_plugin_name,
    plugin_role,
)

ConfigFormat = Literal["json", "yaml", "js", "package-json"]
BranchForm = Literal["name", "object"]
PluginForm = Literal["bare", "pair", "object"]

CONFIG_FORMATS: tuple[ConfigFormat, ...] = ("json", "yaml", "js", "package-json")


@dataclass(frozen=True, slots=True)
class ConfigSource:
    path: Path
    format: ConfigFormat
    # Export form of a JS module (`module.exports` or `export default`).
    js_style: JsModuleStyle | None = None


@dataclass(frozen=True, slots=True)
class BranchSpec:
    """A branch allowed to trigger a release.

    Authored either as a bare name or as an object such as
    `{name: "beta", prerelease: true}`; `options` holds the non-name keys.
    """

    name: str
    options: dict[str, object] = field(default_factory=dict)
    form: BranchForm = "name"
    # Position of the `name` key inside an object entry.
    name_index: int = field(default=0, compare=False)

    def to_raw(self) -> object:
        if self.form == "name" and not self.options:
            return self.name
        return _insert_key(self.options, "name", self.name, self.name_index)


@dataclass(frozen=True, slots=True)
class PluginEntry:
    """One step of the plugin pipeline.

    `form` records how the entry was authored so it is written back the same
    way: `"bare"` for `"name"`, `"pair"` for `["name", {...}]` and `"object"`
    for `{path: "name", ...}`.
    """

    name: str
    options: dict[str, object] = field(default_factory=dict)
    form: PluginForm = "bare"
    # Position of the `path` key inside an object entry.
    path_index: int = field(default=0, compare=False)

    @property
    def short_name(self) -> str:
        return normalize_plugin_name(self.name)

    @property
    def role(self) -> PluginRole:
        return plugin_role(self.name)

    def option(self, key: str, default: object = None) -> object:
        return self.options.get(key, default)

    def to_raw(self) -> object:
        match self.form:
            case "bare" if not self.options:
                return self.name
            case "pair" if not self.options:
                return [self.name]
            case "bare" | "pair":
                return [self.name, dict(self.options)]
            case "object":
                return _insert_key(self.options, "path", self.name, self.path_index)
        raise AssertionError(f"unexpected plugin form: {self.form}")


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """A release configuration record.

    `branches` and `plugins` are None when the file does not set them; the
    orchestrator then applies its own defaults (see `effective_plugins`).
    """

    branches: tuple[BranchSpec, ...] | None
    plugins: tuple[PluginEntry, ...] | None
    extra: dict[str, object] = field(default_factory=dict)
    key_order: tuple[str, ...] = ()
    source: ConfigSource | None = field(default=None, compare=False)

    def plugin_names(self) -> list[str]:
        return [p.name for p in self.plugins or ()]

    def branch_names(self) -> list[str]:
        return [b.name for b in self.branches or ()]

    def find_plugin(self, name: str) -> PluginEntry | None:
        """Return the first entry matching name (scope prefix optional)."""
        wanted = normalize_plugin_name(name)
        for entry in self.plugins or ():
            if entry.short_name == wanted:
                return entry
        return None

    def plugins_with_role(self, role: PluginRole) -> list[PluginEntry]:
        return [p for p in self.plugins or () if p.role == role]

    def effective_plugins(self) -> tuple[PluginEntry, ...]:
        if self.plugins is not None:
            return self.plugins
        return tuple(PluginEntry(name=name) for name in DEFAULT_PLUGINS)

    def effective_branches(self) -> tuple[BranchSpec, ...]:
        if self.branches is not None:
            return self.branches
        # Imported here: parse depends on this module.
        from relcfg.release.parse import default_branches

        return default_branches()

    def to_dict(self) -> dict[str, object]:
        """Rebuild the authored mapping, keeping top-level key order."""
        values: dict[str, object] = dict(self.extra)
        if self.branches is not None:
            values["branches"] = [b.to_raw() for b in self.branches]
        if self.plugins is not None:
            values["plugins"] = [p.to_raw() for p in self.plugins]

        out: dict[str, object] = {}
        for key in self.key_order:
            if key in values:
                out[key] = values.pop(key)
        for key in ("branches", "plugins"):
            if key in values:
                out[key] = values.pop(key)
        out.update(values)
        return out


def _insert_key(
    options: dict[str, object], key: str, value: object, index: int
) -> dict[str, object]:
    items = list(options.items())
    index = max(0, min(index, len(items)))
    items.insert(index, (key, value))
    return dict(items)
