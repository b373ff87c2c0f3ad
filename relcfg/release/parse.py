"""Turn a raw mapping (any format) into a ReleaseConfig record."""

from __future__ import annotations

from collections.abc import Callable

from relcfg.core.result import Err, Ok, Result
from relcfg.core.structured import as_obj_list, as_str_dict, is_str_dict
from relcfg.release.errors import ConfigLoadError
from relcfg.release.model import BranchSpec, ConfigSource, PluginEntry, ReleaseConfig
from relcfg.release.plugins import DEFAULT_BRANCHES


def _invalid(message: str, hint: str | None = None) -> Err[ConfigLoadError]:
    return Err(ConfigLoadError(kind="invalid_shape", message=message, hint=hint))


def parse_branch(raw: object, index: int) -> Result[BranchSpec, ConfigLoadError]:
    if isinstance(raw, str):
        if not raw.strip():
            return _invalid(f"branches[{index}] is an empty string")
        return Ok(BranchSpec(name=raw))

    d = as_str_dict(raw)
    if d is None:
        return _invalid(
            f"branches[{index}] must be a string or an object",
            hint=f"got {type(raw).__name__}",
        )

    name = d.get("name")
    if not isinstance(name, str) or not name.strip():
        return _invalid(f"branches[{index}] object needs a non-empty string 'name'")

    keys = list(d.keys())
    options = {k: v for k, v in d.items() if k != "name"}
    return Ok(BranchSpec(name=name, options=options, form="object", name_index=keys.index("name")))


def parse_plugin(raw: object, index: int) -> Result[PluginEntry, ConfigLoadError]:
    if isinstance(raw, str):
        if not raw.strip():
            return _invalid(f"plugins[{index}] is an empty string")
        return Ok(PluginEntry(name=raw))

    items = as_obj_list(raw)
    if items is not None:
        if len(items) not in (1, 2) or not isinstance(items[0], str) or not items[0].strip():
            return _invalid(
                f"plugins[{index}] must be [name] or [name, options]",
                hint=f"got a list of {len(items)} item(s)",
            )
        if len(items) == 1:
            return Ok(PluginEntry(name=items[0], form="pair"))
        options = as_str_dict(items[1])
        if options is None:
            return _invalid(f"plugins[{index}][1] must be an options object")
        return Ok(PluginEntry(name=items[0], options=dict(options), form="pair"))

    d = as_str_dict(raw)
    if d is None:
        return _invalid(
            f"plugins[{index}] must be a name, a [name, options] pair or an object",
            hint=f"got {type(raw).__name__}",
        )

    path = d.get("path")
    if not isinstance(path, str) or not path.strip():
        return _invalid(f"plugins[{index}] object needs a non-empty string 'path'")

    keys = list(d.keys())
    options = {k: v for k, v in d.items() if k != "path"}
    return Ok(PluginEntry(name=path, options=options, form="object", path_index=keys.index("path")))


def _parse_list[T](
    raw: object,
    key: str,
    parse_item: Callable[[object, int], Result[T, ConfigLoadError]],
) -> Result[tuple[T, ...], ConfigLoadError]:
    # A single string is accepted where a list is expected, as the orchestrator does.
    if isinstance(raw, str):
        raw = [raw]
    items = as_obj_list(raw)
    if items is None:
        return _invalid(f"'{key}' must be a list", hint=f"got {type(raw).__name__}")

    parsed: list[T] = []
    for index, item in enumerate(items):
        result = parse_item(item, index)
        if isinstance(result, Err):
            return result
        parsed.append(result.value)
    return Ok(tuple(parsed))


def parse_release_config(
    data: object,
    source: ConfigSource | None = None,
) -> Result[ReleaseConfig, ConfigLoadError]:
    """Build a record from a parsed mapping.

    Keys other than `branches` and `plugins` are kept verbatim in `extra`.
    """
    path = source.path if source is not None else None

    if not is_str_dict(data):
        return Err(
            ConfigLoadError(
                kind="invalid_shape",
                message="release config root must be an object",
                path=path,
            )
        )

    branches: tuple[BranchSpec, ...] | None = None
    if "branches" in data:
        result = _parse_list(data["branches"], "branches", parse_branch)
        if isinstance(result, Err):
            return Err(result.error.with_path(path))
        branches = result.value

    plugins: tuple[PluginEntry, ...] | None = None
    if "plugins" in data:
        plugin_result = _parse_list(data["plugins"], "plugins", parse_plugin)
        if isinstance(plugin_result, Err):
            return Err(plugin_result.error.with_path(path))
        plugins = plugin_result.value

    extra = {k: v for k, v in data.items() if k not in ("branches", "plugins")}
    return Ok(
        ReleaseConfig(
            branches=branches,
            plugins=plugins,
            extra=extra,
            key_order=tuple(data.keys()),
            source=source,
        )
    )


def default_branches() -> tuple[BranchSpec, ...]:
    result = _parse_list(list(DEFAULT_BRANCHES), "branches", parse_branch)
    if isinstance(result, Err):
        raise AssertionError(f"invalid default branches: {result.error.message}")
    return result.value
