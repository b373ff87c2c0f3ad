"""Read and write release configs in every supported file format."""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

import yaml

from relcfg.core.config import OutputSettings
from relcfg.core.result import Err, Ok, Result
from relcfg.core.structured import as_str_dict
from relcfg.platform.files import atomic_write_text, read_text
from relcfg.release.errors import ConfigLoadError
from relcfg.release.js_literal import JsModule, JsModuleStyle, parse_js_config, render_js_module
from relcfg.release.model import ConfigFormat, ConfigSource, ReleaseConfig
from relcfg.release.parse import parse_release_config

__all__ = [
    "PACKAGE_JSON_KEY",
    "detect_format",
    "load_text",
    "read_config_file",
    "dump_config",
    "write_config_file",
]

PACKAGE_JSON_KEY = "release"

_JS_SUFFIXES = (".js", ".cjs", ".mjs")
_YAML_SUFFIXES = (".yaml", ".yml")


def detect_format(path: Path, text: str | None = None) -> ConfigFormat | None:
    """Guess the format of a config file from its name (and content).

    `.releaserc` has no extension; it holds JSON or YAML, so the content
    decides when given. JSON-looking content that fails to decode is read
    again as YAML by `read_config_file`.
    """
    name = path.name
    suffix = path.suffix.lower()
    if name == "package.json":
        return "package-json"
    if suffix == ".json":
        return "json"
    if suffix in _YAML_SUFFIXES:
        return "yaml"
    if suffix in _JS_SUFFIXES:
        return "js"
    if name == ".releaserc":
        if text is None or text.lstrip().startswith("{"):
            return "json"
        return "yaml"
    return None


def _syntax_error(message: str, path: Path | None, hint: str | None = None) -> Err[ConfigLoadError]:
    return Err(ConfigLoadError(kind="syntax_error", message=message, path=path, hint=hint))


def _load_json(text: str, path: Path | None) -> Result[object, ConfigLoadError]:
    try:
        return Ok(json.loads(text))
    except json.JSONDecodeError as e:
        return _syntax_error(f"invalid JSON: {e.msg}", path, hint=f"line {e.lineno}, column {e.colno}")


def _load_yaml(text: str, path: Path | None) -> Result[object, ConfigLoadError]:
    try:
        return Ok(yaml.safe_load(text))
    except yaml.YAMLError as e:
        mark = getattr(e, "problem_mark", None)
        hint = f"line {mark.line + 1}, column {mark.column + 1}" if mark is not None else None
        return _syntax_error(f"invalid YAML: {e}", path, hint=hint)


def _load_js(text: str, path: Path | None) -> Result[JsModule, ConfigLoadError]:
    result = parse_js_config(text)
    if isinstance(result, Err):
        return Err(
            ConfigLoadError(
                kind="unsupported",
                message=f"cannot read JS config statically: {result.error.message}",
                path=path,
                hint=f"line {result.error.line}, column {result.error.column}",
            )
        )
    return Ok(result.value)


def load_text(
    text: str,
    fmt: ConfigFormat,
    path: Path | None = None,
) -> Result[object, ConfigLoadError]:
    """Parse file content into the raw release mapping."""
    match fmt:
        case "json":
            return _load_json(text, path)
        case "yaml":
            return _load_yaml(text, path)
        case "js":
            return _load_js(text, path).map(lambda module: module.value)
        case "package-json":
            manifest = _load_json(text, path)
            if isinstance(manifest, Err):
                return manifest
            data = as_str_dict(manifest.value)
            if data is None or PACKAGE_JSON_KEY not in data:
                return Err(
                    ConfigLoadError(
                        kind="not_found",
                        message=f"package.json has no '{PACKAGE_JSON_KEY}' key",
                        path=path,
                    )
                )
            return Ok(data[PACKAGE_JSON_KEY])


def read_config_file(
    path: Path,
    fmt: ConfigFormat | None = None,
) -> Result[ReleaseConfig, ConfigLoadError]:
    """Read a release config file into a record."""
    try:
        text = read_text(path)
    except FileNotFoundError:
        return Err(ConfigLoadError(kind="not_found", message="file not found", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigLoadError(kind="io_error", message=f"cannot read file: {e}", path=path))

    detected = fmt or detect_format(path, text)
    if detected is None:
        return Err(
            ConfigLoadError(
                kind="unsupported",
                message="unrecognized config file name",
                path=path,
                hint="use .releaserc[.json|.yaml|.yml|.js|.cjs|.mjs], release.config.* or package.json",
            )
        )

    if detected == "js":
        module = _load_js(text, path)
        if isinstance(module, Err):
            return module
        source = ConfigSource(path=path, format="js", js_style=module.value.style)
        return parse_release_config(module.value.value, source)

    raw = load_text(text, detected, path)
    if isinstance(raw, Err) and fmt is None and path.name == ".releaserc" and detected == "json":
        # The orchestrator reads `.releaserc` as YAML, which also covers
        # flow mappings such as `{branches: [main]}`.
        fallback = _load_yaml(text, path)
        if isinstance(fallback, Ok):
            raw, detected = fallback, "yaml"
    if isinstance(raw, Err):
        return raw
    return parse_release_config(raw.value, ConfigSource(path=path, format=detected))


def _js_style(path: Path | None, source: ConfigSource | None) -> JsModuleStyle:
    """Pick the export form: `.mjs`/`.cjs` decide, else keep the authored one."""
    suffix = path.suffix.lower() if path is not None else ""
    if suffix == ".mjs":
        return "esm"
    if suffix == ".cjs":
        return "cjs"
    if source is not None and source.js_style is not None:
        return source.js_style
    return "cjs"


def _plain(value: object) -> object:
    """Turn YAML timestamps into ISO strings for formats without a date type."""
    if isinstance(value, (dt.date, dt.datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    return value


def dump_config(
    config: ReleaseConfig,
    fmt: ConfigFormat,
    output: OutputSettings | None = None,
    *,
    target: Path | None = None,
    manifest_text: str | None = None,
) -> str:
    """Serialize a record.

    `target` selects the JS module style (`.mjs` → ESM, `.cjs` → CommonJS,
    otherwise the form the source was written in). Dates read from YAML
    become ISO strings in the other formats. For `package-json`
    the record replaces the `release` key of `manifest_text` when given,
    leaving every other manifest key in place.

    Raises:
        ValueError: If the record holds values the format cannot express,
            or manifest_text is not a JSON object.
        TypeError: If a value has no JSON form.
    """
    output = output or OutputSettings()
    data: object = config.to_dict()
    if fmt != "yaml":
        data = _plain(data)

    match fmt:
        case "json":
            return json.dumps(data, indent=output.indent, ensure_ascii=False) + "\n"
        case "yaml":
            return yaml.safe_dump(
                data,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=1000,
            )
        case "js":
            return render_js_module(
                data,
                style=_js_style(target, config.source),
                indent=output.indent,
                quote=output.quote_char,
            )
        case "package-json":
            manifest: dict[str, object] = {}
            if manifest_text is not None:
                parsed = as_str_dict(json.loads(manifest_text))
                if parsed is None:
                    raise ValueError("package.json root must be an object")
                manifest = parsed
            manifest[PACKAGE_JSON_KEY] = data
            return json.dumps(manifest, indent=output.indent, ensure_ascii=False) + "\n"
    raise AssertionError(f"unexpected format: {fmt}")


def write_config_file(
    config: ReleaseConfig,
    path: Path,
    fmt: ConfigFormat | None = None,
    output: OutputSettings | None = None,
) -> Result[ConfigFormat, ConfigLoadError]:
    """Write a record to path atomically; returns the format used."""
    manifest_text: str | None = None
    fmt = fmt or detect_format(path)
    if fmt is None:
        return Err(
            ConfigLoadError(
                kind="unsupported",
                message="cannot infer output format from file name",
                path=path,
                hint="pass an explicit format",
            )
        )

    if fmt == "package-json" and path.exists():
        try:
            manifest_text = read_text(path)
        except (OSError, UnicodeDecodeError) as e:
            return Err(ConfigLoadError(kind="io_error", message=f"cannot read file: {e}", path=path))

    try:
        text = dump_config(config, fmt, output, target=path, manifest_text=manifest_text)
    except (TypeError, ValueError, yaml.YAMLError) as e:
        return Err(ConfigLoadError(kind="invalid_shape", message=str(e), path=path))

    try:
        atomic_write_text(path, text)
    except OSError as e:
        return Err(ConfigLoadError(kind="io_error", message=f"cannot write file: {e}", path=path))
    return Ok(fmt)
