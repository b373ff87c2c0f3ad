"""Locate the release config of a project the way the orchestrator does."""

from __future__ import annotations

import json
from pathlib import Path

from relcfg.core.result import Err, Ok, Result
from relcfg.core.structured import as_str_dict
from relcfg.platform.files import read_text
from relcfg.release.errors import ConfigLoadError
from relcfg.release.formats import PACKAGE_JSON_KEY, read_config_file
from relcfg.release.model import ReleaseConfig

__all__ = ["SEARCH_ORDER", "find_config_file", "load_release_config"]

# package.json only counts when it carries a `release` key.
SEARCH_ORDER: tuple[str, ...] = (
    "package.json",
    ".releaserc",
    ".releaserc.json",
    ".releaserc.yaml",
    ".releaserc.yml",
    ".releaserc.js",
    ".releaserc.cjs",
    ".releaserc.mjs",
    "release.config.js",
    "release.config.cjs",
    "release.config.mjs",
)


def _package_json_has_release(path: Path) -> bool:
    try:
        data = as_str_dict(json.loads(read_text(path)))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return False
    return data is not None and PACKAGE_JSON_KEY in data


def find_config_file(directory: Path) -> Result[Path, ConfigLoadError]:
    """Return the first config file in SEARCH_ORDER found in directory."""
    if not directory.is_dir():
        return Err(
            ConfigLoadError(kind="not_found", message="not a directory", path=directory)
        )

    for name in SEARCH_ORDER:
        candidate = directory / name
        if not candidate.is_file():
            continue
        if name == "package.json" and not _package_json_has_release(candidate):
            continue
        return Ok(candidate)

    return Err(
        ConfigLoadError(
            kind="not_found",
            message="no release config found",
            path=directory,
            hint=f"looked for: {', '.join(SEARCH_ORDER)}",
        )
    )


def load_release_config(path: Path) -> Result[ReleaseConfig, ConfigLoadError]:
    """Load a release config from a file, or discover it in a directory."""
    if path.is_dir():
        found = find_config_file(path)
        if isinstance(found, Err):
            return found
        path = found.value
    return read_config_file(path)
