"""Release configuration records.

Layers:
- model / plugins: the record and plugin roles
- parse / js_literal / formats / discovery: reading and writing files
- checks / compare / templates: analysis of a loaded record
"""

from __future__ import annotations

from .checks import CheckReport, CheckResult, CheckStatus, check_config
from .compare import ConfigDifference, compare_configs
from .discovery import find_config_file, load_release_config
from .errors import ConfigLoadError, TemplateError
from .formats import detect_format, dump_config, read_config_file, write_config_file
from .model import BranchSpec, ConfigFormat, ConfigSource, PluginEntry, ReleaseConfig
from .parse import parse_release_config
from .plugins import PluginRole, normalize_plugin_name, plugin_role
from .templates import preview_commit_message, render_template

__all__ = [
    "BranchSpec",
    "CheckReport",
    "CheckResult",
    "CheckStatus",
    "ConfigDifference",
    "ConfigFormat",
    "ConfigLoadError",
    "ConfigSource",
    "PluginEntry",
    "PluginRole",
    "ReleaseConfig",
    "TemplateError",
    "check_config",
    "compare_configs",
    "detect_format",
    "dump_config",
    "find_config_file",
    "load_release_config",
    "normalize_plugin_name",
    "parse_release_config",
    "plugin_role",
    "preview_commit_message",
    "read_config_file",
    "render_template",
    "write_config_file",
]
