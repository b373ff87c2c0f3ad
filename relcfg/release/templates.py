"""Commit message templates with `${path.to.value}` placeholders."""

from __future__ import annotations

import re
from collections.abc import Mapping

from relcfg.core.result import Err, Ok, Result
from relcfg.release.errors import TemplateError
from relcfg.release.model import ReleaseConfig
from relcfg.release.plugins import PluginRole

__all__ = [
    "DEFAULT_COMMIT_MESSAGE",
    "DEFAULT_TAG_FORMAT",
    "VERSION_PLACEHOLDER",
    "NOTES_PLACEHOLDER",
    "find_placeholders",
    "count_placeholder",
    "render_template",
    "preview_commit_message",
]

VERSION_PLACEHOLDER = "nextRelease.version"
NOTES_PLACEHOLDER = "nextRelease.notes"

# Message used by the repository-write plugin when none is configured.
DEFAULT_COMMIT_MESSAGE = (
    "chore(release): ${nextRelease.version} [skip ci]\n\n${nextRelease.notes}"
)

DEFAULT_TAG_FORMAT = "v${version}"

_PLACEHOLDER_RE = re.compile(r"\$\{\s*([A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*)\s*\}")
_TAG_PLACEHOLDERS = frozenset({"nextRelease.gitTag", "nextRelease.name"})


def find_placeholders(template: str) -> list[str]:
    """Return placeholder paths in order of appearance.

    >>> find_placeholders("v${ nextRelease.version } ${nextRelease.notes}")
    ['nextRelease.version', 'nextRelease.notes']
    """
    return [m.group(1) for m in _PLACEHOLDER_RE.finditer(template)]


def count_placeholder(template: str, path: str) -> int:
    return sum(1 for found in find_placeholders(template) if found == path)


def _lookup(context: Mapping[str, object], path: str) -> Result[object, TemplateError]:
    current: object = context
    for part in path.split("."):
        if not isinstance(current, Mapping) or part not in current:
            return Err(TemplateError(placeholder=path, message=f"'{part}' is not defined"))
        current = current[part]
    return Ok(current)


def render_template(template: str, context: Mapping[str, object]) -> Result[str, TemplateError]:
    """Replace every placeholder with its value from a nested mapping."""
    parts: list[str] = []
    last = 0
    for match in _PLACEHOLDER_RE.finditer(template):
        value = _lookup(context, match.group(1))
        if isinstance(value, Err):
            return value
        parts.append(template[last : match.start()])
        parts.append("" if value.value is None else str(value.value))
        last = match.end()
    parts.append(template[last:])
    return Ok("".join(parts))


def preview_commit_message(
    config: ReleaseConfig,
    version: str,
    notes: str,
) -> Result[str, TemplateError]:
    """Render the release commit message the repository-write step would use."""
    template = DEFAULT_COMMIT_MESSAGE
    for entry in config.plugins_with_role(PluginRole.COMMIT):
        message = entry.option("message")
        if isinstance(message, str):
            template = message
            break

    next_release: dict[str, object] = {"version": version, "notes": notes}
    # tagFormat only matters when the message shows the tag.
    if _TAG_PLACEHOLDERS.intersection(find_placeholders(template)):
        tag_format = config.extra.get("tagFormat")
        if not isinstance(tag_format, str):
            tag_format = DEFAULT_TAG_FORMAT
        tag = render_template(tag_format, {"version": version})
        if isinstance(tag, Err):
            return tag
        next_release["gitTag"] = tag.value
        next_release["name"] = tag.value

    context: dict[str, object] = {
        "nextRelease": next_release,
        "branch": {"name": config.branch_names()[0] if config.branch_names() else "main"},
    }
    return render_template(template, context)
