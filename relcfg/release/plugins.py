"""Plugin naming and the role each known plugin plays in a release run."""

from __future__ import annotations

from enum import Enum, auto
from typing import Literal

__all__ = [
    "PluginRole",
    "OptionType",
    "SEMANTIC_RELEASE_SCOPE",
    "KNOWN_OPTION_TYPES",
    "DEFAULT_PLUGINS",
    "DEFAULT_BRANCHES",
    "normalize_plugin_name",
    "plugin_role",
    "is_changelog_related",
    "is_publishing_related",
]

SEMANTIC_RELEASE_SCOPE = "@semantic-release/"


class PluginRole(Enum):
    """What a plugin contributes to the release pipeline."""

    ANALYZE = auto()
    """Decides the next version from commit history."""

    NOTES = auto()
    """Renders release notes."""

    CHANGELOG = auto()
    """Writes notes into a changelog file."""

    MANIFEST = auto()
    """Bumps and publishes the native package manifest."""

    COMMIT = auto()
    """Commits changed files back to the repository."""

    PUBLISH = auto()
    """Publishes a release on the hosting platform."""

    OTHER = auto()

    def __str__(self) -> str:
        return self.name.lower()


_ROLES: dict[str, PluginRole] = {
    "commit-analyzer": PluginRole.ANALYZE,
    "release-notes-generator": PluginRole.NOTES,
    "changelog": PluginRole.CHANGELOG,
    "npm": PluginRole.MANIFEST,
    "semantic-release-cargo": PluginRole.MANIFEST,
    "cargo-release": PluginRole.MANIFEST,
    "semantic-release-pypi": PluginRole.MANIFEST,
    "semantic-release-python": PluginRole.MANIFEST,
    "git": PluginRole.COMMIT,
    "github": PluginRole.PUBLISH,
    "gitlab": PluginRole.PUBLISH,
    "gitea": PluginRole.PUBLISH,
    "exec": PluginRole.OTHER,
}


OptionType = Literal["bool", "str", "str_list", "assets"]

KNOWN_OPTION_TYPES: dict[str, OptionType] = {
    "allFeatures": "bool",
    "check": "bool",
    "checkArgs": "str_list",
    "publishArgs": "str_list",
    "publishCmd": "str",
    "assets": "assets",
    "message": "str",
}

DEFAULT_PLUGINS: tuple[str, ...] = (
    "@semantic-release/commit-analyzer",
    "@semantic-release/release-notes-generator",
    "@semantic-release/npm",
    "@semantic-release/github",
)

# Orchestrator defaults, kept as authored mappings so they flow through the
# same parser as file content.
DEFAULT_BRANCHES: tuple[object, ...] = (
    "+([0-9])?(.{+([0-9]),x}).x",
    "master",
    "main",
    "next",
    "next-major",
    {"name": "beta", "prerelease": True},
    {"name": "alpha", "prerelease": True},
)


def normalize_plugin_name(name: str) -> str:
    """Return the short plugin id.

    >>> normalize_plugin_name("@semantic-release/git")
    'git'
    >>> normalize_plugin_name("semantic-release-cargo")
    'semantic-release-cargo'
    """
    return name.strip().removeprefix(SEMANTIC_RELEASE_SCOPE)


def plugin_role(name: str) -> PluginRole:
    return _ROLES.get(normalize_plugin_name(name), PluginRole.OTHER)


def is_changelog_related(role: PluginRole) -> bool:
    return role in (PluginRole.NOTES, PluginRole.CHANGELOG)


def is_publishing_related(role: PluginRole) -> bool:
    return role in (PluginRole.PUBLISH, PluginRole.MANIFEST)
