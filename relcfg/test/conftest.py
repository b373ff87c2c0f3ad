from __future__ import annotations

from pathlib import Path

import pytest

CARGO_CJS = """module.exports = {
  branches: ['main'],
  plugins: [
    '@semantic-release/commit-analyzer',
    '@semantic-release/release-notes-generator',
    '@semantic-release/changelog',
    {
      path: '@semantic-release/git',
      assets: ['Cargo.toml', 'CHANGELOG.md'],
      message: 'chore(release): ${nextRelease.version} [skip ci]\\n\\n${nextRelease.notes}',
    },
    '@semantic-release/github',
    [
      "semantic-release-cargo",
      {
        "allFeatures": true,
        "check": true,
        "checkArgs": ["--no-deps"],
        "publishArgs": ["--no-verify"]
      }
    ]
  ],
};"""

GIT_MESSAGE = "chore(release): ${nextRelease.version} [skip ci]\n\n${nextRelease.notes}"


@pytest.fixture
def cargo_cjs() -> str:
    return CARGO_CJS


@pytest.fixture
def cargo_config_file(tmp_path: Path) -> Path:
    path = tmp_path / "release.config.cjs"
    path.write_text(CARGO_CJS, encoding="utf-8")
    return path


@pytest.fixture
def cargo_data() -> dict[str, object]:
    return {
        "branches": ["main"],
        "plugins": [
            "@semantic-release/commit-analyzer",
            "@semantic-release/release-notes-generator",
            "@semantic-release/changelog",
            {
                "path": "@semantic-release/git",
                "assets": ["Cargo.toml", "CHANGELOG.md"],
                "message": GIT_MESSAGE,
            },
            "@semantic-release/github",
            [
                "semantic-release-cargo",
                {
                    "allFeatures": True,
                    "check": True,
                    "checkArgs": ["--no-deps"],
                    "publishArgs": ["--no-verify"],
                },
            ],
        ],
    }
