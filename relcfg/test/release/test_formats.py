"""Tests for relcfg.release.formats."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from relcfg.core.config import OutputSettings
from relcfg.core.result import Err, Ok
from relcfg.release.formats import (
    detect_format,
    dump_config,
    read_config_file,
    write_config_file,
)
from relcfg.release.model import ConfigFormat, ReleaseConfig
from relcfg.release.parse import parse_release_config


def _read(path: Path) -> ReleaseConfig:
    result = read_config_file(path)
    assert isinstance(result, Ok), result
    return result.value


@pytest.mark.parametrize(
    ("name", "text", "expected"),
    [
        ("package.json", None, "package-json"),
        (".releaserc.json", None, "json"),
        (".releaserc.yaml", None, "yaml"),
        (".releaserc.yml", None, "yaml"),
        ("release.config.js", None, "js"),
        ("release.config.cjs", None, "js"),
        (".releaserc.mjs", None, "js"),
        (".releaserc", '{"branches": ["main"]}', "json"),
        (".releaserc", "branches:\n  - main\n", "yaml"),
        (".releaserc", None, "json"),
        ("settings.toml", None, None),
    ],
)
def test_detect_format(name: str, text: str | None, expected: str | None) -> None:
    assert detect_format(Path(name), text) == expected


class TestRead:
    def test_reads_commonjs_file(self, cargo_config_file: Path) -> None:
        config = _read(cargo_config_file)
        assert config.source is not None
        assert config.source.format == "js"
        assert len(config.plugin_names()) == 6

    def test_reads_yaml_releaserc(self, tmp_path: Path) -> None:
        path = tmp_path / ".releaserc"
        path.write_text(
            "branches:\n  - main\nplugins:\n  - '@semantic-release/commit-analyzer'\n"
            "  - - '@semantic-release/npm'\n    - npmPublish: false\n",
            encoding="utf-8",
        )
        config = _read(path)
        assert config.source is not None and config.source.format == "yaml"
        npm = config.find_plugin("npm")
        assert npm is not None
        assert npm.form == "pair"
        assert npm.options == {"npmPublish": False}

    def test_reads_release_key_of_package_json(self, tmp_path: Path, cargo_data: dict[str, object]) -> None:
        path = tmp_path / "package.json"
        path.write_text(json.dumps({"name": "pkg", "release": cargo_data}), encoding="utf-8")
        assert _read(path).plugin_names()[-1] == "semantic-release-cargo"

    def test_package_json_without_release_key(self, tmp_path: Path) -> None:
        path = tmp_path / "package.json"
        path.write_text('{"name": "pkg"}', encoding="utf-8")
        result = read_config_file(path)
        assert isinstance(result, Err)
        assert result.error.kind == "not_found"

    def test_utf8_bom_is_ignored(self, tmp_path: Path) -> None:
        path = tmp_path / ".releaserc.json"
        path.write_text("\ufeff" + '{"branches": ["main"]}', encoding="utf-8")
        assert _read(path).branch_names() == ["main"]

    @pytest.mark.parametrize(
        ("name", "text", "kind"),
        [
            (".releaserc.json", '{"branches": [', "syntax_error"),
            (".releaserc.yaml", "branches: [main\n", "syntax_error"),
            ("release.config.js", "module.exports = require('x')", "unsupported"),
            (".releaserc.json", '{"plugins": [1]}', "invalid_shape"),
            ("release.toml", "", "unsupported"),
        ],
    )
    def test_errors(self, tmp_path: Path, name: str, text: str, kind: str) -> None:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        result = read_config_file(path)
        assert isinstance(result, Err)
        assert result.error.kind == kind
        assert result.error.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        result = read_config_file(tmp_path / ".releaserc.json")
        assert isinstance(result, Err)
        assert result.error.kind == "not_found"

    def test_flow_yaml_releaserc(self, tmp_path: Path) -> None:
        path = tmp_path / ".releaserc"
        path.write_text("{branches: [main], plugins: ['@semantic-release/github']}\n", encoding="utf-8")
        config = _read(path)
        assert config.source is not None and config.source.format == "yaml"
        assert config.branch_names() == ["main"]
        assert config.plugin_names() == ["@semantic-release/github"]

    def test_broken_json_releaserc_reports_json_error(self, tmp_path: Path) -> None:
        path = tmp_path / ".releaserc"
        path.write_text('{"branches": [', encoding="utf-8")
        result = read_config_file(path)
        assert isinstance(result, Err)
        assert result.error.kind == "syntax_error"
        assert "invalid JSON" in result.error.message

    @pytest.mark.parametrize(
        ("text", "style"),
        [
            ("module.exports = { branches: ['main'] };", "cjs"),
            ("export default { branches: ['main'] };", "esm"),
        ],
    )
    def test_records_js_export_style(self, tmp_path: Path, text: str, style: str) -> None:
        path = tmp_path / "release.config.js"
        path.write_text(text, encoding="utf-8")
        config = _read(path)
        assert config.source is not None
        assert config.source.js_style == style


class TestRoundTrip:
    @pytest.mark.parametrize(
        ("fmt", "name"),
        [
            ("json", ".releaserc.json"),
            ("yaml", ".releaserc.yaml"),
            ("js", "release.config.cjs"),
            ("js", "release.config.mjs"),
            ("package-json", "package.json"),
        ],
    )
    def test_no_information_loss(
        self,
        tmp_path: Path,
        cargo_config_file: Path,
        fmt: ConfigFormat,
        name: str,
    ) -> None:
        original = _read(cargo_config_file)
        target = tmp_path / "out" / name

        written = write_config_file(original, target, fmt)
        assert isinstance(written, Ok)

        again = _read(target)
        assert again == original
        assert again.to_dict() == original.to_dict()
        assert list(again.to_dict()) == list(original.to_dict())
        assert [p.form for p in again.plugins or ()] == [p.form for p in original.plugins or ()]

    def test_mjs_target_uses_default_export(self, cargo_config_file: Path) -> None:
        config = _read(cargo_config_file)
        text = dump_config(config, "js", target=Path("release.config.mjs"))
        assert text.startswith("export default {")

    def test_esm_js_file_written_back_in_place(self, tmp_path: Path) -> None:
        path = tmp_path / "release.config.js"
        path.write_text("export default {\n  branches: ['main'],\n};\n", encoding="utf-8")
        config = _read(path)

        assert dump_config(config, "js").startswith("export default {")
        assert isinstance(write_config_file(config, path), Ok)
        assert path.read_text(encoding="utf-8").startswith("export default {")
        assert _read(path) == config

    def test_suffix_decides_over_authored_style(self, tmp_path: Path, cargo_config_file: Path) -> None:
        esm = tmp_path / "release.config.js"
        esm.write_text("export default { branches: ['main'] };", encoding="utf-8")
        text = dump_config(_read(esm), "js", target=Path("release.config.cjs"))
        assert text.startswith("module.exports = {")

        cjs = dump_config(_read(cargo_config_file), "js", target=Path("release.config.js"))
        assert cjs.startswith("module.exports = {")

    def test_const_bindings_are_inlined(self, tmp_path: Path) -> None:
        path = tmp_path / "release.config.js"
        path.write_text(
            "const assets = ['dist/*.zip'];\n"
            "module.exports = { plugins: [['@semantic-release/github', { assets }]] };\n",
            encoding="utf-8",
        )
        text = dump_config(_read(path), "js")
        assert "const" not in text
        assert "assets: ['dist/*.zip']" in text

    @pytest.mark.parametrize("fmt", ["json", "js", "package-json"])
    def test_yaml_dates_become_iso_strings(self, tmp_path: Path, fmt: ConfigFormat) -> None:
        path = tmp_path / ".releaserc.yaml"
        path.write_text("branches: [main]\nreleased: 2024-01-01\n", encoding="utf-8")
        config = _read(path)

        text = dump_config(config, fmt)
        assert "2024-01-01" in text
        target = tmp_path / "out" / {"json": "a.json", "js": "a.cjs", "package-json": "package.json"}[fmt]
        assert isinstance(write_config_file(config, target, fmt), Ok)
        assert _read(target).extra["released"] == "2024-01-01"

    def test_yaml_keeps_dates(self, tmp_path: Path) -> None:
        path = tmp_path / ".releaserc.yaml"
        path.write_text("released: 2024-01-01\n", encoding="utf-8")
        assert dump_config(_read(path), "yaml") == "released: 2024-01-01\n"

    def test_unserializable_value_is_an_error(self, tmp_path: Path) -> None:
        config = parse_release_config({"branches": ["main"], "tags": {"a", "b"}})
        assert isinstance(config, Ok)
        result = write_config_file(config.value, tmp_path / ".releaserc.json")
        assert isinstance(result, Err)
        assert result.error.kind == "invalid_shape"
        assert not (tmp_path / ".releaserc.json").exists()

    def test_js_output_matches_authored_style(self, cargo_config_file: Path) -> None:
        text = dump_config(_read(cargo_config_file), "js")
        assert "  branches: ['main'],\n" in text
        assert "      assets: ['Cargo.toml', 'CHANGELOG.md'],\n" in text
        assert "[skip ci]\\n\\n${nextRelease.notes}'" in text

    def test_package_json_keeps_other_keys(self, tmp_path: Path, cargo_data: dict[str, object]) -> None:
        path = tmp_path / "package.json"
        path.write_text(
            json.dumps({"name": "pkg", "release": {"branches": ["old"]}, "version": "0.0.0"}),
            encoding="utf-8",
        )
        config = parse_release_config(cargo_data)
        assert isinstance(config, Ok)

        assert isinstance(write_config_file(config.value, path), Ok)
        manifest = json.loads(path.read_text(encoding="utf-8"))
        assert list(manifest) == ["name", "release", "version"]
        assert manifest["release"]["branches"] == ["main"]

    def test_output_settings_apply(self, cargo_config_file: Path) -> None:
        config = _read(cargo_config_file)
        text = dump_config(config, "json", OutputSettings(indent=4))
        assert text.startswith('{\n    "branches"')
        js = dump_config(config, "js", OutputSettings(quote="double"))
        assert 'branches: ["main"],' in js


def test_write_requires_known_format(tmp_path: Path, cargo_data: dict[str, object]) -> None:
    config = parse_release_config(cargo_data)
    assert isinstance(config, Ok)
    result = write_config_file(config.value, tmp_path / "release.txt")
    assert isinstance(result, Err)
    assert result.error.kind == "unsupported"
