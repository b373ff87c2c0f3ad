"""Tests for relcfg.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from relcfg.core.config import (
    SETTINGS_ENV_VAR,
    SETTINGS_FILE_NAME,
    CheckSettings,
    OutputSettings,
    Settings,
    find_settings_file,
    load_settings,
    load_settings_or_default,
)
from relcfg.core.result import Err, Ok


class TestDefaults:
    """Settings used when no relcfg.toml exists."""

    def test_check_defaults(self) -> None:
        check = CheckSettings()
        assert check.strict is False
        assert check.role_multiplicity == "warn"

    def test_output_defaults(self) -> None:
        output = OutputSettings()
        assert output.indent == 2
        assert output.quote_char == "'"
        assert OutputSettings(quote="double").quote_char == '"'

    def test_frozen(self) -> None:
        settings = Settings()
        with pytest.raises(AttributeError):
            settings.path = Path("x")  # type: ignore[misc]


class TestFromDict:
    def test_full_table(self) -> None:
        settings = Settings.from_dict(
            {
                "check": {"strict": True, "role_multiplicity": "error"},
                "output": {"indent": 4, "quote": "double"},
            }
        )
        assert settings.check == CheckSettings(strict=True, role_multiplicity="error")
        assert settings.output == OutputSettings(indent=4, quote="double")

    def test_empty_uses_defaults(self) -> None:
        assert Settings.from_dict({}) == Settings()

    @pytest.mark.parametrize(
        "data",
        [
            {"check": {"role_multiplicity": "loud"}},
            {"output": {"quote": "backtick"}},
            {"output": {"indent": 9}},
            {"output": {"indent": -1}},
        ],
    )
    def test_rejects_out_of_range(self, data: dict[str, object]) -> None:
        with pytest.raises(ValueError):
            Settings.from_dict(data)

    @pytest.mark.parametrize(
        "data",
        [
            {"check": {"strict": "yes"}},
            {"check": {"role_multiplicity": 5}},
            {"output": {"indent": "4"}},
            {"output": {"indent": True}},
            {"output": {"quote": 1}},
        ],
    )
    def test_rejects_wrong_type(self, data: dict[str, object]) -> None:
        with pytest.raises(TypeError):
            Settings.from_dict(data)

    @pytest.mark.parametrize("data", [{"check": 5}, {"output": ["indent"]}])
    def test_rejects_non_table_section(self, data: dict[str, object]) -> None:
        with pytest.raises(ValueError, match="must be a table"):
            Settings.from_dict(data)

    def test_rejects_empty_choice(self) -> None:
        with pytest.raises(ValueError):
            Settings.from_dict({"output": {"quote": ""}})


class TestLoad:
    def test_load_file(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILE_NAME
        path.write_text('[check]\nstrict = true\n\n[output]\nquote = "double"\n', encoding="utf-8")
        result = load_settings(path)
        assert isinstance(result, Ok)
        assert result.value.check.strict is True
        assert result.value.output.quote == "double"
        assert result.value.path == path

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_settings(tmp_path / SETTINGS_FILE_NAME)
        assert isinstance(result, Err)
        assert "not found" in result.error.message

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILE_NAME
        path.write_text("[check\n", encoding="utf-8")
        result = load_settings(path)
        assert isinstance(result, Err)
        assert "Invalid TOML" in result.error.message

    def test_invalid_value(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILE_NAME
        path.write_text("[output]\nindent = 12\n", encoding="utf-8")
        result = load_settings(path)
        assert isinstance(result, Err)
        assert result.error.message.startswith("Invalid settings:")

    def test_wrong_type_value(self, tmp_path: Path) -> None:
        path = tmp_path / SETTINGS_FILE_NAME
        path.write_text('[check]\nstrict = "yes"\n', encoding="utf-8")
        result = load_settings(path)
        assert isinstance(result, Err)
        assert result.error.message == "Invalid settings: check.strict must be bool, got str"

    def test_default_when_no_file(self) -> None:
        assert load_settings_or_default(None) == Ok(Settings())


class TestFind:
    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / SETTINGS_FILE_NAME).write_text("", encoding="utf-8")
        monkeypatch.setenv(SETTINGS_ENV_VAR, "/elsewhere/relcfg.toml")
        assert find_settings_file(tmp_path) == Path("/elsewhere/relcfg.toml")

    def test_searches_upward(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(SETTINGS_ENV_VAR, raising=False)
        (tmp_path / SETTINGS_FILE_NAME).write_text("", encoding="utf-8")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_settings_file(nested) == (tmp_path / SETTINGS_FILE_NAME).resolve()
