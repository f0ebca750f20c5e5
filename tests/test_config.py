"""Tests for climan/core/config.py - Configuration loading and render settings."""

from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

import pytest

from climan.core.config import (
    Config,
    EnvStyle,
    RenderSettings,
    clear_config_cache,
    format_page_date,
    load_config,
)
from climan.core.exceptions import InvalidSourceDateEpoch

pytestmark = pytest.mark.unit


class TestConfig:
    """Test Config dataclass."""

    def test_config_default_values(self):
        """Config has sensible defaults."""
        config = Config()
        assert config.page.section == "1"
        assert config.page.default_usage == "[OPTIONS]"
        assert config.page.env_style == "auto"
        assert config.source_path is None

    def test_config_from_dict_empty(self):
        config = Config.from_dict({})
        assert config.page.section == "1"

    def test_config_from_dict_page(self):
        data = {"page": {"section": 8, "default_usage": "<cmd>", "env_style": "windows"}}
        config = Config.from_dict(data)
        assert config.page.section == "8"
        assert config.page.default_usage == "<cmd>"
        assert config.page.env_style == "windows"

    def test_config_from_dict_ignores_bad_section(self):
        config = Config.from_dict({"page": "nope"})
        assert config.page.section == "1"


class TestLoadConfig:
    """Test config file discovery."""

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "custom.yaml"
        path.write_text("page:\n  section: '5'\n")
        config = load_config(path, use_cache=False)
        assert config.page.section == "5"
        assert config.source_path == path

    def test_found_in_current_directory(self, tmp_path, monkeypatch):
        (tmp_path / ".climan.yaml").write_text("page:\n  default_usage: '[ARGS]'\n")
        monkeypatch.chdir(tmp_path)
        config = load_config(use_cache=False)
        assert config.page.default_usage == "[ARGS]"

    def test_stops_at_git_root(self, tmp_path, monkeypatch):
        (tmp_path / ".climan.yaml").write_text("page:\n  section: '9'\n")
        repo = tmp_path / "repo"
        (repo / ".git").mkdir(parents=True)
        monkeypatch.chdir(repo)
        with patch.object(Path, "home", return_value=repo / "nohome"):
            config = load_config(use_cache=False)
        assert config.page.section == "1"

    def test_invalid_yaml_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("page: [unclosed\n")
        config = load_config(path, use_cache=False)
        assert config.page.section == "1"

    def test_cache(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("page:\n  section: '3'\n")
        first = load_config(path)
        path.write_text("page:\n  section: '4'\n")
        assert load_config(path) is first
        clear_config_cache()
        assert load_config(path).page.section == "4"


class TestEnvStyle:
    """Test environment style parsing."""

    def test_parse_explicit(self):
        assert EnvStyle.parse("posix") is EnvStyle.POSIX
        assert EnvStyle.parse("Windows") is EnvStyle.WINDOWS

    def test_parse_auto_is_host(self):
        assert EnvStyle.parse("auto") is EnvStyle.host()

    def test_host_follows_platform(self):
        with patch("climan.core.config.sys.platform", "win32"):
            assert EnvStyle.host() is EnvStyle.WINDOWS
        with patch("climan.core.config.sys.platform", "linux"):
            assert EnvStyle.host() is EnvStyle.POSIX

    def test_parse_unknown(self):
        with pytest.raises(ValueError):
            EnvStyle.parse("dos")


class TestRenderSettings:
    """Test the clock/override abstraction."""

    def test_override_used(self):
        settings = RenderSettings(source_date_epoch="1700000000")
        assert settings.page_date() == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)

    def test_clock_used_without_override(self):
        fixed = datetime(2020, 5, 1, tzinfo=timezone.utc)
        assert RenderSettings(clock=lambda: fixed).page_date() is fixed

    @pytest.mark.parametrize("value", ["abc", "12.5", "", " 12", "1_000", "0x10"])
    def test_malformed_override(self, value):
        with pytest.raises(InvalidSourceDateEpoch) as exc_info:
            RenderSettings(source_date_epoch=value).page_date()
        assert exc_info.value.value == value

    def test_out_of_range_override(self):
        with pytest.raises(InvalidSourceDateEpoch):
            RenderSettings(source_date_epoch="9" * 30).page_date()

    def test_negative_override(self):
        assert RenderSettings(source_date_epoch="-86400").page_date().year == 1969

    def test_from_environ(self):
        settings = RenderSettings.from_environ({"SOURCE_DATE_EPOCH": "42"}, config=Config())
        assert settings.source_date_epoch == "42"
        assert settings.section == "1"

    def test_from_environ_empty_is_unset(self):
        settings = RenderSettings.from_environ({"SOURCE_DATE_EPOCH": ""}, config=Config())
        assert settings.source_date_epoch is None

    def test_from_environ_uses_config(self):
        config = Config.from_dict({"page": {"section": "7", "env_style": "windows"}})
        settings = RenderSettings.from_environ({}, config=config)
        assert settings.section == "7"
        assert settings.env_style is EnvStyle.WINDOWS

    def test_overrides_win_over_config(self):
        config = Config.from_dict({"page": {"section": "7", "env_style": "windows"}})
        settings = RenderSettings.from_environ(
            {}, config=config, section="3", env_style=EnvStyle.POSIX, default_usage=None
        )
        assert settings.section == "3"
        assert settings.env_style is EnvStyle.POSIX
        assert settings.default_usage == "[OPTIONS]"

    def test_unknown_override_rejected(self):
        with pytest.raises(TypeError, match="sectoin"):
            RenderSettings.from_environ({}, config=Config(), sectoin="8")


class TestFormatPageDate:
    """Test the .TH date format."""

    def test_day_not_padded(self):
        assert format_page_date(datetime(2006, 1, 2)) == "2 January 2006"

    def test_december(self):
        assert format_page_date(datetime(1999, 12, 31)) == "31 December 1999"
