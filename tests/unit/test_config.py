"""
tests/unit/test_config.py — Settings Unit Tests

The root conftest strips API key env vars and disables .env loading, so
every test starts from a keyless environment.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

import config.settings as settings_module
from config.settings import ConfigError, Settings, get_settings, load_settings


class TestDefaults:
    def test_defaults(self):
        s = Settings()
        assert s.google_api_key is None
        assert s.agent.max_history_pairs == 5
        assert s.llm.model == "gemini-1.5-pro"
        assert s.llm.timeout_seconds == 30.0
        assert s.tools.web_search.live is False
        assert s.logging.level == "INFO"

    def test_base_url_trailing_slash_stripped(self):
        s = Settings(llm={"base_url": "https://example.test/v1/"})
        assert s.llm.base_url == "https://example.test/v1"


class TestApiKey:
    def test_google_api_key_env(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "g-key")
        assert Settings().google_api_key == "g-key"

    def test_gemini_api_key_alias(self, monkeypatch):
        monkeypatch.setenv("GEMINI_API_KEY", "gm-key")
        assert Settings().google_api_key == "gm-key"

    def test_blank_key_is_missing(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "   ")
        assert Settings().google_api_key is None


class TestValidation:
    def test_missing_key_fails_validate_all(self):
        with pytest.raises(ConfigError) as exc_info:
            Settings().validate_all()
        assert "GOOGLE_API_KEY" in str(exc_info.value)
        assert "makersuite.google.com" in str(exc_info.value)

    def test_valid_settings_pass(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "k")
        Settings().validate_all()

    def test_bad_base_url_reported(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_API_KEY", "k")
        with pytest.raises(ConfigError, match="base_url"):
            Settings(llm={"base_url": "ftp://nope"}).validate_all()

    def test_all_problems_listed(self):
        with pytest.raises(ConfigError) as exc_info:
            Settings(llm={"model": " ", "base_url": "nope"}).validate_all()
        assert "3 configuration problem(s)" in str(exc_info.value)

    @pytest.mark.parametrize("overrides", [
        {"logging": {"level": "VERBOSE"}},
        {"llm": {"timeout_seconds": 0}},
        {"agent": {"max_history_pairs": 0}},
        {"tools": {"web_search": {"max_results": 50}}},
    ])
    def test_field_validators(self, overrides):
        with pytest.raises(ValidationError):
            Settings(**overrides)

    def test_log_level_normalised(self):
        assert Settings(logging={"level": "debug"}).logging.level == "DEBUG"


class TestLoader:
    def test_load_from_yaml(self, tmp_path):
        cfg = tmp_path / "config.yaml"
        cfg.write_text(
            "agent:\n  max_history_pairs: 3\n"
            "llm:\n  model: gemini-pro\n"
            "unknown_section:\n  x: 1\n",
            encoding="utf-8",
        )
        s = load_settings(cfg)
        assert s.agent.max_history_pairs == 3
        assert s.llm.model == "gemini-pro"
        assert get_settings() is s

    def test_missing_file_gives_defaults(self, tmp_path):
        s = load_settings(tmp_path / "absent.yaml")
        assert s.llm.model == "gemini-1.5-pro"

    def test_empty_file_gives_defaults(self, tmp_path):
        cfg = tmp_path / "empty.yaml"
        cfg.write_text("", encoding="utf-8")
        assert load_settings(cfg).agent.max_history_pairs == 5

    def test_shim_config_env_var(self, tmp_path, monkeypatch):
        cfg = tmp_path / "alt.yaml"
        cfg.write_text("llm:\n  timeout_seconds: 12\n", encoding="utf-8")
        monkeypatch.setenv("SHIM_CONFIG", str(cfg))
        assert load_settings().llm.timeout_seconds == 12.0

    def test_explicit_path_beats_env(self, tmp_path, monkeypatch):
        env_cfg = tmp_path / "env.yaml"
        env_cfg.write_text("llm:\n  model: from-env\n", encoding="utf-8")
        arg_cfg = tmp_path / "arg.yaml"
        arg_cfg.write_text("llm:\n  model: from-arg\n", encoding="utf-8")
        monkeypatch.setenv("SHIM_CONFIG", str(env_cfg))
        assert load_settings(arg_cfg).llm.model == "from-arg"

    def test_get_settings_caches(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SHIM_CONFIG", str(tmp_path / "none.yaml"))
        assert settings_module._singleton is None
        first = get_settings()
        assert get_settings() is first

    def test_non_mapping_yaml_rejected(self, tmp_path):
        cfg = tmp_path / "list.yaml"
        cfg.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(cfg)

    def test_logging_kwargs(self):
        kwargs = Settings(logging={"max_file_size_mb": 2}).logging_kwargs()
        assert kwargs["max_bytes"] == 2 * 1024 * 1024
        assert kwargs["level"] == "INFO"
