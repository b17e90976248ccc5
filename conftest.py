"""
Root conftest — every test starts keyless.

API key and config-path variables are removed, .env loading is switched
off so a developer's local key can't leak in, and the settings singleton
is reset.
"""
import pytest

_ISOLATED_ENV = ("GOOGLE_API_KEY", "GEMINI_API_KEY", "SHIM_CONFIG")


@pytest.fixture(autouse=True)
def _keyless_settings(monkeypatch):
    for var in _ISOLATED_ENV:
        monkeypatch.delenv(var, raising=False)

    import config.settings as settings_module

    no_dotenv = {**settings_module.Settings.model_config, "env_file": None}
    monkeypatch.setattr(settings_module.Settings, "model_config", no_dotenv)
    monkeypatch.setattr(settings_module, "_singleton", None)
