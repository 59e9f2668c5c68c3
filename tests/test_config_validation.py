"""
Unit tests for configuration loading and validation

Tests cover:
- Schema defaults and boundary checks
- Case-insensitive log levels
- Merge order: default file, environment file, SPOTIHOOKS_* variables
- Malformed files raising ConfigurationError
"""
import json
import os

import pytest

from spotihooks.config import ConfigManager
from spotihooks.config_schema import SpotiHooksConfig, validate_config_dict
from spotihooks.errors import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for field_name in list(SpotiHooksConfig.model_fields) + ["ENV"]:
        monkeypatch.delenv(f"SPOTIHOOKS_{field_name.upper()}", raising=False)


def _write(path, payload):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload), encoding="utf-8")


class TestSchema:
    """Tests for the Pydantic schema"""

    def test_defaults(self):
        config = SpotiHooksConfig()
        assert config.player_name == "SpotiHooks Player"
        assert config.player_volume == 0.5
        assert config.http_timeout == (4.0, 15.0)

    def test_log_level_is_normalised(self):
        assert validate_config_dict({"log_level": "debug"}).log_level == "DEBUG"

    @pytest.mark.parametrize("overrides", [
        {"log_level": "LOUD"},
        {"player_volume": 1.5},
        {"http_max_workers": 0},
        {"http_read_timeout": 0.1},
        {"player_name": ""},
    ])
    def test_invalid_values_raise(self, overrides):
        with pytest.raises(ValueError):
            validate_config_dict(overrides)

    def test_unknown_keys_are_ignored(self):
        config = validate_config_dict({"legacy_setting": True})
        assert "legacy_setting" not in config.to_dict()


class TestConfigManager:
    """Tests for file + environment merging"""

    def test_missing_files_fall_back_to_defaults(self, tmp_path):
        config = ConfigManager(str(tmp_path), load_env_file=False).load_config()
        assert config.environment == "development"
        assert config.http_max_workers == 4

    def test_environment_file_overrides_default(self, tmp_path):
        _write(tmp_path / "config" / "default_config.json", {"http_max_workers": 2, "player_volume": 0.4})
        _write(tmp_path / "config" / "production.json", {"http_max_workers": 8})

        manager = ConfigManager(str(tmp_path), load_env_file=False)
        manager.set_environment("production")
        config = manager.load_config()

        assert config.environment == "production"
        assert config.http_max_workers == 8
        assert config.player_volume == 0.4
        assert manager.get_environment() == "production"
        assert manager.list_available_configs() == ["default_config", "production"]

    def test_env_variables_win(self, tmp_path, monkeypatch):
        _write(tmp_path / "config" / "default_config.json", {"player_name": "From File"})
        monkeypatch.setenv("SPOTIHOOKS_PLAYER_NAME", "From Env")
        monkeypatch.setenv("SPOTIHOOKS_JSON_LOGS", "true")

        config = ConfigManager(str(tmp_path), load_env_file=False).load_config()

        assert config.player_name == "From Env"
        assert config.json_logs is True

    def test_dotenv_file_is_loaded(self, tmp_path):
        (tmp_path / ".env").write_text("SPOTIHOOKS_HTTP_MAX_WORKERS=6\n", encoding="utf-8")

        try:
            config = ConfigManager(str(tmp_path)).load_config()
        finally:
            os.environ.pop("SPOTIHOOKS_HTTP_MAX_WORKERS", None)

        assert config.http_max_workers == 6

    def test_malformed_json_raises(self, tmp_path):
        path = tmp_path / "config" / "default_config.json"
        path.parent.mkdir(parents=True)
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            ConfigManager(str(tmp_path), load_env_file=False).load_config()

    def test_non_object_json_raises(self, tmp_path):
        _write(tmp_path / "config" / "default_config.json", [1, 2, 3])
        with pytest.raises(ConfigurationError):
            ConfigManager(str(tmp_path), load_env_file=False).load_config()

    def test_schema_violation_raises_configuration_error(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SPOTIHOOKS_PLAYER_VOLUME", "3")
        with pytest.raises(ConfigurationError):
            ConfigManager(str(tmp_path), load_env_file=False).load_config()
