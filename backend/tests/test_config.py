"""Tests for settings loading, YAML overrides and observability setup."""

import pytest
import yaml

from podstakes.config import Settings, get_settings
from podstakes.observability import initialize_logfire


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults(tmp_path):
    settings = Settings(data_dir=tmp_path)

    assert settings.stakes.stake_rate == 0.07
    assert settings.stakes.draw_split == 4
    assert settings.stakes.pod_size == 4
    assert settings.topdeck.base_url == "https://api.topdeck.gg/v2"
    assert settings.topdeck.max_retries == 1
    assert settings.server.port == 3000
    assert settings.data_dir.is_absolute()


def test_env_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("TOPDECK_API_KEY", "from-env")
    monkeypatch.setenv("SERVER__PORT", "8080")

    settings = Settings(data_dir=tmp_path)

    assert settings.topdeck_api_key == "from-env"
    assert settings.server.port == 8080


def test_yaml_sections_merge(tmp_path):
    (tmp_path / "config.yaml").write_text(
        yaml.safe_dump({"stakes": {"stake_rate": 0.1}, "server": {"host": "0.0.0.0"}})
    )
    settings = Settings(data_dir=tmp_path)

    settings.load_yaml_config()

    assert settings.stakes.stake_rate == 0.1
    assert settings.stakes.draw_split == 4
    assert settings.server.host == "0.0.0.0"


def test_missing_yaml_keeps_defaults(tmp_path):
    settings = Settings(data_dir=tmp_path)

    settings.load_yaml_config()

    assert settings.stakes.stake_rate == 0.07


def test_invalid_yaml_raises(tmp_path):
    (tmp_path / "config.yaml").write_text("stakes: [unclosed")
    settings = Settings(data_dir=tmp_path)

    with pytest.raises(yaml.YAMLError):
        settings.load_yaml_config()


def test_get_settings_is_cached(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(tmp_path))

    assert get_settings() is get_settings()


def test_logfire_skipped_without_token(tmp_path):
    assert initialize_logfire(Settings(data_dir=tmp_path, logfire_token="")) is False
