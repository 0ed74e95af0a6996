import pytest

from ecotrack.config.settings import get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    # get_settings() is cached per process; env-based tests need a clean slate.
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_packaged_defaults():
    settings = get_settings()
    assert settings.app.name == "EcoTrack"
    assert settings.store.seed_path is None
    assert settings.recycling.max_limit is None
    assert settings.scans.recent_limit_default == 10


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ECOTRACK_LOG_LEVEL", "debug")
    monkeypatch.setenv("ECOTRACK_MAX_LIMIT", "3")
    monkeypatch.setenv("ECOTRACK_SEED_PATH", "data/custom_seed.json")

    settings = get_settings()
    assert settings.app.log_level == "debug"
    assert settings.recycling.max_limit == 3
    assert settings.store.seed_path == "data/custom_seed.json"


def test_external_config_file_replaces_defaults(monkeypatch, tmp_path):
    config = tmp_path / "ecotrack.yaml"
    config.write_text("app:\n  name: EcoTrack Staging\nscans:\n  recent_limit_default: 3\n", encoding="utf-8")
    monkeypatch.setenv("ECOTRACK_CONFIG_PATH", str(config))

    settings = get_settings()
    assert settings.app.name == "EcoTrack Staging"
    assert settings.scans.recent_limit_default == 3
    assert settings.recycling.max_limit is None


def test_invalid_yaml_root_is_rejected(monkeypatch, tmp_path):
    config = tmp_path / "broken.yaml"
    config.write_text("- just\n- a list\n", encoding="utf-8")
    monkeypatch.setenv("ECOTRACK_CONFIG_PATH", str(config))

    with pytest.raises(ValueError, match="expected a mapping"):
        get_settings()
