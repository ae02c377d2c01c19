import os

import pytest

from hostwatch import config
from hostwatch.config import ConfigError, Settings, get_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "PUSHPLUS_TOKEN",
        "PUSHPLUS_ENDPOINT",
        "MEMORY_THRESHOLD_PERCENT",
        "DISK_THRESHOLD_PERCENT",
        "CPU_LOAD_FACTOR",
        "CHECK_INTERVAL_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_from_env_uses_defaults(monkeypatch):
    monkeypatch.setenv("PUSHPLUS_TOKEN", "abc123")

    settings = Settings.from_env()
    assert settings.pushplus_token == "abc123"
    assert settings.pushplus_endpoint == "https://www.pushplus.plus/send"
    assert settings.memory_threshold_percent == 70.0
    assert settings.disk_threshold_percent == 80.0
    assert settings.cpu_load_factor == 2.0
    assert settings.check_interval_seconds == 600.0


def test_settings_from_env_parses_thresholds(monkeypatch):
    monkeypatch.setenv("PUSHPLUS_TOKEN", "abc123")
    monkeypatch.setenv("MEMORY_THRESHOLD_PERCENT", "50")
    monkeypatch.setenv("DISK_THRESHOLD_PERCENT", "90.5")
    monkeypatch.setenv("CPU_LOAD_FACTOR", "1.5")
    monkeypatch.setenv("CHECK_INTERVAL_SECONDS", "30")

    settings = Settings.from_env()
    assert settings.memory_threshold_percent == 50.0
    assert settings.disk_threshold_percent == 90.5
    assert settings.cpu_load_factor == 1.5
    assert settings.check_interval_seconds == 30.0


@pytest.mark.parametrize("token", [None, "", "   "])
def test_missing_token_is_fatal(monkeypatch, token):
    if token is not None:
        monkeypatch.setenv("PUSHPLUS_TOKEN", token)

    with pytest.raises(ConfigError, match="PUSHPLUS_TOKEN is not set"):
        Settings.from_env()


def test_invalid_threshold_raises_config_error(monkeypatch):
    monkeypatch.setenv("PUSHPLUS_TOKEN", "abc123")
    monkeypatch.setenv("MEMORY_THRESHOLD_PERCENT", "lots")

    with pytest.raises(ConfigError, match="Invalid settings"):
        Settings.from_env()


def test_get_settings_is_cached(monkeypatch):
    monkeypatch.setenv("PUSHPLUS_TOKEN", "abc123")
    s1 = get_settings()
    s2 = get_settings()
    assert s1 is s2
    assert s1.pushplus_token == "abc123"


def test_load_env_file_does_not_override(monkeypatch, tmp_path, request):
    request.addfinalizer(lambda: os.environ.pop("CPU_LOAD_FACTOR", None))
    (tmp_path / ".env").write_text("PUSHPLUS_TOKEN=from-file\nCPU_LOAD_FACTOR=3\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PUSHPLUS_TOKEN", "from-env")

    path = config.load_env_file()
    assert path is not None
    assert os.path.samefile(path, tmp_path / ".env")

    settings = Settings.from_env()
    assert settings.pushplus_token == "from-env"
    assert settings.cpu_load_factor == 3.0


def test_load_env_file_missing_is_not_an_error(monkeypatch):
    monkeypatch.setattr(config, "find_dotenv", lambda usecwd: "")

    assert config.load_env_file() is None
