import pytest

from hungerzhub.config import AppConfig, get_config, set_config_for_test
from hungerzhub.data.backends.json_backend import JsonFileDataSource
from hungerzhub.wiring import build_sync_service


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for var in [
        "DATA_SOURCE", "API_BASE_URL", "API_KEY", "FRESHNESS_WINDOW_S",
        "RETRY_ATTEMPTS", "POLL_INTERVAL_S", "COUPONS",
    ]:
        monkeypatch.delenv(var, raising=False)


def test_defaults():
    config = AppConfig(_env_file=None)
    assert config.data_source == "json"
    assert config.freshness_window_s == 5.0
    assert config.retry_attempts == 3
    assert config.retry_backoff_s == 1.0
    assert config.request_timeout_s == 5.0
    assert config.poll_interval_s == 10.0
    assert config.coupons == {"PRINCE10": 10.0}


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATA_SOURCE", "http")
    monkeypatch.setenv("API_BASE_URL", "https://api.example.test")
    monkeypatch.setenv("RETRY_ATTEMPTS", "5")
    monkeypatch.setenv("COUPONS", '{"HUNGERZ15": 15}')
    config = AppConfig(_env_file=None)
    assert config.data_source == "http"
    assert config.retry_attempts == 5
    assert config.coupons == {"HUNGERZ15": 15.0}


def test_set_config_for_test_replaces_singleton():
    set_config_for_test(freshness_window_s=8.0)
    assert get_config().freshness_window_s == 8.0


def test_build_sync_service_from_config(tmp_path):
    set_config_for_test(
        data_dir=str(tmp_path),
        fallback_dir=str(tmp_path / "fallback"),
        storage_namespace="cafe",
        freshness_window_s=7.0,
        retry_attempts=2,
        poll_interval_s=3.0,
    )
    service = build_sync_service()
    assert isinstance(service.remote, JsonFileDataSource)
    assert service.store.namespace == "cafe"
    assert service.freshness_window_s == 7.0
    assert service.retry_policy.attempts == 2
    assert service._bus.interval_s == 3.0


def test_get_logger_keeps_host_sinks():
    from loguru import logger

    from hungerzhub.logging import AppLogger, get_logger

    messages = []
    sink_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        get_logger("first")
        get_logger("second").info("table 3 ordered")
    finally:
        logger.remove(sink_id)
    assert [m.strip() for m in messages] == ["table 3 ordered"]
    assert AppLogger._level == "DEBUG"


def test_logger_follows_level_change():
    from hungerzhub.logging import AppLogger, get_logger

    set_config_for_test(log_level="warning")
    get_logger("levels")
    assert AppLogger._level == "WARNING"
