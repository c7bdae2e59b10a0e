"""Tests for environment-driven settings."""
import os

import pytest

from system_dashboard.config import Settings, get_settings


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    for name in ("HOST", "PORT", "LOG_LEVEL", "DISK_PATH", "CPU_INTERVAL"):
        monkeypatch.delenv(f"SYSTEM_DASHBOARD_{name}", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.mark.skipif(os.name == "nt", reason="default disk path differs on Windows")
def test_defaults():
    assert get_settings() == Settings()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("SYSTEM_DASHBOARD_HOST", "127.0.0.1")
    monkeypatch.setenv("SYSTEM_DASHBOARD_PORT", "8181")
    monkeypatch.setenv("SYSTEM_DASHBOARD_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SYSTEM_DASHBOARD_DISK_PATH", str(tmp_path))
    monkeypatch.setenv("SYSTEM_DASHBOARD_CPU_INTERVAL", "0.25")
    settings = get_settings()
    assert settings.host == "127.0.0.1"
    assert settings.port == 8181
    assert settings.log_level == "debug"
    assert settings.disk_path == str(tmp_path.resolve())
    assert settings.cpu_interval == 0.25


def test_settings_are_cached():
    assert get_settings() is get_settings()


def test_invalid_port_is_rejected(monkeypatch):
    monkeypatch.setenv("SYSTEM_DASHBOARD_PORT", "http")
    with pytest.raises(ValueError):
        get_settings()


def test_invalid_cpu_interval_is_rejected(monkeypatch):
    monkeypatch.setenv("SYSTEM_DASHBOARD_CPU_INTERVAL", "fast")
    with pytest.raises(ValueError):
        get_settings()


def test_negative_cpu_interval_is_rejected(monkeypatch):
    monkeypatch.setenv("SYSTEM_DASHBOARD_CPU_INTERVAL", "-1")
    with pytest.raises(ValueError, match="non-negative"):
        get_settings()


def test_zero_cpu_interval_is_allowed(monkeypatch):
    monkeypatch.setenv("SYSTEM_DASHBOARD_CPU_INTERVAL", "0")
    assert get_settings().cpu_interval == 0.0
