import pytest

from carrental.config import DEFAULT_DATA_PATH, Settings, load_settings


def test_defaults(monkeypatch):
    for name in ("DATA_PATH", "JWT_SECRET", "SECRET_KEY", "TIMEZONE", "JWT_EXPIRES_HOURS", "SEED_DEFAULTS"):
        monkeypatch.delenv(name, raising=False)
    s = load_settings()
    assert s.data_path == str(DEFAULT_DATA_PATH)
    assert s.timezone == "Europe/Rome"
    assert s.jwt_expires_hours == 24
    assert s.seed_defaults is True
    assert s.jwt_secret == s.secret_key


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DATA_PATH", "")
    monkeypatch.setenv("JWT_SECRET", "s3cret")
    monkeypatch.setenv("TIMEZONE", "Pacific/Auckland")
    monkeypatch.setenv("JWT_EXPIRES_HOURS", "2")
    monkeypatch.setenv("SEED_DEFAULTS", "no")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    s = load_settings()
    assert s.data_path is None
    assert s.jwt_secret == "s3cret"
    assert s.timezone == "Pacific/Auckland"
    assert s.jwt_expires_hours == 2
    assert s.seed_defaults is False
    assert s.log_level == "DEBUG"
    assert "s3cret" not in repr(s)


def test_bad_values_fail_at_load(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRES_HOURS", "soon")
    with pytest.raises(ValueError):
        load_settings()
    with pytest.raises(ValueError):
        Settings(timezone="Mars/Olympus")
