import pytest

from app.core import config
from app.core.config import load_settings

ENV_VARS = (
    "APP_TITLE",
    "ENV",
    "LOG_LEVEL",
    "CORS_ORIGINS",
    "STORAGE_BACKEND",
    "DATABASE_URL",
    "ADMIN_PASSWORD",
    "BCRYPT_ROUNDS",
    "UPCOMING_HORIZON_DAYS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of these tests
    monkeypatch.setattr(config, "load_dotenv", lambda: None)


def test_defaults():
    settings = load_settings()

    assert settings.app_title == "CRM API"
    assert settings.log_level == "INFO"
    assert settings.storage_backend == "memory"
    assert settings.database_url == "sqlite://"
    assert settings.admin_password == "password"
    assert settings.bcrypt_rounds == 12
    assert settings.upcoming_horizon_days == 7
    assert settings.cors_origins == ["http://localhost:3000", "http://localhost:5173"]


def test_values_are_read_from_env(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", " SQL ")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///crm.db")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "https://crm.example.com, ,https://admin.example.com")
    monkeypatch.setenv("UPCOMING_HORIZON_DAYS", "14")

    settings = load_settings()

    assert settings.storage_backend == "sql"
    assert settings.database_url == "sqlite:///crm.db"
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["https://crm.example.com", "https://admin.example.com"]
    assert settings.upcoming_horizon_days == 14


@pytest.mark.parametrize(
    "name, value",
    [
        ("STORAGE_BACKEND", "redis"),
        ("UPCOMING_HORIZON_DAYS", "a week"),
        ("UPCOMING_HORIZON_DAYS", "-1"),
        ("BCRYPT_ROUNDS", "twelve"),
    ],
)
def test_bad_values_fail_fast(monkeypatch, name, value):
    monkeypatch.setenv(name, value)

    with pytest.raises(RuntimeError, match=name):
        load_settings()


def test_empty_integer_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("BCRYPT_ROUNDS", "")

    assert load_settings().bcrypt_rounds == 12
