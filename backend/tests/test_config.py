import pytest
from pydantic import ValidationError

import config

REQUIRED = {
    "PORT": "3001",
    "DATABASE_URL": "sqlite://",
    "JWT_SECRET": "x" * 40,
    "FRONTEND_URL": "http://localhost:5173",
}


@pytest.fixture
def clean_env(monkeypatch):
    for key in list(REQUIRED) + ["ENVIRONMENT"]:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    for key, value in REQUIRED.items():
        clean_env.setenv(key, value)
    settings = config.Settings(_env_file=None)
    assert settings.PORT == 3001
    assert settings.JWT_ALGORITHM == "HS256"
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 7 * 24 * 60
    assert settings.is_production is False


def test_missing_required_variable(clean_env):
    for key, value in REQUIRED.items():
        if key != "JWT_SECRET":
            clean_env.setenv(key, value)
    with pytest.raises(ValidationError) as excinfo:
        config.Settings(_env_file=None)
    assert "JWT_SECRET" in str(excinfo.value)


def test_short_secret_rejected_in_production(clean_env):
    for key, value in REQUIRED.items():
        clean_env.setenv(key, value)
    clean_env.setenv("ENVIRONMENT", "production")
    clean_env.setenv("JWT_SECRET", "too-short")
    with pytest.raises(ValidationError):
        config.Settings(_env_file=None)


def test_startup_exits_with_status_one(clean_env):
    clean_env.setattr(config, "get_settings", lambda: config.Settings(_env_file=None))
    with pytest.raises(SystemExit) as excinfo:
        config.load_settings_or_exit()
    assert excinfo.value.code == 1


def test_postgres_scheme_is_normalised(clean_env):
    for key, value in REQUIRED.items():
        clean_env.setenv(key, value)
    clean_env.setenv("DATABASE_URL", "postgres://user:pw@db:5432/app")
    settings = config.Settings(_env_file=None)
    assert settings.sqlalchemy_url == "postgresql://user:pw@db:5432/app"
