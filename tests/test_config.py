"""
Tests for configuration module.
"""
import pytest

from location_api.core.config import Settings, normalize_database_url


class TestSettings:
    """Test the Settings configuration class."""

    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch):
        for name in ("DATABASE_URL", "POSTGRES_URL", "NEON_DATABASE_URL", "CORS_ORIGINS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

    def test_default_settings(self):
        settings = Settings(_env_file=None)

        assert settings.API_PREFIX == "/api"
        assert settings.ADMIN_PREFIX == "/admin"
        assert settings.DATABASE_URL == "sqlite+aiosqlite:///./locations.db"
        assert settings.CORS_ORIGINS == ["*"]
        assert settings.LOG_LEVEL == "INFO"

    def test_settings_from_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ORIGINS", "http://a.example, http://b.example")

        settings = Settings(_env_file=None)

        assert settings.PORT == 8080
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.CORS_ORIGINS == ["http://a.example", "http://b.example"]

    def test_cors_origins_json_array(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", '["http://a.example"]')
        assert Settings(_env_file=None).CORS_ORIGINS == ["http://a.example"]

    def test_env_file_wildcard_origins(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("CORS_ORIGINS=*\nLOG_LEVEL=warning\n")

        settings = Settings(_env_file=str(env_file))

        assert settings.CORS_ORIGINS == ["*"]
        assert settings.LOG_LEVEL == "WARNING"

    def test_env_file_comma_separated_origins(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("CORS_ORIGINS=http://a.example,http://b.example\n")

        assert Settings(_env_file=str(env_file)).CORS_ORIGINS == ["http://a.example", "http://b.example"]

    def test_invalid_log_level(self):
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            Settings(_env_file=None, LOG_LEVEL="chatty")

    def test_cloud_url_takes_priority(self):
        settings = Settings(
            _env_file=None,
            POSTGRES_URL="postgres://u:p@db.example:5432/locations",
            NEON_DATABASE_URL="postgresql://u:p@ep-1.neon.tech/locations"
        )
        assert settings.DATABASE_URL == "postgresql+asyncpg://u:p@ep-1.neon.tech/locations?sslmode=require"


@pytest.mark.parametrize("url,expected", [
    ("sqlite:///./locations.db", "sqlite+aiosqlite:///./locations.db"),
    ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
    ("postgres://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
    ("postgresql://u:p@h/db", "postgresql+asyncpg://u:p@h/db"),
    ("postgresql://u:p@h.neon.tech/db?x=1", "postgresql+asyncpg://u:p@h.neon.tech/db?x=1&sslmode=require"),
])
def test_normalize_database_url(url, expected):
    assert normalize_database_url(url) == expected
