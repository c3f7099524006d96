"""Tests for application configuration."""
import pytest
from pydantic import ValidationError

from core.config import Settings

REQUIRED = {"database_url": "postgresql+asyncpg://test", "JWT_SECRET_KEY": "s3cret"}


class TestCorsOriginsParsing:
    """Tests for CORS origins parsing from environment variables."""

    def test_parse_multiple_origins_comma_separated(self) -> None:
        settings = Settings(
            _env_file=None, CORS_ORIGINS="http://localhost:5173,https://example.com", **REQUIRED,
        )
        assert settings.cors_origins == ["http://localhost:5173", "https://example.com"]

    def test_parse_origins_with_whitespace_and_trailing_comma(self) -> None:
        settings = Settings(
            _env_file=None, CORS_ORIGINS="  http://a.test , http://b.test ,", **REQUIRED,
        )
        assert settings.cors_origins == ["http://a.test", "http://b.test"]

    def test_parse_empty_string(self) -> None:
        settings = Settings(_env_file=None, CORS_ORIGINS="", **REQUIRED)
        assert settings.cors_origins == []


class TestJwtSecret:
    """The signing secret is mandatory."""

    def test__blank_secret__rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, database_url="sqlite+aiosqlite://", JWT_SECRET_KEY="   ")

    def test__missing_secret__rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JWT_SECRET_KEY", raising=False)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, database_url="sqlite+aiosqlite://")

    def test__token_lifetime_defaults_to_one_hour(
        self, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.delenv("JWT_EXPIRES_SECONDS", raising=False)
        settings = Settings(_env_file=None, **REQUIRED)
        assert settings.jwt_expires_seconds == 3600
        assert settings.jwt_algorithm == "HS256"


class TestLogLevel:
    def test__log_level__normalized(self) -> None:
        settings = Settings(_env_file=None, LOG_LEVEL=" debug ", **REQUIRED)
        assert settings.log_level == "DEBUG"

    def test__log_level__unknown_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="chatty", **REQUIRED)


class TestDatabaseBackend:
    def test__sqlite_detected(self) -> None:
        settings = Settings(
            _env_file=None, database_url="sqlite+aiosqlite://", JWT_SECRET_KEY="s3cret",
        )
        assert settings.database_is_sqlite

    def test__postgres_is_not_sqlite(self) -> None:
        assert not Settings(_env_file=None, **REQUIRED).database_is_sqlite

    def test__bcrypt_rounds_bounds(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, BCRYPT_ROUNDS="3", **REQUIRED)
