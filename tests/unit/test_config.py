"""
Test cases for environment-aware configuration.

This module tests CORS resolution per environment, the production safety
checks and the derived connection URLs.
"""

import pytest

from youthconnect.core.config import (
    APIConfig,
    DatabaseConfig,
    Environment,
    SecurityConfig,
    StorageConfig,
    YouthConnectConfig,
    get_config,
    reload_config,
    set_config,
)
from youthconnect.core.config.settings import generate_secure_secret


class TestCORSConfiguration:
    """Test CORS properties."""

    def test_cors_origins_development(self):
        """Test CORS origins for development environment."""
        config = YouthConnectConfig(environment=Environment.DEVELOPMENT)

        assert config.cors_origins_resolved == [
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]

    def test_cors_origins_staging(self):
        """Test that staging uses only the configured origins."""
        config = YouthConnectConfig(
            environment=Environment.STAGING,
            api=APIConfig(cors_origins=["https://staging.youthconnect.bo"]),
        )
        assert config.cors_origins_resolved == ["https://staging.youthconnect.bo"]

    def test_cors_origins_staging_default(self):
        config = YouthConnectConfig(environment=Environment.STAGING)
        assert config.cors_origins_resolved == []

    def test_cors_origins_custom(self):
        """Test custom CORS origins override defaults."""
        config = APIConfig(cors_origins=["https://custom.example.com"])
        assert config.cors_origins_resolved("development") == ["https://custom.example.com"]

    def test_cors_methods(self):
        """Test CORS methods per environment."""
        development = YouthConnectConfig(environment=Environment.DEVELOPMENT)
        production = YouthConnectConfig(
            environment=Environment.PRODUCTION,
            api=APIConfig(cors_origins=["https://youthconnect.bo"]),
        )

        assert development.cors_methods_resolved == ["*"]
        assert production.cors_methods_resolved == ["GET", "POST", "OPTIONS"]

    @pytest.mark.parametrize(
        "origins, message",
        [
            ([], "must specify allowed CORS origins"),
            (["*"], "cannot allow all CORS origins"),
            (["http://youthconnect.bo"], "must use HTTPS"),
            (["https://localhost:3000"], "cannot allow localhost"),
        ],
    )
    def test_production_cors_validation(self, origins, message):
        """Test that unsafe production CORS settings are rejected."""
        with pytest.raises(ValueError, match=message):
            YouthConnectConfig(
                environment=Environment.PRODUCTION,
                api=APIConfig(cors_origins=origins),
            )


class TestEnvironment:
    """Test environment handling."""

    def test_environment_from_string(self):
        config = YouthConnectConfig(environment="Staging")
        assert config.environment == Environment.STAGING
        assert not config.is_production()

    def test_invalid_environment(self):
        with pytest.raises(ValueError, match="Invalid environment"):
            YouthConnectConfig(environment="moon")

    def test_debug_not_allowed_in_production(self):
        with pytest.raises(ValueError, match="Debug mode"):
            YouthConnectConfig(
                environment=Environment.PRODUCTION,
                debug=True,
                api=APIConfig(cors_origins=["https://youthconnect.bo"]),
            )


class TestSecurityConfig:
    """Test secret key validation."""

    def test_generated_secret_is_valid(self):
        secret = generate_secure_secret()
        assert SecurityConfig(secret_key=secret).secret_key == secret

    def test_short_secret(self):
        with pytest.raises(ValueError, match="at least 32 characters"):
            SecurityConfig(secret_key="short")

    def test_weak_secret(self):
        with pytest.raises(ValueError, match="weak patterns"):
            SecurityConfig(secret_key="please-change-me-before-deploying-this-app")


class TestConnectionURLs:
    """Test derived database and object store URLs."""

    def test_database_url_from_parts(self):
        config = DatabaseConfig(
            url=None, host="db", port=5433, username="yc", password="pw", database="yc"
        )
        assert config.async_url == "postgresql+asyncpg://yc:pw@db:5433/yc"

    def test_database_url_override(self):
        config = DatabaseConfig(url="sqlite+aiosqlite:///:memory:")
        assert config.async_url == "sqlite+aiosqlite:///:memory:"

    def test_storage_urls(self):
        config = StorageConfig(endpoint="minio", port=9000, use_ssl=True, public_url=None)

        assert config.endpoint_url == "https://minio:9000"
        assert config.public_base_url == "http://minio:9000"

    def test_storage_public_url_trailing_slash(self):
        config = StorageConfig(public_url="https://cdn.youthconnect.bo/")
        assert config.public_base_url == "https://cdn.youthconnect.bo"


class TestConfigCache:
    """Test the process-wide settings cache."""

    @pytest.fixture(autouse=True)
    def restore(self):
        original = get_config()
        yield
        set_config(original)

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_set_config(self):
        config = YouthConnectConfig(environment=Environment.STAGING)
        set_config(config)
        assert get_config() is config

    def test_reload_reads_environment(self, monkeypatch):
        monkeypatch.setenv("RECOMMENDATION_DEFAULT_LIMIT", "7")

        config = reload_config()

        assert config.recommendation.default_limit == 7
        assert get_config() is config
