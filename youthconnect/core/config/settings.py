"""
Settings for YouthConnect, grouped by concern.

Every group is a pydantic-settings class with its own environment prefix;
``YouthConnectConfig`` aggregates them and is cached by ``get_config``.
"""

import secrets
from enum import Enum
from typing import List, Optional, Union

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOCAL_HOSTS = ("localhost", "127.0.0.1")

# Frontend and API dev servers
DEV_ORIGINS = [
    f"http://{host}:{port}" for port in (3000, 8000) for host in LOCAL_HOSTS
]


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


def generate_secure_secret() -> str:
    """Generate a cryptographically secure secret key for development."""
    return secrets.token_urlsafe(32)


class LoggingConfig(BaseSettings):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level")
    json_output: bool = Field(default=True, description="Output logs in JSON format")
    log_file: Optional[str] = Field(default=None, description="Log file path")

    model_config = SettingsConfigDict(env_prefix="LOG_")


class DatabaseConfig(BaseSettings):
    """Configuration for database connection."""

    url: Optional[str] = Field(
        default=None, description="Full async database URL, overrides the parts below"
    )
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=5432, description="Database port")
    username: str = Field(default="postgres", description="Database username")
    password: str = Field(default="", description="Database password")
    database: str = Field(default="youthconnect", description="Database name")
    echo: bool = Field(default=False, description="Echo SQL statements")
    create_tables_on_startup: bool = Field(
        default=False, description="Create missing tables when the app starts"
    )

    model_config = SettingsConfigDict(env_prefix="DB_")

    @property
    def async_url(self) -> str:
        """``DB_URL`` when given, else an asyncpg URL built from the parts."""
        if self.url:
            return self.url
        credentials = f"{self.username}:{self.password}" if self.password else self.username
        return f"postgresql+asyncpg://{credentials}@{self.host}:{self.port}/{self.database}"


class SecurityConfig(BaseSettings):
    """Configuration for authentication and session cookies."""

    secret_key: str = Field(
        default_factory=generate_secure_secret,
        description="Secret key for JWT session tokens (required in production)",
    )
    jwt_lifetime_seconds: int = Field(
        default=3600, description="JWT lifetime in seconds"
    )
    cookie_name: str = Field(default="youthconnect_session", description="Cookie name")
    cookie_secure: bool = Field(default=True, description="Send cookie over HTTPS only")
    auth_rate_limit: int = Field(
        default=10, description="Auth requests allowed per window and client"
    )
    auth_rate_window_seconds: int = Field(
        default=60, description="Auth rate limit window in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    @field_validator("secret_key")
    @classmethod
    def validate_secret_key(cls, v: str) -> str:
        """Validate secret key meets security requirements."""
        if not v:
            raise ValueError("Secret key is required")

        if len(v) < 32:
            raise ValueError("Secret key must be at least 32 characters long")

        weak_patterns = ["change-me", "changeme", "password", "123456"]
        if any(pattern in v.lower() for pattern in weak_patterns):
            raise ValueError("Secret key contains weak patterns and is not secure")

        return v


class APIConfig(BaseSettings):
    """Configuration for the API server."""

    host: str = Field(default="127.0.0.1", description="API server host")
    port: int = Field(default=8000, description="API server port")
    reload: bool = Field(default=True, description="Enable auto-reload in development")
    cors_origins: List[str] = Field(
        default_factory=list, description="Allowed CORS origins"
    )
    cors_credentials: bool = Field(default=True, description="Allow CORS credentials")
    cors_max_age: int = Field(
        default=600, description="CORS preflight cache time in seconds"
    )

    model_config = SettingsConfigDict(env_prefix="API_")

    def cors_origins_resolved(self, environment: str = "development") -> List[str]:
        """Configured origins, else the local dev servers outside staging and production."""
        if self.cors_origins:
            return list(self.cors_origins)
        if environment in (Environment.DEVELOPMENT.value, Environment.TESTING.value):
            return list(DEV_ORIGINS)
        return []

    def cors_methods_resolved(self, environment: str = "development") -> List[str]:
        # The API is read-only apart from presigned upload requests
        if environment == Environment.PRODUCTION.value:
            return ["GET", "POST", "OPTIONS"]
        return ["*"]


class StorageConfig(BaseSettings):
    """Configuration for the S3-compatible object store (MinIO)."""

    endpoint: str = Field(default="localhost", description="Object store host")
    port: int = Field(default=9000, description="Object store port")
    access_key: str = Field(default="minioadmin", description="Access key")
    secret_key: str = Field(default="minioadmin", description="Secret key")
    region: str = Field(default="us-east-1", description="Signing region")
    use_ssl: bool = Field(default=False, description="Use HTTPS for the endpoint")
    public_url: Optional[str] = Field(
        default=None, description="Public base URL used to build object URLs"
    )
    initialize_on_startup: bool = Field(
        default=False, description="Create buckets and policies on startup"
    )
    max_upload_size: int = Field(
        default=50 * 1024 * 1024, description="Largest object accepted in bytes"
    )
    allowed_content_types: List[str] = Field(
        default_factory=lambda: [
            "image/jpeg",
            "image/png",
            "image/gif",
            "image/webp",
            "video/mp4",
            "video/webm",
            "audio/mpeg",
            "audio/wav",
            "application/pdf",
            "application/msword",
            "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            "application/vnd.ms-excel",
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            "application/vnd.ms-powerpoint",
            "application/vnd.openxmlformats-officedocument.presentationml.presentation",
            "text/plain",
            "text/csv",
        ],
        description="Content types clients may request upload URLs for",
    )

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    @property
    def endpoint_url(self) -> str:
        """Get the endpoint URL used by the S3 client."""
        scheme = "https" if self.use_ssl else "http"
        return f"{scheme}://{self.endpoint}:{self.port}"

    @property
    def public_base_url(self) -> str:
        """Get the base URL that public object links are built on."""
        return (self.public_url or f"http://{self.endpoint}:{self.port}").rstrip("/")


class RecommendationConfig(BaseSettings):
    """Configuration for recommendation endpoints."""

    default_limit: int = Field(default=10, description="Default result count")
    max_limit: int = Field(default=50, description="Largest result count allowed")
    trending_window_days: int = Field(
        default=30, description="Window for trending courses and startups"
    )
    min_job_score: float = Field(
        default=20.0, description="Job matches at or below this score are dropped"
    )

    model_config = SettingsConfigDict(env_prefix="RECOMMENDATION_")


class YouthConnectConfig(BaseSettings):
    """
    Root settings object.

    Each concern reads its own prefix (``DB_HOST``, ``STORAGE_ENDPOINT``...);
    nested values can also be given as ``DATABASE__HOST`` style variables.
    Production settings are checked after loading: no debug mode and an
    explicit list of HTTPS, non-local CORS origins.
    """

    environment: Environment = Field(default=Environment.DEVELOPMENT)
    debug: bool = Field(default=False)

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    recommendation: RecommendationConfig = Field(default_factory=RecommendationConfig)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: Union[str, Environment]) -> Environment:
        if isinstance(v, str):
            try:
                return Environment(v.strip().lower())
            except ValueError:
                allowed = ", ".join(e.value for e in Environment)
                raise ValueError(f"Invalid environment: {v}. Must be one of: {allowed}")
        return v

    @model_validator(mode="after")
    def check_production(self) -> "YouthConnectConfig":
        if self.environment != Environment.PRODUCTION:
            return self

        if self.debug:
            raise ValueError("Debug mode cannot be enabled in production")

        origins = self.api.cors_origins
        if not origins:
            raise ValueError(
                "Production environment must specify allowed CORS origins "
                "(API_CORS_ORIGINS)"
            )
        if "*" in origins:
            raise ValueError("Production environment cannot allow all CORS origins (*)")
        for origin in origins:
            if not origin.startswith("https://"):
                raise ValueError(f"Production CORS origin must use HTTPS: {origin}")
            if any(host in origin for host in LOCAL_HOSTS):
                raise ValueError(
                    f"Production environment cannot allow localhost origins: {origin}"
                )
        return self

    @property
    def cors_origins_resolved(self) -> List[str]:
        return self.api.cors_origins_resolved(self.environment.value)

    @property
    def cors_methods_resolved(self) -> List[str]:
        return self.api.cors_methods_resolved(self.environment.value)

    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

    def is_testing(self) -> bool:
        return self.environment == Environment.TESTING


_config: Optional[YouthConnectConfig] = None


def get_config() -> YouthConnectConfig:
    """Process-wide settings, loaded from the environment on first use."""
    global _config
    if _config is None:
        _config = YouthConnectConfig()
    return _config


def set_config(config: YouthConnectConfig) -> None:
    global _config
    _config = config


def reload_config() -> YouthConnectConfig:
    """Discard the cached settings and read the environment again."""
    global _config
    _config = YouthConnectConfig()
    return _config
