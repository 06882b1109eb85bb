"""
Configuration package for YouthConnect.

This package provides centralized configuration management for the API,
database, object storage, recommendations and logging.
"""

from .settings import (
    APIConfig,
    DatabaseConfig,
    Environment,
    LoggingConfig,
    RecommendationConfig,
    SecurityConfig,
    StorageConfig,
    YouthConnectConfig,
    get_config,
    reload_config,
    set_config,
)

__all__ = [
    # Main configuration classes
    "YouthConnectConfig",
    "Environment",
    # Component configurations
    "APIConfig",
    "DatabaseConfig",
    "LoggingConfig",
    "RecommendationConfig",
    "SecurityConfig",
    "StorageConfig",
    # Configuration functions
    "get_config",
    "reload_config",
    "set_config",
]
