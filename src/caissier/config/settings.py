"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, production.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Secrets (JWT key, database password) should come from environment
    variables, not from YAML files. An instance is handed to the DI
    container, which passes plain values into each component.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Caissier"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Database (from environment - REQUIRED in production)
    DATABASE_URL: str = Field(..., description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False)

    # Session tokens (from environment - REQUIRED in production)
    JWT_SECRET_KEY: str = Field(
        ...,
        min_length=32,
        description="HMAC key for access tokens",
    )
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=15, ge=1, le=1440)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default=7, ge=1, le=365)
    REFRESH_TOKEN_ROTATION: bool = Field(
        default=True,
        description="Replace the refresh token on every refresh",
    )

    # Password hashing (Argon2id)
    ARGON2_TIME_COST: int = Field(default=3, ge=1)
    ARGON2_MEMORY_COST: int = Field(
        default=65536,
        ge=8,
        description="Argon2 memory cost in KiB",
    )
    ARGON2_PARALLELISM: int = Field(default=4, ge=1)

    # Ethereum ledger
    ETH_RPC_URL: str = Field(
        default="http://127.0.0.1:7545",
        description="Ethereum JSON-RPC endpoint",
    )
    BLOCKCHAIN_QUERY_TIMEOUT: float = Field(
        default=15.0,
        gt=0,
        description="Total ledger query timeout in seconds",
    )
    BLOCKCHAIN_CONNECT_TIMEOUT: float = Field(
        default=3.0,
        gt=0,
        description="Ledger connection timeout in seconds",
    )
    RETRY_MAX_ATTEMPTS: int = Field(
        default=3,
        ge=1,
        description="Maximum retry attempts for transient ledger failures",
    )

    # Payments
    PAYMENT_CONFIRMATION_BLOCKS: int = Field(
        default=1,
        ge=1,
        description="Blocks (inclusive) required before a payment is confirmed",
    )
    DEFAULT_CURRENCY: str = Field(default="ETH", max_length=10)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Only the HMAC family is accepted for access tokens."""
        allowed = ["HS256", "HS384", "HS512"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid JWT_ALGORITHM. Must be one of: {allowed}")
        return v_upper

    @field_validator("ENV")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment name."""
        allowed = ["development", "test", "production"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"Invalid ENV. Must be one of: {allowed}")
        return v_lower


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    default_env_file, default_config_file = env_map.get(
        environment, (".env.production", "production.yaml")
    )
    if env_file is None:
        env_file = default_env_file
    if config_file is None:
        config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    merged_config = {}

    default_config_path = config_dir / "default.yaml"
    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    env_config_path = config_dir / config_file
    if env_config_path.exists():
        with open(env_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config.update(loaded)

    # Init kwargs outrank the environment in pydantic-settings, so drop
    # any YAML key that the environment already provides.
    merged_config = {
        key: value for key, value in merged_config.items() if key not in os.environ
    }
    merged_config.setdefault("ENV", environment)

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
