"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings


class SessionConfig(BaseSettings):
    """Import session store configuration."""

    model_config = {"env_prefix": "HOURS_IMPORT_SESSION_"}

    backend: Literal["memory", "redis"] = "memory"
    ttl_seconds: int = 30 * 60
    key_prefix: str = "hours-import:session:"


class RedisConfig(BaseSettings):
    """Redis connection used by the redis session backend."""

    model_config = {"env_prefix": "HOURS_IMPORT_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0


class ProvisioningConfig(BaseSettings):
    """Defaults for directory entries auto-created at apply time."""

    model_config = {"env_prefix": "HOURS_IMPORT_PROVISIONING_"}

    email_domain: str = "placeholder.local"
    placeholder_last_name: str = "-"
    password_length: int = 16


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "HOURS_IMPORT_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"

    session: SessionConfig = SessionConfig()
    redis: RedisConfig = RedisConfig()
    provisioning: ProvisioningConfig = ProvisioningConfig()
