"""Harness settings using pydantic-settings.

Settings are loaded from environment variables with defaults matching a
local development deployment of the platform services.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BrokerSettings(BaseSettings):
    """Message broker settings.

    Environment variables:
        HARNESS_BROKER_KIND: "memory" for the in-process broker, "kafka" for Kafka
        HARNESS_BROKER_BOOTSTRAP_SERVERS: Kafka bootstrap servers (default: localhost:9092)
        HARNESS_BROKER_GROUP_ID: Consumer group (default: tenant-event-harness)
        HARNESS_BROKER_AUTO_OFFSET_RESET: "latest" or "earliest" (default: latest)
        HARNESS_BROKER_MAX_CONCURRENT_HANDLERS: In-flight handler limit (default: 8)
    """

    model_config = SettingsConfigDict(
        env_prefix="HARNESS_BROKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    kind: Literal["memory", "kafka"] = Field(
        default="memory", description="Message source implementation"
    )
    bootstrap_servers: str = Field(
        default="localhost:9092", description="Kafka bootstrap servers"
    )
    group_id: str = Field(
        default="tenant-event-harness", description="Kafka consumer group"
    )
    auto_offset_reset: Literal["latest", "earliest"] = Field(
        default="latest", description="Where a new consumer group starts reading"
    )
    max_concurrent_handlers: int = Field(
        default=8,
        description="Maximum handlers running at the same time",
        ge=1,
        le=256,
    )


class SyncUserSettings(BaseSettings):
    """Credentials of the sync service account used for read-back calls.

    Environment variables:
        HARNESS_SYNC_USER_IDENTIFIER: Account identifier (default: sync-user)
        HARNESS_SYNC_USER_PASSWORD: Account password
    """

    model_config = SettingsConfigDict(
        env_prefix="HARNESS_SYNC_USER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    identifier: str = Field(default="sync-user", description="Sync account identifier")
    password: SecretStr = Field(
        default=SecretStr(""),
        description="Sync account password",
    )

    @field_validator("identifier")
    @classmethod
    def validate_identifier(cls, value: str) -> str:
        """Reject blank identifiers."""
        if not value.strip():
            raise ValueError("identifier must not be blank")
        return value


class ServiceSettings(BaseSettings):
    """Base URLs of the platform services the harness reads back from.

    Environment variables:
        HARNESS_SERVICES_IDENTITY_URL
        HARNESS_SERVICES_ACCOUNTING_URL
        HARNESS_SERVICES_CUSTOMER_URL
        HARNESS_SERVICES_ORGANIZATION_URL
        HARNESS_SERVICES_PORTFOLIO_URL
        HARNESS_SERVICES_CHEQUES_URL
        HARNESS_SERVICES_SYNC_GATEWAY_URL: Optional; enables sync forwarding
        HARNESS_SERVICES_REQUEST_TIMEOUT_SECONDS: HTTP timeout (default: 30)
    """

    model_config = SettingsConfigDict(
        env_prefix="HARNESS_SERVICES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    identity_url: str = Field(default="http://localhost:2021/identity/v1")
    organization_url: str = Field(default="http://localhost:2023/office/v1")
    customer_url: str = Field(default="http://localhost:2024/customer/v1")
    accounting_url: str = Field(default="http://localhost:2025/accounting/v1")
    portfolio_url: str = Field(default="http://localhost:2026/portfolio/v1")
    cheques_url: str = Field(default="http://localhost:2027/cheques/v1")
    sync_gateway_url: str | None = Field(
        default=None, description="Sync gateway base URL; forwarding is off when unset"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout applied to every outbound HTTP call",
        gt=0,
    )


class Settings(BaseSettings):
    """Main harness settings aggregating all configuration sections."""

    model_config = SettingsConfigDict(
        env_prefix="HARNESS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Tenant Event Harness", description="Application name")
    log_level: str = Field(default="INFO", description="Minimum log level")

    @property
    def broker(self) -> BrokerSettings:
        """Get broker settings."""
        return get_broker_settings()


@lru_cache
def get_settings() -> Settings:
    """Get cached harness settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


@lru_cache
def get_broker_settings() -> BrokerSettings:
    """Get cached broker settings."""
    return BrokerSettings()


@lru_cache
def get_sync_user_settings() -> SyncUserSettings:
    """Get cached sync account settings."""
    return SyncUserSettings()


@lru_cache
def get_service_settings() -> ServiceSettings:
    """Get cached service endpoint settings."""
    return ServiceSettings()
