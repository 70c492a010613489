"""
webhook_gateway.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for all layers.
- Accept the legacy deployment variable names (DISCORD_WEBHOOK_URLS, PORT, PROJECT_ID).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Gateway configuration.

    - Every field reads `GATEWAY_<FIELD>` from the environment.
    - A few fields also accept the variable names used by older deployments.
    """

    model_config = SettingsConfigDict(
        env_prefix="GATEWAY_",
        case_sensitive=False,
        populate_by_name=True,
    )

    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "webhook-gateway"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = Field(
        default=8080,
        validation_alias=AliasChoices("gateway_api_port", "port"),
    )

    # Forwarding table, "name=url;name2=url2". Parsed in `proxy.table`.
    webhook_urls: str = Field(
        default="",
        validation_alias=AliasChoices("gateway_webhook_urls", "discord_webhook_urls"),
    )
    forward_query_params: bool = False
    # Seconds; None keeps the httpx default.
    proxy_timeout: float | None = Field(default=None, gt=0)

    # Registry
    registry_backend: Literal["sql", "firestore"] = "sql"
    database_url: str = "sqlite+aiosqlite:///./gateway.db"
    firestore_project_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("gateway_firestore_project_id", "project_id"),
    )
    firestore_collection: str = "users"

    token_bytes: int = Field(default=10, ge=10)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Settings are validated eagerly; anything that depends on the *content* of a
# field (webhook URLs, backend-specific requirements) is checked by the code that
# consumes it and surfaces as `ConfigurationError` before the app serves traffic.
