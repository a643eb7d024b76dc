"""Webhook service configuration settings."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ironhook.database.database import DatabaseConfig
from ironhook.utils.errors import ConfigurationError


ENV_PREFIX = "HOOK_"

SUPPORTED_NOTIFICATION_METHODS = ("GET", "POST", "PUT", "PATCH")


@dataclass
class WebhookSettings:
    """Main webhook service settings."""

    # Database
    db_engine: str = "sqlite"
    db_dsn: str = ":memory:"
    db_echo: bool = False

    # Logging
    log_level: str = "info"

    # Outbound HTTP
    http_timeout_seconds: float = 3.0

    # Notifications are sent with a JSON body using this method
    notification_method: str = "GET"

    def __post_init__(self) -> None:
        self.notification_method = self.notification_method.upper()
        if self.notification_method not in SUPPORTED_NOTIFICATION_METHODS:
            raise ConfigurationError(
                message=f"Unsupported notification method: {self.notification_method}",
                details={"supported": list(SUPPORTED_NOTIFICATION_METHODS)},
            )
        if self.http_timeout_seconds <= 0:
            raise ConfigurationError(
                message="HTTP timeout must be positive",
                details={"http_timeout_seconds": self.http_timeout_seconds},
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "WebhookSettings":
        """Create settings from HOOK_* environment variables."""
        env = os.environ if environ is None else environ

        def get(name: str, default: str) -> str:
            return env.get(f"{ENV_PREFIX}{name}", default)

        raw_timeout = get("HTTP_TIMEOUT", "3")
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigurationError(
                message=f"Invalid {ENV_PREFIX}HTTP_TIMEOUT: {raw_timeout!r}",
            ) from e

        return cls(
            db_engine=get("DB_ENGINE", "sqlite"),
            db_dsn=get("DB_DSN", ":memory:"),
            db_echo=get("DB_ECHO", "false").lower() == "true",
            log_level=get("LOG_LEVEL", "info"),
            http_timeout_seconds=timeout,
            notification_method=get("NOTIFICATION_METHOD", "GET"),
        )

    def database_config(self) -> DatabaseConfig:
        """Database settings for the record store."""
        return DatabaseConfig(
            engine=self.db_engine,
            dsn=self.db_dsn,
            echo=self.db_echo,
        )
