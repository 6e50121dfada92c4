"""Runtime configuration loaded from environment variables."""

import logging
import os
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from clair_adapter.consts import (
    DEFAULT_API_SERVER_ADDR,
    DEFAULT_CLAIR_TIMEOUT,
    DEFAULT_CLAIR_URL,
    DEFAULT_CLAIR_VERSION,
    DEFAULT_DB_UPDATED_AT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REGISTRY_TIMEOUT,
    LOG_FORMAT,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}


class AdapterSettings(BaseModel):
    """Settings for the adapter process."""

    clair_url: str = Field(default=DEFAULT_CLAIR_URL, description="Base URL of the Clair API")
    api_server_addr: str = Field(
        default=DEFAULT_API_SERVER_ADDR, description="host:port the API server binds to"
    )
    clair_timeout: float = Field(default=DEFAULT_CLAIR_TIMEOUT, gt=0)
    registry_timeout: float = Field(default=DEFAULT_REGISTRY_TIMEOUT, gt=0)
    registry_tls_verify: bool = Field(
        default=True, description="Verify TLS certificates of the registry"
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL)
    clair_version: str = Field(
        default=DEFAULT_CLAIR_VERSION, description="Clair version reported in scanner metadata"
    )
    db_updated_at: str = Field(
        default=DEFAULT_DB_UPDATED_AT,
        description="RFC3339 timestamp reported as the vulnerability database update time",
    )

    @field_validator("clair_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("db_updated_at")
    @classmethod
    def _validate_timestamp(cls, value: str) -> str:
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            raise ValueError(f"Timestamp '{value}' has no timezone")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level '{value}'")
        return level

    @property
    def api_host(self) -> str:
        host, _, _ = self.api_server_addr.rpartition(":")
        return host or "0.0.0.0"

    @property
    def api_port(self) -> int:
        _, _, port = self.api_server_addr.rpartition(":")
        return int(port)

    @classmethod
    def from_env(cls) -> "AdapterSettings":
        """Build settings from SCANNER_* environment variables.

        Unset variables fall back to the defaults in consts.py.
        """
        values: dict[str, object] = {}
        env_map = {
            "clair_url": "SCANNER_CLAIR_URL",
            "api_server_addr": "SCANNER_API_SERVER_ADDR",
            "clair_timeout": "SCANNER_CLAIR_TIMEOUT",
            "registry_timeout": "SCANNER_REGISTRY_TIMEOUT",
            "log_level": "SCANNER_LOG_LEVEL",
            "clair_version": "SCANNER_CLAIR_VERSION",
            "db_updated_at": "SCANNER_CLAIR_DB_UPDATED_AT",
        }
        for field, env_name in env_map.items():
            raw = os.getenv(env_name, "").strip()
            if raw:
                values[field] = raw

        tls_verify = os.getenv("SCANNER_REGISTRY_TLS_VERIFY", "").strip()
        if tls_verify:
            values["registry_tls_verify"] = tls_verify.lower() in _TRUE_VALUES

        return cls(**values)


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure root logging once for the process."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    # httpx logs every request URL at INFO; keep it quieter
    logging.getLogger("httpx").setLevel(logging.WARNING)
