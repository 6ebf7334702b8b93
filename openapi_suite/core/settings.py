#!/usr/bin/env python3
"""
settings.py — Centralized, typed settings for the OpenAPI/CDI integration suite.

Place at: openapi_suite/core/settings.py
Run from the repo root (folder that contains openapi_suite/).

What this does:
  - Loads connection parameters for the target application server from
    environment variables (prefix MPOA_) and an optional .env file.
  - Provides strong typing + validation using Pydantic v2 (pydantic-settings).
  - Exposes a cached accessor get_settings().

Common examples:

  # 1) Point the suite at a remote server and enable the live tests:
  export MPOA_SERVER_HOST=10.0.0.5 MPOA_RUN_INTEGRATION=true
  export MPOA_MANAGEMENT_USER=admin MPOA_MANAGEMENT_PASSWORD=secret

  # 2) Package the deployment from a Java build output:
  export MPOA_DEPLOYMENT_CLASSES_DIR=target/test-classes

  # 3) Or deploy a prebuilt archive instead:
  export MPOA_DEPLOYMENT_ARCHIVE=build/localServicesRouterDeployment.war

Notes:
  - MPOA_DEPLOYMENT_ARCHIVE wins over MPOA_DEPLOYMENT_CLASSES_DIR when both are set.
  - MPOA_DEPLOYMENT_CLASSES accepts a comma-separated list of class names.
"""

from __future__ import annotations

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


# ---------- Enums ----------

class Protocol(str, Enum):
    http = "http"
    https = "https"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


ROUTER_APPLICATION_CLASS = "org.jboss.eap.qe.microprofile.openapi.apps.routing.router.RouterApplication"
CONTACT_RESOURCE_CLASS = "org.jboss.eap.qe.microprofile.openapi.apps.routing.router.rest.legacy.Contact"


# ---------- Settings ----------

class Settings(BaseSettings):
    # Target server
    server_host: str = "127.0.0.1"
    http_port: int = 8080
    management_port: int = 9990
    protocol: Protocol = Protocol.http
    management_user: Optional[str] = None
    management_password: Optional[str] = None

    # OpenAPI
    openapi_path: str = "/openapi"

    # Deployment
    deployment_name: str = "localServicesRouterDeployment"
    deployment_classes_dir: Optional[Path] = None
    deployment_classes: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [ROUTER_APPLICATION_CLASS, CONTACT_RESOURCE_CLASS]
    )
    deployment_archive: Optional[Path] = None

    # Timeouts
    http_timeout_seconds: float = 30.0
    reload_timeout_seconds: float = 120.0

    # Observability
    log_level: LogLevel = LogLevel.INFO

    # Live suite switch
    run_integration: bool = False

    model_config = SettingsConfigDict(
        env_prefix="MPOA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ---------- Validators ----------

    @field_validator("deployment_classes", mode="before")
    @classmethod
    def _split_csv(cls, v: str | List[str] | None) -> List[str]:
        if v is None:
            return []
        if isinstance(v, list):
            return [s.strip() for s in v if s and str(s).strip()]
        # comma-separated string
        return [s.strip() for s in str(v).split(",") if s.strip()]

    @field_validator("http_port", "management_port")
    @classmethod
    def _port_range(cls, v: int) -> int:
        if not (1 <= v <= 65535):
            raise ValueError("port must be between 1 and 65535")
        return v

    @field_validator("http_timeout_seconds", "reload_timeout_seconds")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be > 0")
        return v

    @field_validator("openapi_path")
    @classmethod
    def _leading_slash(cls, v: str) -> str:
        return v if v.startswith("/") else "/" + v

    @property
    def has_credentials(self) -> bool:
        return bool(self.management_user)


# ---------- Accessor (cached) ----------

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached settings instance; call get_settings.cache_clear() after changing env."""
    return Settings()
