# src/pension_api/config/settings.py
# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""Pension API Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated application configuration. Only adapters and
    infrastructure read the process environment; other layers receive values
    through dependency injection (the engine gets a ``MutationEngineConfig``).

Design:
    - Pydantic v2 BaseSettings with `extra='forbid'` to catch unknown env.
    - Explicit field declarations with constrained types and ranges.
    - Pension rule parameters (accrual rate, retirement age, full-service
      years) are configuration, not literals.
    - Singleton accessor `get_settings()` with LRU cache.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from functools import lru_cache

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed application configuration for the Pension API."""

    # ---------------------------
    # Core environment
    # ---------------------------
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )

    # Raw env for CORS; the parsed list is computed in a model validator.
    cors_allow_origins_raw: str | None = Field(
        default=None,
        description="Raw env for allowed CORS origins (comma-separated).",
        validation_alias="ALLOWED_ORIGINS",
    )

    cors_allow_origins: list[str] = Field(
        default_factory=list,
        description=(
            "Allowed CORS origins. Derived from ALLOWED_ORIGINS. "
            "In development/test, '*' is allowed; in production-like envs, '*' is rejected."
        ),
    )

    # ---------------------------
    # OpenAPI / docs
    # ---------------------------
    docs_url: str | None = Field(
        default="/docs",
        description="Swagger UI docs URL. Set to None to disable interactive docs.",
        validation_alias="DOCS_URL",
    )
    openapi_url: str | None = Field(
        default="/openapi.json",
        description="OpenAPI JSON schema URL. Set to None to disable OpenAPI exposure.",
        validation_alias="OPENAPI_URL",
    )

    # ---------------------------
    # Service identity / logging
    # ---------------------------
    service_name: str = Field(
        default="pension-api",
        description="Logical service name for logging.",
        validation_alias="SERVICE_NAME",
    )
    service_version: str = Field(
        default="0.1.0",
        description="Service version reported by the OpenAPI document.",
        validation_alias="SERVICE_VERSION",
    )
    log_level: str | None = Field(
        default=None,
        description="Override log level (e.g., 'DEBUG', 'INFO'). If not set, defaults are used.",
        validation_alias="LOG_LEVEL",
    )

    # ---------------------------
    # Pension rules
    # ---------------------------
    accrual_rate: Decimal = Field(
        default=Decimal("0.02"),
        ge=0,
        le=1,
        description="Fraction of the weighted average salary accrued per service year.",
        validation_alias="ACCRUAL_RATE",
    )
    retirement_age: Decimal = Field(
        default=Decimal(65),
        gt=0,
        description="Minimum age in years for retirement eligibility.",
        validation_alias="RETIREMENT_AGE",
    )
    full_service_years: Decimal = Field(
        default=Decimal(40),
        gt=0,
        description="Years of service that grant eligibility regardless of age.",
        validation_alias="FULL_SERVICE_YEARS",
    )

    # ---------------------------
    # Request limits
    # ---------------------------
    max_mutations: int = Field(
        default=1000,
        ge=1,
        le=100_000,
        description="Maximum number of mutations accepted in one calculation request.",
        validation_alias="MAX_MUTATIONS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def _compute_cors(self) -> Settings:
        """Compute the CORS list from the raw env value.

        Raises:
            ValueError: If '*' is configured outside development/test.
        """
        raw = (self.cors_allow_origins_raw or "").strip()
        entries = [e.strip() for e in raw.split(",") if e.strip()]
        if any(e == "*" for e in entries) and self.environment not in (
            Environment.DEVELOPMENT,
            Environment.TEST,
        ):
            raise ValueError(
                "'*' CORS origin is only allowed in development/test environments.",
            )
        self.cors_allow_origins = entries
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
    except ValidationError as exc:
        logger.exception("Invalid application configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc

    logger.info(
        "Settings initialized",
        extra={
            "extra": {
                "environment": settings.environment.value,
                "cors_count": len(settings.cors_allow_origins),
                "cors_has_wildcard": any(o == "*" for o in settings.cors_allow_origins),
                "docs": {"docs_url": settings.docs_url, "openapi_url": settings.openapi_url},
                "rules": {
                    "accrual_rate": str(settings.accrual_rate),
                    "retirement_age": str(settings.retirement_age),
                    "full_service_years": str(settings.full_service_years),
                },
                "max_mutations": settings.max_mutations,
            }
        },
    )
    return settings
