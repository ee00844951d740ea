# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""
Base Router (Adapters Layer)

Purpose:
    Canonical APIRouter wrapper for the service's HTTP endpoints:
      - Stable prefixes and default tags.
      - Standard error response mapping using ErrorEnvelope.

Layer:
    adapters/routers
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any

from fastapi import APIRouter

from pension_api.adapters.schemas.http.envelopes import ErrorEnvelope
from pension_api.infrastructure.logging.logger import get_json_logger

_LOGGER = get_json_logger(__name__)

# Tag type accepted by FastAPI for APIRouter.tags
TagType = str | Enum


class BaseRouter(APIRouter):
    """Canonical router wrapper.

    Args:
        prefix: Route prefix (e.g., "/calculation-requests").
        tags: Default tags applied to all routes mounted on this router.
        **kwargs: Additional APIRouter kwargs.
    """

    def __init__(
        self,
        *,
        prefix: str,
        tags: Sequence[TagType] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            prefix=prefix,
            tags=list(tags) if tags is not None else None,
            **kwargs,
        )
        _LOGGER.debug(
            "router_initialized",
            extra={"extra": {"prefix": prefix, "tags": [str(t) for t in tags or []]}},
        )

    @staticmethod
    def std_error_responses() -> dict[int | str, dict[str, Any]]:
        """Return the canonical error response mapping for endpoints.

        Use in routes via:

            responses=BaseRouter.std_error_responses()
        """
        return {
            400: {"model": ErrorEnvelope, "description": "Bad request."},
            422: {"model": ErrorEnvelope, "description": "Unprocessable content."},
            500: {"model": ErrorEnvelope, "description": "Internal server error."},
        }
