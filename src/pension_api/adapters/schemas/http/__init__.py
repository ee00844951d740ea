# Copyright (c) Pension API.
# SPDX-License-Identifier: MIT
"""HTTP Schemas package (Adapters Layer).

Purpose:
    Public, adapter-facing HTTP schema surface. Re-exports the error envelope
    and the calculation request/response schemas used by routers and
    presenters. ``BaseHTTPSchema`` stays internal to this package.

Layer:
    adapters/schemas/http
"""

from __future__ import annotations

from pension_api.adapters.schemas.http.calculation_schemas import (
    CalculationMutationHTTP,
    CalculationRequestHTTP,
    CalculationResponseHTTP,
    DossierCreationMutationHTTP,
    DossierMutationHTTP,
)
from pension_api.adapters.schemas.http.envelopes import ErrorEnvelope, ErrorObject

__all__ = [
    # Envelopes
    "ErrorEnvelope",
    "ErrorObject",
    # Calculation schemas
    "CalculationMutationHTTP",
    "CalculationRequestHTTP",
    "CalculationResponseHTTP",
    "DossierCreationMutationHTTP",
    "DossierMutationHTTP",
]
