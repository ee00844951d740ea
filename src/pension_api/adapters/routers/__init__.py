"""Routers Package Export (Adapters Layer).

Purpose:
    Provide stable, explicit exports for the calculation router and the
    health router. The FastAPI application imports these names from this
    package during startup.

Layer:
    adapters/routers
"""

from __future__ import annotations

from .calculation_router import router as calculation_router
from .health_router import router as health_router

__all__ = ["calculation_router", "health_router"]
