"""API v1 Router — Stream search and health endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from prowlstream.api.v1.endpoints.health import router as health_router
from prowlstream.api.v1.endpoints.streams import router as streams_router

router = APIRouter(tags=["v1"])
router.include_router(streams_router)
router.include_router(health_router)
