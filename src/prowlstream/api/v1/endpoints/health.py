"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from prowlstream import __version__
from prowlstream.api.deps import get_service
from prowlstream.core.service import StreamService

router = APIRouter()


class HealthResponse(BaseModel):
    """System health check response."""

    status: str = Field(description="Health status (e.g. 'healthy')")
    version: str = Field(description="prowlstream server version")
    service: str = Field(description="Service name ('prowlstream')")
    prowlarr_url: str = Field(description="Configured Prowlarr base URL")
    proxy_enabled: bool = Field(description="Whether a forward proxy is configured")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="System Health Check",
    description="Returns server version and the configured Prowlarr endpoint. Does not contact Prowlarr.",
)
async def health_check(
    service: StreamService = Depends(get_service),
) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        service="prowlstream",
        prowlarr_url=service.settings.prowlarr.url,
        proxy_enabled=bool(service.settings.proxy.url),
    )
