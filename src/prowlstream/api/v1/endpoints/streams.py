"""Stream endpoint — Search Prowlarr for a title and return normalized streams.

The path mirrors the stream resource of media-center addons
(``/stream/{type}/{id}.json``), so the response can be consumed directly by
clients that speak that convention. Adapter failures do not fail the
request; they are listed under ``errors``.
"""

from __future__ import annotations

import logging
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from prowlstream.adapters.base.exceptions import ConfigurationError
from prowlstream.api.deps import get_service
from prowlstream.core.service import StreamService
from prowlstream.models.stream import Stream, StreamRequest
from prowlstream.models.user import UserConfig

logger = logging.getLogger(__name__)

router = APIRouter()


class StreamResponse(BaseModel):
    """Streams for one title plus any adapter errors."""

    streams: list[Stream] = Field(default_factory=list, description="Normalized streams")
    errors: list[str] = Field(default_factory=list, description="Adapter errors, one per failed adapter")


@router.get(
    "/stream/{media_type}/{media_id}.json",
    response_model=StreamResponse,
    response_model_exclude_none=True,
    summary="Search Streams",
    description=(
        "Search the configured Prowlarr instance for `media_id` and return one "
        "stream per release. The caller's IP is forwarded to Prowlarr via "
        "`X-Client-IP`, `X-Forwarded-For` and `X-Real-IP`."
    ),
    responses={
        400: {"description": "Prowlarr is not configured (missing API key)"},
        422: {"description": "Validation error — unsupported media type"},
    },
)
async def get_streams(
    media_type: Literal["movie", "series"],
    media_id: str,
    request: Request,
    service: StreamService = Depends(get_service),
) -> StreamResponse:
    user_config = UserConfig(requesting_ip=request.client.host if request.client else None)
    try:
        collection = await service.search(StreamRequest(type=media_type, id=media_id), user_config)
    except ConfigurationError as e:
        logger.warning("Stream search rejected: %s", e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    return StreamResponse(streams=collection.addon_streams, errors=collection.addon_errors)
