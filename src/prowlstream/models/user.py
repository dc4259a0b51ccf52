"""Per-caller configuration passed through to adapters."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserConfig(BaseModel):
    """Caller configuration consumed by adapters."""

    model_config = ConfigDict(populate_by_name=True)

    requesting_ip: str | None = Field(
        default=None,
        alias="requestingIp",
        description="IP address of the originating client, forwarded to indexers",
    )
