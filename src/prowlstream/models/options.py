"""Options bundle accepted by the Prowlarr entry function."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProwlarrOptions(BaseModel):
    """User-supplied Prowlarr options.

    ``indexer_timeout`` is kept as text (milliseconds) because it arrives
    from free-form user configuration; the entry function parses it.
    """

    model_config = ConfigDict(populate_by_name=True)

    prowlarr_url: str | None = Field(default=None, alias="prowlarrUrl", description="Endpoint override")
    api_key: str = Field(default="", alias="apiKey", description="Prowlarr API key")
    override_name: str | None = Field(default=None, alias="overrideName", description="Display name override")
    indexer_timeout: str | None = Field(
        default=None,
        alias="indexerTimeout",
        description="Request timeout in milliseconds, as text",
    )
