"""Raw release record as returned by Prowlarr's ``/api/v1/search``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, ValidatorFunctionWrapHandler, field_validator


class ProwlarrRelease(BaseModel):
    """A single search hit. Every field may be missing or null.

    A field whose value has the wrong type is read as missing, so one odd
    indexer record never costs the rest of the result list.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str | None = None
    magnet_url: str | None = Field(default=None, alias="magnetUrl")
    download_url: str | None = Field(default=None, alias="downloadUrl")
    info_hash: str | None = Field(default=None, alias="infoHash")
    size: int | None = None
    seeders: int | None = None
    indexer: str | None = None

    @field_validator("*", mode="wrap")
    @classmethod
    def _drop_invalid(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(v)
        except ValidationError:
            return None
