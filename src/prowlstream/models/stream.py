"""Stream request and stream result models.

``Stream`` mirrors the stream object consumed by downstream aggregation
(camelCase keys on the wire). Serialize with ``by_alias=True`` and
``exclude_none=True`` to obtain the wire shape.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class StreamRequest(BaseModel):
    """A request for streams of a single title."""

    type: Literal["movie", "series"] = Field(default="movie", description="Media type")
    id: str = Field(description="Identifier used as the search term (e.g. 'tt0111161')", min_length=1)


class BehaviorHints(BaseModel):
    """Hints that help a player pick and label a stream."""

    model_config = ConfigDict(populate_by_name=True)

    filename: str | None = Field(default=None, description="Release file name")
    video_size: int | None = Field(default=None, alias="videoSize", description="Size in bytes")


class Stream(BaseModel):
    """Normalized stream produced by an adapter."""

    model_config = ConfigDict(populate_by_name=True)

    url: str | None = Field(default=None, description="Magnet URI or download link")
    info_hash: str | None = Field(default=None, alias="infoHash", description="BitTorrent info-hash")
    name: str | None = Field(default=None, description="Display name")
    description: str = Field(default="", description="Multi-line human-readable description")
    behavior_hints: BehaviorHints = Field(
        default_factory=BehaviorHints,
        alias="behaviorHints",
        description="Filename and size hints",
    )


class StreamCollection(BaseModel):
    """Streams gathered from one adapter together with its reported errors."""

    addon_streams: list[Stream] = Field(default_factory=list, description="Successfully mapped streams")
    addon_errors: list[str] = Field(default_factory=list, description="Human-readable adapter errors")
