"""Data models shared by adapters, the service layer and the API."""

from prowlstream.models.options import ProwlarrOptions
from prowlstream.models.release import ProwlarrRelease
from prowlstream.models.stream import BehaviorHints, Stream, StreamCollection, StreamRequest
from prowlstream.models.user import UserConfig

__all__ = [
    "BehaviorHints",
    "ProwlarrOptions",
    "ProwlarrRelease",
    "Stream",
    "StreamCollection",
    "StreamRequest",
    "UserConfig",
]
