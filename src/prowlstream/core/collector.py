"""Result collection — Run one adapter and fold failures into an error list."""

from __future__ import annotations

import logging
import time

from prowlstream.adapters.base.adapter import StreamAdapter
from prowlstream.adapters.base.exceptions import AdapterError
from prowlstream.models.stream import StreamCollection, StreamRequest

logger = logging.getLogger(__name__)


async def collect_streams(adapter: StreamAdapter, request: StreamRequest) -> StreamCollection:
    """Fetch streams from *adapter* without letting adapter failures escape.

    ``AdapterError`` is reported as a single ``"<name>: <message>"`` entry in
    ``addon_errors``; anything else is a bug and propagates.
    """
    start = time.monotonic()
    try:
        streams = await adapter.get_streams(request)
    except AdapterError as e:
        logger.error("%s failed for %s: %s", adapter.name, request.id, e)
        return StreamCollection(addon_errors=[f"{adapter.name}: {e}"])

    took_ms = int((time.monotonic() - start) * 1000)
    logger.info("%s returned %d streams for %s in %d ms", adapter.name, len(streams), request.id, took_ms)
    return StreamCollection(addon_streams=streams)
