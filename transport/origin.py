"""
Origin header validation.

Requests without an Origin header come from non-browser MCP clients and are
allowed. Browser origins must be local or on the configured allow-list.
"""

import logging
from typing import Iterable, Optional

logger = logging.getLogger(__name__)

LOCAL_ORIGIN_MARKERS = ("localhost", "127.0.0.1")


def validate_origin(origin: Optional[str], allowed_origins: Iterable[str] = ()) -> bool:
    if not origin:
        return True

    if any(marker in origin for marker in LOCAL_ORIGIN_MARKERS):
        return True

    if origin in tuple(allowed_origins):
        logger.debug(f"Origin allowed by allow-list: {origin}")
        return True

    logger.warning(f"Rejected request from origin: {origin}")
    return False
