"""Per-client request throttling."""

from __future__ import annotations

from slowapi import Limiter
from slowapi.util import get_remote_address

from moviedb.core.config import Settings


def build_limiter(settings: Settings) -> Limiter:
    """Limiter applying ``settings.rate_limit`` to every route, keyed by client address."""

    return Limiter(
        key_func=get_remote_address,
        default_limits=[settings.rate_limit],
        storage_uri=settings.rate_limit_storage_uri,
        enabled=settings.rate_limit_enabled,
    )
