"""Pluggable session store backends behind a Protocol interface."""

from __future__ import annotations

from hours_import.core.config import AppSettings
from hours_import.core.protocols import ISessionStore
from hours_import.persistence.memory_backend import MemorySessionStore
from hours_import.persistence.redis_backend import RedisSessionStore


def create_session_store(settings: AppSettings | None = None) -> ISessionStore:
    """Create the session store selected by application settings.

    The memory backend suits a single-process deployment; the redis backend
    shares sessions between processes and lets Redis expire them.
    """
    if settings is None:
        settings = AppSettings()

    if settings.session.backend == "redis":
        return RedisSessionStore(
            host=settings.redis.host,
            port=settings.redis.port,
            db=settings.redis.db,
            ttl_seconds=settings.session.ttl_seconds,
            key_prefix=settings.session.key_prefix,
        )
    return MemorySessionStore(ttl_seconds=settings.session.ttl_seconds)
